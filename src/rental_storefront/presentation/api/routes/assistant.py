from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from rental_storefront.bootstrap import Storefront
from rental_storefront.domain.entities.assistant import SurveyAnswers
from rental_storefront.presentation.api.dependencies import get_storefront
from rental_storefront.presentation.api.schemas import ChatIn, ChatOut, SurveyIn

router = APIRouter(prefix="/v1/assistant", tags=["assistant"])


@router.post("/chat", response_model=ChatOut)
def chat(body: ChatIn, storefront: Storefront = Depends(get_storefront)) -> ChatOut:
    result = storefront.chat.execute(body.message)
    if result.reply is None:
        raise HTTPException(status_code=502, detail=result.message)
    return ChatOut(reply=result.reply)


@router.post("/survey")
def survey(body: SurveyIn, storefront: Storefront = Depends(get_storefront)) -> dict[str, str]:
    answers = SurveyAnswers(
        genres=tuple(body.genres),
        like_more=tuple(body.like_more),
        like_less=tuple(body.like_less),
        frequency=body.frequency,
    )
    result = storefront.survey.execute(answers, body.email)
    if result.status != "SUBMITTED":
        raise HTTPException(status_code=502, detail=result.message)
    return {"status": result.status}
