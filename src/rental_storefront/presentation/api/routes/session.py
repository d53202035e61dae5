from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from rental_storefront.bootstrap import Storefront
from rental_storefront.presentation.api.dependencies import get_storefront
from rental_storefront.presentation.api.metrics import CODE_REDEMPTIONS
from rental_storefront.presentation.api.schemas import CodeStatusOut, RedeemIn, RentalOut, SessionOut

router = APIRouter(prefix="/v1/session", tags=["session"])


def _session_out(storefront: Storefront) -> SessionOut:
    store = storefront.session
    snapshot = store.snapshot()
    return SessionOut(
        customer_email=snapshot.customer_email,
        has_access=bool(store.get_active_access()),
        codes=[CodeStatusOut.model_validate(c) for c in store.codes_with_status()],
        rentals={movie_id: RentalOut.model_validate(r) for movie_id, r in snapshot.rentals.items()},
    )


@router.get("", response_model=SessionOut)
def get_session(storefront: Storefront = Depends(get_storefront)) -> SessionOut:
    return _session_out(storefront)


@router.post("/codes", response_model=CodeStatusOut)
def redeem_code(body: RedeemIn, storefront: Storefront = Depends(get_storefront)) -> CodeStatusOut:
    result = storefront.redeem.execute(body.code, body.email)
    CODE_REDEMPTIONS.labels(status=result.status).inc()
    if result.access is None:
        raise HTTPException(status_code=400, detail=result.message)
    status = next(s for s in storefront.session.codes_with_status() if s.code == result.access.code)
    return CodeStatusOut.model_validate(status)


@router.delete("/codes/{code}")
def remove_code(code: str, storefront: Storefront = Depends(get_storefront)) -> dict[str, bool]:
    return {"removed": storefront.session.remove_code(code)}


@router.delete("", response_model=SessionOut)
def logout(storefront: Storefront = Depends(get_storefront)) -> SessionOut:
    storefront.session.clear_session()
    storefront.chat.reset()
    return _session_out(storefront)
