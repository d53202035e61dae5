from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from rental_storefront.application.errors import ApiError
from rental_storefront.application.ports.assistant_port import ChatPort, SurveyPort
from rental_storefront.application.ports.http_client_port import HttpClientPort
from rental_storefront.domain.entities.assistant import ChatMessage, SurveyAnswers
from rental_storefront.infrastructure.adapters.api.envelope import unwrap_mapping


class ChatAdapter(ChatPort):
    def __init__(self, http: HttpClientPort) -> None:
        self.http = http

    def send(self, message: str, history: Sequence[ChatMessage]) -> str:
        resp = self.http.post(
            "/api/chat",
            json={"message": message, "history": [m.to_payload() for m in history]},
        )
        reply = unwrap_mapping(resp).get("response")
        if not isinstance(reply, str):
            raise ApiError(f"Missing assistant response from {resp.url}", status_code=resp.status_code)
        return reply


class SurveyAdapter(SurveyPort):
    def __init__(self, http: HttpClientPort) -> None:
        self.http = http

    def submit(self, answers: SurveyAnswers, email: str | None = None) -> Any:
        body: dict[str, Any] = {"answers": answers.to_payload()}
        if email:
            body["email"] = email
        resp = self.http.post("/analytics/survey", json=body)
        try:
            payload = resp.json()
        except ValueError:
            return None
        return payload.get("data") if isinstance(payload, Mapping) else None
