from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol

from rental_storefront.domain.entities.assistant import ChatMessage, SurveyAnswers


class ChatPort(Protocol):
    def send(self, message: str, history: Sequence[ChatMessage]) -> str: ...


class SurveyPort(Protocol):
    def submit(self, answers: SurveyAnswers, email: str | None = None) -> Any: ...
