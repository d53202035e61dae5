from __future__ import annotations

import logging
from dataclasses import dataclass

from rental_storefront.application import messages
from rental_storefront.application.errors import StorefrontError
from rental_storefront.application.ports.assistant_port import ChatPort
from rental_storefront.domain.entities.assistant import ChatMessage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChatResult:
    status: str  # "ANSWERED" | "ERROR"
    reply: str | None = None
    message: str | None = None


class ChatWithAssistantUseCase:
    """Keeps the conversation history and sends it along with each new message."""

    def __init__(self, chat: ChatPort) -> None:
        self.chat = chat
        self.history: list[ChatMessage] = []

    def execute(self, message: str) -> ChatResult:
        text = (message or "").strip()
        if not text:
            return ChatResult("ERROR", message=messages.CHAT_FAILED)
        try:
            reply = self.chat.send(text, tuple(self.history))
        except StorefrontError as exc:
            logger.warning("chat_failed error=%s", exc)
            return ChatResult("ERROR", message=messages.describe_error(exc, messages.CHAT_FAILED))
        self.history.append(ChatMessage("user", text))
        self.history.append(ChatMessage("assistant", reply))
        return ChatResult("ANSWERED", reply=reply)

    def reset(self) -> None:
        self.history.clear()
