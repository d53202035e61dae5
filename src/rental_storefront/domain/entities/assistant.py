from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

ChatRole = Literal["user", "assistant"]


@dataclass(frozen=True)
class ChatMessage:
    role: ChatRole
    content: str

    def to_payload(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass(frozen=True)
class SurveyAnswers:
    genres: tuple[str, ...] = field(default_factory=tuple)
    like_more: tuple[str, ...] = field(default_factory=tuple)
    like_less: tuple[str, ...] = field(default_factory=tuple)
    frequency: str | None = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {}
        if self.genres:
            payload["genres"] = list(self.genres)
        if self.like_more:
            payload["likeMore"] = list(self.like_more)
        if self.like_less:
            payload["likeLess"] = list(self.like_less)
        if self.frequency:
            payload["frequency"] = self.frequency
        return payload
