from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


def _number(value: Any, default: float = 0.0) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        return default
    return float(value)


def _text(value: Any) -> str | None:
    return value if isinstance(value, str) and value else None


@dataclass(frozen=True)
class Movie:
    id: str
    title: str
    slug: str
    library_id: str
    video_id: str
    video_path: str
    rental_duration_hours: float
    description: str | None = None
    thumbnail_url: str | None = None
    preview_url: str | None = None
    is_free_preview: bool = False
    category: str | None = None
    tags: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Movie":
        tags = payload.get("tags")
        return cls(
            id=str(payload.get("_id") or payload.get("id") or ""),
            title=str(payload.get("title") or ""),
            slug=str(payload.get("slug") or ""),
            library_id=str(payload.get("bunnyLibraryId") or ""),
            video_id=str(payload.get("bunnyVideoId") or ""),
            video_path=str(payload.get("videoPath") or ""),
            rental_duration_hours=_number(payload.get("rentalDurationHours")),
            description=_text(payload.get("description")),
            thumbnail_url=_text(payload.get("thumbnailUrl")),
            preview_url=_text(payload.get("previewUrl")),
            is_free_preview=bool(payload.get("isFreePreview", False)),
            category=_text(payload.get("category")),
            tags=tuple(t for t in tags if isinstance(t, str)) if isinstance(tags, list) else (),
        )


@dataclass(frozen=True)
class Category:
    id: str
    slug: str
    label: str
    order: int = 0

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Category":
        return cls(
            id=str(payload.get("_id") or payload.get("id") or ""),
            slug=str(payload.get("slug") or ""),
            label=str(payload.get("label") or ""),
            order=int(_number(payload.get("order"))),
        )


@dataclass(frozen=True)
class PublicPreview:
    """Preview served straight from the public video library, not the catalog."""

    id: str
    title: str
    thumbnail_url: str
    preview_url: str
    embed_url: str
    duration: float | None = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "PublicPreview":
        duration = payload.get("duration")
        return cls(
            id=str(payload.get("id") or ""),
            title=str(payload.get("title") or ""),
            thumbnail_url=str(payload.get("thumbnailUrl") or ""),
            preview_url=str(payload.get("previewUrl") or ""),
            embed_url=str(payload.get("embedUrl") or ""),
            duration=float(duration) if isinstance(duration, (int, float)) else None,
        )
