from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class RedeemIn(BaseModel):
    code: str
    email: str


class CodeStatusOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    code_preview: str
    grant_type: str
    grant_value: str
    label: str
    expires_at: Optional[datetime] = None
    expired: bool
    time_remaining: str


class RentalOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    rental_id: str
    expires_at: datetime
    signed_url: Optional[str] = None


class SessionOut(BaseModel):
    customer_email: Optional[str] = None
    has_access: bool
    codes: list[CodeStatusOut]
    rentals: dict[str, RentalOut]


class MovieOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    slug: str
    description: Optional[str] = None
    thumbnail_url: Optional[str] = None
    preview_url: Optional[str] = None
    rental_duration_hours: float
    is_free_preview: bool = False
    category: Optional[str] = None
    tags: list[str] = Field(default_factory=list)


class CategoryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    slug: str
    label: str
    order: int = 0


class PublicPreviewOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    thumbnail_url: str
    preview_url: str
    embed_url: str
    duration: Optional[float] = None


class CategoryGroupOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    slug: str
    label: str
    movies: list[MovieOut]


class CatalogOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    recent: list[MovieOut]
    groups: list[CategoryGroupOut]
    loading: bool = False
    error: Optional[str] = None


class WatchOut(BaseModel):
    status: str
    movie_id: str
    signed_url: Optional[str] = None
    message: Optional[str] = None


class PreviewingIn(BaseModel):
    movie_id: Optional[str] = None


class ChatIn(BaseModel):
    message: str


class ChatOut(BaseModel):
    reply: str


class SurveyIn(BaseModel):
    email: Optional[str] = None
    genres: list[str] = Field(default_factory=list)
    like_more: list[str] = Field(default_factory=list)
    like_less: list[str] = Field(default_factory=list)
    frequency: Optional[str] = None


class CategoryIn(BaseModel):
    slug: str
    label: str
    order: Optional[int] = None


class CategoryUpdateIn(BaseModel):
    label: Optional[str] = None
    order: Optional[int] = None
    new_slug: Optional[str] = None


class MovieUpdateIn(BaseModel):
    category: Optional[str] = None
    title: Optional[str] = None
    is_free_preview: Optional[bool] = None
    tags: Optional[list[str]] = None
