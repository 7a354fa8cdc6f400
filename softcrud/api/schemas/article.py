"""Article request/response schemas."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

TITLE_MAX_LENGTH = 200


def _strip(v: str) -> str:
    return v.strip() if isinstance(v, str) else v


class CreateArticleRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str = Field(min_length=1, max_length=TITLE_MAX_LENGTH)
    body: str = ""

    @field_validator("title", mode="before")
    @classmethod
    def _strip_whitespace(cls, v: str) -> str:
        return _strip(v)


class UpdateArticleRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str = Field(default=None, min_length=1, max_length=TITLE_MAX_LENGTH)
    body: str = Field(default=None)

    @field_validator("title", mode="before")
    @classmethod
    def _strip_whitespace(cls, v: str) -> str:
        return _strip(v)


class ArticleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    title: str
    body: str
    deleted: bool
    created_at: datetime
    updated_at: datetime
