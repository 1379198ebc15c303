"""API request/response schemas."""

from datetime import datetime
from typing import Annotated

from pydantic import AnyUrl, BaseModel, Field, TypeAdapter, ValidationError, field_validator

_url_adapter = TypeAdapter(AnyUrl)


def _check_url(value: str) -> str:
    """Validate an absolute URL but keep the caller's exact spelling."""
    try:
        _url_adapter.validate_python(value)
    except ValidationError:
        raise ValueError("Must be a valid URL") from None
    return value


Tag = Annotated[str, Field(max_length=50)]


# Link schemas
class LinkCreate(BaseModel):
    label: str = Field(max_length=100)
    url: str
    category: str = Field(default="general", max_length=50)
    icon: str | None = Field(default=None, max_length=10)

    @field_validator("label")
    @classmethod
    def label_required(cls, v: str) -> str:
        if not v:
            raise ValueError("Label is required")
        return v

    @field_validator("url")
    @classmethod
    def url_valid(cls, v: str) -> str:
        return _check_url(v)


class LinkUpdate(BaseModel):
    label: str | None = Field(default=None, min_length=1, max_length=100)
    url: str | None = None
    category: str | None = Field(default=None, max_length=50)
    icon: str | None = Field(default=None, max_length=10)

    @field_validator("url")
    @classmethod
    def url_valid(cls, v: str | None) -> str | None:
        return None if v is None else _check_url(v)


class LinkResponse(BaseModel):
    id: str
    user_id: str
    label: str
    url: str
    category: str
    icon: str | None
    created_at: datetime

    class Config:
        from_attributes = True


class LinkEnvelope(BaseModel):
    data: LinkResponse


class LinkListResponse(BaseModel):
    data: list[LinkResponse]


# Snippet schemas
class SnippetCreate(BaseModel):
    title: str = Field(max_length=200)
    body: str = Field(max_length=10000)
    tags: list[Tag] = Field(default_factory=list, max_length=10)

    @field_validator("title")
    @classmethod
    def title_required(cls, v: str) -> str:
        if not v:
            raise ValueError("Title is required")
        return v

    @field_validator("body")
    @classmethod
    def body_required(cls, v: str) -> str:
        if not v:
            raise ValueError("Body is required")
        return v


class SnippetUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=200)
    body: str | None = Field(default=None, min_length=1, max_length=10000)
    tags: list[Tag] | None = Field(default=None, max_length=10)


class SnippetResponse(BaseModel):
    id: str
    user_id: str
    title: str
    body: str
    tags: list[str]
    created_at: datetime

    class Config:
        from_attributes = True


class SnippetEnvelope(BaseModel):
    data: SnippetResponse


class SnippetListResponse(BaseModel):
    data: list[SnippetResponse]


# Resume schemas
class ResumeUpload(BaseModel):
    label: str = Field(max_length=100)
    role_type: str | None = Field(default=None, max_length=100)

    @field_validator("label")
    @classmethod
    def label_required(cls, v: str) -> str:
        if not v:
            raise ValueError("Label is required")
        return v

    @field_validator("role_type")
    @classmethod
    def blank_role_is_none(cls, v: str | None) -> str | None:
        return v or None


class ResumeResponse(BaseModel):
    id: str
    user_id: str
    label: str
    role_type: str | None
    created_at: datetime

    class Config:
        from_attributes = True


class ResumeEnvelope(BaseModel):
    data: ResumeResponse


class ResumeListResponse(BaseModel):
    data: list[ResumeResponse]


class SignedUrlResponse(BaseModel):
    url: str
    expiresAt: datetime


# Shared
class DeleteResponse(BaseModel):
    success: bool = True
