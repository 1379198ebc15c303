"""Records returned by the gateway and the palette's search results."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict

SNIPPET_PREVIEW_CHARS = 80


# Gateway records
class LinkRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    label: str
    url: str
    category: str = "general"


class SnippetRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    title: str
    body: str
    tags: list[str] = []


class ResumeRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    label: str
    role_type: str | None = None


class SignedUrl(BaseModel):
    url: str
    expiresAt: datetime


# Search results
class ResultKind(str, Enum):
    LINK = "link"
    SNIPPET = "snippet"
    RESUME = "resume"


@dataclass(frozen=True)
class CopyPayload:
    """Text to put on the clipboard."""

    text: str


@dataclass(frozen=True)
class OpenReference:
    """A resume to open through a freshly signed URL."""

    resume_id: str


@dataclass(frozen=True)
class SearchResult:
    """One row of the command palette."""

    kind: ResultKind
    id: str
    title: str
    subtitle: str
    activation: CopyPayload | OpenReference

    @classmethod
    def from_link(cls, link: LinkRecord) -> "SearchResult":
        return cls(
            kind=ResultKind.LINK,
            id=link.id,
            title=link.label,
            subtitle=link.url,
            activation=CopyPayload(link.url),
        )

    @classmethod
    def from_snippet(cls, snippet: SnippetRecord) -> "SearchResult":
        return cls(
            kind=ResultKind.SNIPPET,
            id=snippet.id,
            title=snippet.title,
            subtitle=snippet.body[:SNIPPET_PREVIEW_CHARS] + "...",
            activation=CopyPayload(snippet.body),
        )

    @classmethod
    def from_resume(cls, resume: ResumeRecord) -> "SearchResult":
        return cls(
            kind=ResultKind.RESUME,
            id=resume.id,
            title=resume.label,
            subtitle=resume.role_type or "Resume",
            activation=OpenReference(resume.id),
        )
