"""Snippet endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy import or_
from sqlalchemy.orm import Session

from stash.api.auth import get_current_user_id
from stash.api.errors import not_found
from stash.api.schemas import (
    DeleteResponse,
    SnippetCreate,
    SnippetEnvelope,
    SnippetListResponse,
    SnippetResponse,
    SnippetUpdate,
)
from stash.db import Snippet, get_db

router = APIRouter()


def _get_owned_snippet(db: Session, snippet_id: str, user_id: str) -> Snippet:
    snippet = db.query(Snippet).filter(Snippet.id == snippet_id).first()
    if not snippet or snippet.user_id != user_id:
        raise not_found()
    return snippet


@router.get("", response_model=SnippetListResponse)
def list_snippets(
    search: str | None = None,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """List the caller's snippets, optionally filtered by a title/body substring."""
    query = db.query(Snippet).filter(Snippet.user_id == user_id)

    if search:
        # autoescape so % and _ in the search text match literally
        query = query.filter(
            or_(
                Snippet.title.icontains(search, autoescape=True),
                Snippet.body.icontains(search, autoescape=True),
            )
        )

    snippets = query.order_by(Snippet.created_at.desc()).all()
    return SnippetListResponse(data=[SnippetResponse.model_validate(s) for s in snippets])


@router.post("", response_model=SnippetEnvelope, status_code=201)
def create_snippet(
    data: SnippetCreate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Save a new snippet."""
    snippet = Snippet(user_id=user_id, **data.model_dump())
    db.add(snippet)
    db.commit()
    db.refresh(snippet)
    return SnippetEnvelope(data=SnippetResponse.model_validate(snippet))


@router.put("/{snippet_id}", response_model=SnippetEnvelope)
def update_snippet(
    snippet_id: str,
    data: SnippetUpdate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Update the given fields of a snippet."""
    snippet = _get_owned_snippet(db, snippet_id, user_id)

    for field, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(snippet, field, value)

    db.commit()
    db.refresh(snippet)
    return SnippetEnvelope(data=SnippetResponse.model_validate(snippet))


@router.delete("/{snippet_id}", response_model=DeleteResponse)
def delete_snippet(
    snippet_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Delete a snippet."""
    snippet = _get_owned_snippet(db, snippet_id, user_id)
    db.delete(snippet)
    db.commit()
    return DeleteResponse()
