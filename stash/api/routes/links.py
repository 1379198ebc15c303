"""Link endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from stash.api.auth import get_current_user_id
from stash.api.errors import not_found
from stash.api.schemas import (
    DeleteResponse,
    LinkCreate,
    LinkEnvelope,
    LinkListResponse,
    LinkResponse,
    LinkUpdate,
)
from stash.db import Link, get_db

router = APIRouter()


def _get_owned_link(db: Session, link_id: str, user_id: str) -> Link:
    """Load a link the caller owns. Other users' rows look missing."""
    link = db.query(Link).filter(Link.id == link_id).first()
    if not link or link.user_id != user_id:
        raise not_found()
    return link


@router.get("", response_model=LinkListResponse)
def list_links(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """List the caller's links, newest first."""
    links = (
        db.query(Link)
        .filter(Link.user_id == user_id)
        .order_by(Link.created_at.desc())
        .all()
    )
    return LinkListResponse(data=[LinkResponse.model_validate(link) for link in links])


@router.post("", response_model=LinkEnvelope, status_code=201)
def create_link(
    data: LinkCreate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Save a new link."""
    link = Link(user_id=user_id, **data.model_dump())
    db.add(link)
    db.commit()
    db.refresh(link)
    return LinkEnvelope(data=LinkResponse.model_validate(link))


@router.put("/{link_id}", response_model=LinkEnvelope)
def update_link(
    link_id: str,
    data: LinkUpdate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Update the given fields of a link."""
    link = _get_owned_link(db, link_id, user_id)

    for field, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(link, field, value)

    db.commit()
    db.refresh(link)
    return LinkEnvelope(data=LinkResponse.model_validate(link))


@router.delete("/{link_id}", response_model=DeleteResponse)
def delete_link(
    link_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Delete a link."""
    link = _get_owned_link(db, link_id, user_id)
    db.delete(link)
    db.commit()
    return DeleteResponse()
