"""Resume endpoints."""

import logging
import uuid
from datetime import UTC, datetime, timedelta

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from stash.api.auth import get_current_user_id
from stash.api.errors import (
    STORAGE_ERROR,
    ApiError,
    first_error_message,
    not_found,
    validation_error,
)
from stash.api.limiter import limiter
from stash.api.schemas import (
    DeleteResponse,
    ResumeEnvelope,
    ResumeListResponse,
    ResumeResponse,
    ResumeUpload,
    SignedUrlResponse,
)
from stash.config import settings
from stash.db import Resume, get_db
from stash.storage import BlobStore, StorageError, get_blob_store

logger = logging.getLogger(__name__)

ALLOWED_FILE_TYPE = "application/pdf"

router = APIRouter()


def _get_owned_resume(db: Session, resume_id: str, user_id: str) -> Resume:
    resume = db.query(Resume).filter(Resume.id == resume_id).first()
    if not resume or resume.user_id != user_id:
        raise not_found()
    return resume


@router.get("", response_model=ResumeListResponse)
def list_resumes(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """List resume metadata, newest first. Storage paths stay server-side."""
    resumes = (
        db.query(Resume)
        .filter(Resume.user_id == user_id)
        .order_by(Resume.created_at.desc())
        .all()
    )
    return ResumeListResponse(data=[ResumeResponse.model_validate(r) for r in resumes])


@router.post("", response_model=ResumeEnvelope, status_code=201)
@limiter.limit(settings.upload_rate_limit)
async def upload_resume(
    request: Request,
    file: UploadFile | None = File(None),
    label: str | None = Form(None),
    role_type: str | None = Form(None),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    blob_store: BlobStore = Depends(get_blob_store),
):
    """Upload a resume PDF with its label and role type."""
    try:
        meta = ResumeUpload(label=label or "", role_type=role_type)
    except ValidationError as e:
        raise validation_error(first_error_message(e.errors())) from e

    if file is None:
        raise validation_error("File is required")
    if file.content_type != ALLOWED_FILE_TYPE:
        raise validation_error("Only PDF files are allowed")

    content = await file.read()
    if len(content) > settings.max_resume_bytes:
        max_mb = settings.max_resume_bytes // (1024 * 1024)
        raise validation_error(f"File must be under {max_mb}MB")

    storage_path = f"{user_id}/{uuid.uuid4()}.pdf"
    try:
        blob_store.upload(storage_path, content, ALLOWED_FILE_TYPE)
    except StorageError as e:
        logger.error(f"Resume upload failed for {storage_path}: {e}")
        raise ApiError(500, f"Failed to upload file: {e}", STORAGE_ERROR) from e

    resume = Resume(
        user_id=user_id,
        label=meta.label,
        role_type=meta.role_type,
        storage_path=storage_path,
    )
    try:
        db.add(resume)
        db.commit()
        db.refresh(resume)
    except SQLAlchemyError:
        db.rollback()
        # Don't leave an orphaned blob behind
        try:
            blob_store.remove([storage_path])
        except StorageError as e:
            logger.warning(f"Could not remove blob {storage_path} after failed insert: {e}")
        raise

    logger.info(f"Stored resume {resume.id} ({len(content)} bytes)")
    return ResumeEnvelope(data=ResumeResponse.model_validate(resume))


@router.delete("/{resume_id}", response_model=DeleteResponse)
def delete_resume(
    resume_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    blob_store: BlobStore = Depends(get_blob_store),
):
    """Delete a resume and its file."""
    resume = _get_owned_resume(db, resume_id, user_id)

    try:
        blob_store.remove([resume.storage_path])
    except StorageError as e:
        logger.warning(f"Could not remove blob {resume.storage_path}: {e}")

    db.delete(resume)
    db.commit()
    return DeleteResponse()


@router.get("/{resume_id}/url", response_model=SignedUrlResponse)
def get_resume_url(
    resume_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    blob_store: BlobStore = Depends(get_blob_store),
):
    """Issue a fresh, time-limited URL for viewing a resume."""
    resume = _get_owned_resume(db, resume_id, user_id)

    ttl = settings.signed_url_ttl
    try:
        url = blob_store.create_signed_url(resume.storage_path, ttl)
    except StorageError as e:
        logger.error(f"Signed URL issuance failed for resume {resume_id}: {e}")
        raise ApiError(500, "Failed to generate URL", STORAGE_ERROR) from e

    return SignedUrlResponse(url=url, expiresAt=datetime.now(UTC) + timedelta(seconds=ttl))
