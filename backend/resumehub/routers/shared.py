"""Shared resumes router — public snapshot reads and the consistency sweep."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from resumehub.config import settings
from resumehub.database import as_utc, get_db
from resumehub.middleware.auth import get_current_identity
from resumehub.middleware.rate_limit import limiter
from resumehub.models.shared_resume import SharedResume
from resumehub.schemas.auth import Identity
from resumehub.schemas.resume import ReconcileResponse, ResumeContent, SharedResumeResponse
from resumehub.services import profile_service, share_service

router = APIRouter(prefix="/api/shared", tags=["shared"])


def _shared_to_response(shared: SharedResume) -> SharedResumeResponse:
    return SharedResumeResponse(
        resume_id=shared.resume_id,
        owner_id=shared.owner_id,
        title=shared.title,
        content=ResumeContent(**shared.content),
        template_id=shared.template_id,
        public_url=shared.public_url,
        view_count=shared.view_count,
        created_at=as_utc(shared.created_at).isoformat(),
        expires_at=as_utc(shared.expires_at).isoformat() if shared.expires_at else None,
    )


@router.get("/{resume_id}", response_model=SharedResumeResponse)
@limiter.limit(settings.SHARED_VIEW_RATE_LIMIT)
def view_shared_resume(
    resume_id: str,
    request: Request,
    db: Session = Depends(get_db),
):
    """Public view of a shared resume. No sign-in needed; each call counts as a view."""
    return _shared_to_response(share_service.get_shared_resume(db, resume_id))


@router.post("/reconcile", response_model=ReconcileResponse)
def reconcile(
    owner_id: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    identity: Optional[Identity] = Depends(get_current_identity),
):
    """Repair is_public flags and orphaned snapshots (admin only)."""
    profile_service.require_admin(db, identity)
    return ReconcileResponse(**share_service.reconcile_sharing(db, owner_id))
