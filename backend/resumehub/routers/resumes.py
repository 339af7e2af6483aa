"""Resumes router — owner-scoped CRUD and sharing controls."""

from typing import Optional

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.orm import Session

from resumehub.database import as_utc, get_db
from resumehub.middleware.auth import get_current_identity
from resumehub.models.resume import Resume
from resumehub.schemas.auth import Identity
from resumehub.schemas.resume import (
    ResumeContent,
    ResumeCreate,
    ResumeCreatedResponse,
    ResumeDisplaySettings,
    ResumeResponse,
    ResumeUpdate,
    ShareRequest,
    ShareResponse,
    VersionEntry,
)
from resumehub.services import analytics_service, resume_service, share_service

router = APIRouter(prefix="/api/resumes", tags=["resumes"])


def _resume_to_response(resume: Resume) -> ResumeResponse:
    return ResumeResponse(
        id=resume.id,
        owner_id=resume.owner_id,
        title=resume.title,
        template_id=resume.template_id,
        is_public=resume.is_public,
        content=ResumeContent(**resume.content),
        settings=ResumeDisplaySettings(**resume.settings),
        version=resume.version,
        versions=[
            VersionEntry(
                version_number=v.version_number,
                timestamp=as_utc(v.timestamp).isoformat(),
                changes=v.changes,
            )
            for v in resume.versions
        ],
        created_at=as_utc(resume.created_at).isoformat(),
        updated_at=as_utc(resume.updated_at).isoformat(),
    )


@router.get("", response_model=list[ResumeResponse])
def list_resumes(
    db: Session = Depends(get_db),
    identity: Optional[Identity] = Depends(get_current_identity),
):
    """List the caller's resumes, most recently updated first."""
    return [_resume_to_response(r) for r in resume_service.get_resumes(db, identity)]


@router.post("", response_model=ResumeCreatedResponse, status_code=201)
def create_resume(
    req: ResumeCreate,
    request: Request,
    db: Session = Depends(get_db),
    identity: Optional[Identity] = Depends(get_current_identity),
):
    resume_id = resume_service.create_resume(db, identity, req)
    analytics_service.log_event(
        db, identity, "resume_created",
        {"resume_id": resume_id, "template_id": req.template_id or ""},
        user_agent=request.headers.get("user-agent"),
    )
    return ResumeCreatedResponse(id=resume_id)


@router.get("/{resume_id}", response_model=ResumeResponse)
def get_resume(
    resume_id: str,
    db: Session = Depends(get_db),
    identity: Optional[Identity] = Depends(get_current_identity),
):
    return _resume_to_response(resume_service.get_resume_by_id(db, identity, resume_id))


@router.patch("/{resume_id}", response_model=ResumeResponse)
def update_resume(
    resume_id: str,
    req: ResumeUpdate,
    db: Session = Depends(get_db),
    identity: Optional[Identity] = Depends(get_current_identity),
):
    """Save changes as a new version. Send expected_version to guard against stale edits."""
    resume = resume_service.update_resume(db, identity, resume_id, req)
    return _resume_to_response(resume)


@router.delete("/{resume_id}", status_code=204)
def delete_resume(
    resume_id: str,
    request: Request,
    db: Session = Depends(get_db),
    identity: Optional[Identity] = Depends(get_current_identity),
):
    resume_service.delete_resume(db, identity, resume_id)
    analytics_service.log_event(
        db, identity, "resume_deleted", {"resume_id": resume_id},
        user_agent=request.headers.get("user-agent"),
    )
    return Response(status_code=204)


# ── Sharing ───────────────────────────────────────────────────────────────────

@router.post("/{resume_id}/share", response_model=ShareResponse)
def share_resume(
    resume_id: str,
    request: Request,
    req: Optional[ShareRequest] = None,
    db: Session = Depends(get_db),
    identity: Optional[Identity] = Depends(get_current_identity),
):
    """Publish a snapshot. Omit expires_in_days for a link that never expires."""
    expires_in_days = req.expires_in_days if req else None
    public_url = share_service.share_resume(db, identity, resume_id, expires_in_days)
    analytics_service.log_event(
        db, identity, "resume_shared",
        {"resume_id": resume_id, "expires_in_days": expires_in_days},
        user_agent=request.headers.get("user-agent"),
    )
    return ShareResponse(public_url=public_url)


@router.delete("/{resume_id}/share", status_code=204)
def unshare_resume(
    resume_id: str,
    request: Request,
    db: Session = Depends(get_db),
    identity: Optional[Identity] = Depends(get_current_identity),
):
    share_service.unshare_resume(db, identity, resume_id)
    analytics_service.log_event(
        db, identity, "resume_unshared", {"resume_id": resume_id},
        user_agent=request.headers.get("user-agent"),
    )
    return Response(status_code=204)
