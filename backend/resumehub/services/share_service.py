"""Share service — public snapshots of resumes, expiry, and view counting."""

import copy
import logging
from datetime import timedelta
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from resumehub.config import settings
from resumehub.database import transaction, utcnow, as_utc
from resumehub.errors import ExpiredError, InvalidInputError, NotFoundError
from resumehub.models.resume import Resume
from resumehub.models.shared_resume import SharedResume
from resumehub.schemas.auth import Identity
from resumehub.services.profile_service import require_identity
from resumehub.services.resume_service import get_owned_resume

logger = logging.getLogger(__name__)


def public_url_for(resume_id: str) -> str:
    return f"{settings.PUBLIC_BASE_URL.rstrip('/')}/shared/{resume_id}"


def share_resume(
    db: Session,
    identity: Optional[Identity],
    resume_id: str,
    expires_in_days: Optional[int] = None,
) -> str:
    """Publish a point-in-time snapshot of the resume and return its public URL.

    Re-sharing replaces the snapshot (and resets its view count). Later edits
    to the private resume are not visible until the next share.
    """
    identity = require_identity(identity)
    if expires_in_days is not None and expires_in_days < 1:
        raise InvalidInputError("expires_in_days must be a positive number of days")

    resume = get_owned_resume(db, identity.id, resume_id)
    now = utcnow()
    expires_at = now + timedelta(days=expires_in_days) if expires_in_days else None
    public_url = public_url_for(resume_id)

    with transaction(db):
        shared = db.get(SharedResume, resume_id)
        if shared is None:
            shared = SharedResume(resume_id=resume_id)
            db.add(shared)
        shared.owner_id = identity.id
        shared.title = resume.title
        shared.content = copy.deepcopy(resume.content)
        shared.template_id = resume.template_id
        shared.public_url = public_url
        shared.view_count = 0
        shared.expires_at = expires_at
        shared.created_at = now

        resume.is_public = True

    logger.info("Shared resume %s (expires %s)", resume_id, expires_at.isoformat() if expires_at else "never")
    return public_url


def unshare_resume(db: Session, identity: Optional[Identity], resume_id: str) -> None:
    """Remove the public snapshot and clear the source's public flag together.

    Idempotent: unsharing a resume that is not shared just clears the flag.
    A snapshot left behind by a deleted resume can still be unshared; only
    when neither the resume nor a snapshot exists is it NotFound.
    """
    identity = require_identity(identity)
    resume = (
        db.query(Resume)
        .filter(Resume.id == resume_id, Resume.owner_id == identity.id)
        .first()
    )

    with transaction(db):
        removed = db.query(SharedResume).filter(
            SharedResume.resume_id == resume_id,
            SharedResume.owner_id == identity.id,
        ).delete(synchronize_session=False)
        if resume is None and not removed:
            raise NotFoundError("Resume not found")
        if resume is not None:
            resume.is_public = False

    logger.info("Unshared resume %s", resume_id)


def get_shared_resume(db: Session, resume_id: str) -> SharedResume:
    """Public read of a snapshot; counts as one view.

    The increment is guarded by the expiry in the same UPDATE, so an expired
    snapshot is never counted.
    """
    shared = db.get(SharedResume, resume_id)
    if shared is None:
        raise NotFoundError("Shared resume not found")

    expires_at = as_utc(shared.expires_at)
    if expires_at is not None and expires_at < utcnow():
        raise ExpiredError()

    with transaction(db):
        counted = db.query(SharedResume).filter(
            SharedResume.resume_id == resume_id,
            or_(SharedResume.expires_at.is_(None), SharedResume.expires_at >= utcnow()),
        ).update(
            {SharedResume.view_count: SharedResume.view_count + 1},
            synchronize_session=False,
        )

    if not counted:
        # Expired since the check above, or unshared in the meantime
        if db.get(SharedResume, resume_id) is None:
            raise NotFoundError("Shared resume not found")
        raise ExpiredError()

    db.refresh(shared)
    return shared


def reconcile_sharing(db: Session, owner_id: Optional[str] = None) -> dict:
    """Consistency sweep between snapshots and the sources' is_public flags.

    - a resume with a snapshot gets is_public set
    - a resume flagged public without a snapshot gets the flag cleared
    - with CASCADE_UNSHARE_ON_DELETE, snapshots whose source is gone are removed
    """
    resumes_q = db.query(Resume)
    shared_q = db.query(SharedResume)
    if owner_id:
        resumes_q = resumes_q.filter(Resume.owner_id == owner_id)
        shared_q = shared_q.filter(SharedResume.owner_id == owner_id)

    shared_by_id = {s.resume_id: s for s in shared_q.all()}
    result = {"flags_set": 0, "flags_cleared": 0, "orphans_removed": 0}

    with transaction(db):
        seen = set()
        for resume in resumes_q.all():
            seen.add(resume.id)
            has_snapshot = resume.id in shared_by_id
            if has_snapshot and not resume.is_public:
                resume.is_public = True
                result["flags_set"] += 1
            elif not has_snapshot and resume.is_public:
                resume.is_public = False
                result["flags_cleared"] += 1

        if settings.CASCADE_UNSHARE_ON_DELETE:
            for resume_id, shared in shared_by_id.items():
                if resume_id not in seen:
                    db.delete(shared)
                    result["orphans_removed"] += 1

    if any(result.values()):
        logger.info("Sharing reconciliation fixed %s", result)
    return result
