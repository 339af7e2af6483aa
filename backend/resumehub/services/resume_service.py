"""Resume service — owner-scoped CRUD with version history and recency bookkeeping."""

import logging
import uuid
from typing import Optional

from sqlalchemy.orm import Session

from resumehub.config import settings
from resumehub.database import transaction, utcnow
from resumehub.errors import ConflictError, NotFoundError
from resumehub.models.resume import Resume, ResumeVersion
from resumehub.models.shared_resume import SharedResume
from resumehub.models.user import UserProfile
from resumehub.models.user_settings import UserSettings
from resumehub.schemas.auth import Identity
from resumehub.schemas.resume import (
    PersonalInfo,
    ResumeContent,
    ResumeCreate,
    ResumeDisplaySettings,
    ResumeUpdate,
)
from resumehub.services.profile_service import (
    forget_resume,
    get_or_create_profile,
    get_or_create_settings,
    record_resume_use,
    require_identity,
)

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Untitled Resume"
INITIAL_CHANGE_NOTE = "Initial creation"
DEFAULT_CHANGE_NOTE = "Updated resume"


def get_owned_resume(db: Session, owner_id: str, resume_id: str) -> Resume:
    """Look a resume up inside the owner's partition.

    Another owner's resume is reported exactly like a missing one.
    """
    resume = (
        db.query(Resume)
        .filter(Resume.id == resume_id, Resume.owner_id == owner_id)
        .first()
    )
    if not resume:
        raise NotFoundError("Resume not found")
    return resume


def default_content(identity: Identity) -> dict:
    """Empty sections, with personal info seeded from the identity."""
    content = ResumeContent(
        personal_info=PersonalInfo(
            name=identity.display_name or "",
            email=identity.email or "",
        )
    )
    return content.model_dump()


def _insert_resume(db: Session, identity: Identity, initial: ResumeCreate) -> str:
    now = utcnow()

    with transaction(db):
        get_or_create_profile(db, identity)
        user_settings = get_or_create_settings(db, identity.id)

        resume = Resume(
            id=str(uuid.uuid4()),
            owner_id=identity.id,
            title=(initial.title or "").strip() or DEFAULT_TITLE,
            template_id=initial.template_id or "",
            is_public=False,
            content=initial.content.model_dump() if initial.content else default_content(identity),
            settings=(initial.settings or ResumeDisplaySettings()).model_dump(),
            version=1,
            created_at=now,
            updated_at=now,
        )
        resume.versions.append(
            ResumeVersion(version_number=1, timestamp=now, changes=INITIAL_CHANGE_NOTE)
        )
        db.add(resume)

        record_resume_use(user_settings, resume.id, initial.template_id)

    return resume.id


def create_resume(db: Session, identity: Optional[Identity], initial: Optional[ResumeCreate] = None) -> str:
    """Create a resume at version 1 and return its id.

    Steps, in one transaction:
    1. Bootstrap the owner's profile and settings if this is their first write
    2. Insert the resume with a single "Initial creation" history entry
    3. Push the resume (and template, if given) onto the recently-used lists

    If a concurrent sign-in creates the profile first, the transaction is
    retried once against the now-existing profile.
    """
    identity = require_identity(identity)
    initial = initial or ResumeCreate()

    try:
        resume_id = _insert_resume(db, identity, initial)
    except ConflictError:
        if db.get(UserProfile, identity.id) is None:
            raise
        logger.warning("Profile for user %s was created concurrently, retrying", identity.id)
        resume_id = _insert_resume(db, identity, initial)

    logger.info("Created resume %s for user %s", resume_id, identity.id)
    return resume_id


def get_resumes(db: Session, identity: Optional[Identity]) -> list[Resume]:
    """All of the owner's resumes, most recently updated first."""
    identity = require_identity(identity)
    return (
        db.query(Resume)
        .filter(Resume.owner_id == identity.id)
        .order_by(Resume.updated_at.desc(), Resume.created_at.desc())
        .all()
    )


def get_resume_by_id(db: Session, identity: Optional[Identity], resume_id: str) -> Resume:
    identity = require_identity(identity)
    return get_owned_resume(db, identity.id, resume_id)


def update_resume(db: Session, identity: Optional[Identity], resume_id: str, patch: ResumeUpdate) -> Resume:
    """Apply a partial update as a new version.

    Every update bumps ``version`` by one and appends exactly one history
    entry. When ``patch.expected_version`` is given it must match the stored
    version; independently, the ORM only writes the row if nobody else bumped
    the version since it was read, so concurrent updates fail with
    ConflictError instead of overwriting each other.
    """
    identity = require_identity(identity)
    resume = get_owned_resume(db, identity.id, resume_id)

    if patch.expected_version is not None and patch.expected_version != resume.version:
        raise ConflictError(
            f"Resume is at version {resume.version}, expected {patch.expected_version}"
        )

    fields = patch.model_dump(exclude_unset=True, exclude={"changes", "expected_version"})
    now = utcnow()

    with transaction(db):
        for field, value in fields.items():
            if value is None:
                continue
            if field == "title":
                value = value.strip()
            setattr(resume, field, value)

        new_version = (resume.version or 0) + 1
        resume.version = new_version
        resume.updated_at = now
        resume.versions.append(
            ResumeVersion(
                version_number=new_version,
                timestamp=now,
                changes=patch.changes or DEFAULT_CHANGE_NOTE,
            )
        )

        record_resume_use(db.get(UserSettings, identity.id), resume.id)

    return resume


def delete_resume(db: Session, identity: Optional[Identity], resume_id: str) -> None:
    """Delete a resume with its history and drop it from the recently-used list.

    With CASCADE_UNSHARE_ON_DELETE the public snapshot goes too; otherwise it
    survives until an explicit unshare or a reconciliation sweep.
    """
    identity = require_identity(identity)
    resume = get_owned_resume(db, identity.id, resume_id)

    with transaction(db):
        db.delete(resume)
        forget_resume(db.get(UserSettings, identity.id), resume_id)
        if settings.CASCADE_UNSHARE_ON_DELETE:
            db.query(SharedResume).filter(
                SharedResume.resume_id == resume_id,
                SharedResume.owner_id == identity.id,
            ).delete(synchronize_session=False)

    logger.info("Deleted resume %s for user %s", resume_id, identity.id)
