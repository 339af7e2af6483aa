"""Profile service — user profile bootstrap, settings, and recency bookkeeping."""

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from resumehub.config import settings
from resumehub.database import transaction, utcnow, as_utc
from resumehub.errors import ConflictError, NotFoundError, PermissionDeniedError, UnauthenticatedError
from resumehub.models.user import UserProfile
from resumehub.models.user_settings import UserSettings
from resumehub.schemas.auth import Identity
from resumehub.schemas.profile import UserProfileUpdate, UserSettingsUpdate
from resumehub.services import recency

logger = logging.getLogger(__name__)


def require_identity(identity: Optional[Identity]) -> Identity:
    if identity is None:
        raise UnauthenticatedError("User not authenticated")
    return identity


def require_admin(db: Session, identity: Optional[Identity]) -> UserProfile:
    identity = require_identity(identity)
    profile = db.get(UserProfile, identity.id)
    if not profile or not profile.is_admin:
        raise PermissionDeniedError()
    return profile


def _new_profile(identity: Identity) -> UserProfile:
    now = utcnow()
    return UserProfile(
        id=identity.id,
        email=identity.email or "",
        display_name=identity.display_name or "",
        photo_url=identity.photo_url or "",
        is_admin=False,
        created_at=now,
        last_login=now,
    )


def _new_settings(user_id: str) -> UserSettings:
    return UserSettings(
        user_id=user_id,
        theme="light",
        language="en",
        notify_email=True,
        notify_browser=True,
        default_template="",
        allow_data_collection=True,
        share_usage_stats=True,
        recent_resumes=[],
        recent_templates=[],
    )


# ── Bootstrap ─────────────────────────────────────────────────────────────────

def ensure_user_profile(db: Session, identity: Optional[Identity]) -> UserProfile:
    """Create the profile and default settings on first sign-in, else touch last_login.

    Safe to call on every authentication event.
    """
    identity = require_identity(identity)
    try:
        with transaction(db):
            profile = db.get(UserProfile, identity.id)
            if profile is None:
                profile = _new_profile(identity)
                db.add(profile)
                if db.get(UserSettings, identity.id) is None:
                    db.add(_new_settings(identity.id))
                logger.info("Created profile for user %s", identity.id)
            else:
                profile.last_login = utcnow()
    except ConflictError:
        # A concurrent first sign-in inserted the row first
        with transaction(db):
            profile = db.get(UserProfile, identity.id)
            if profile is None:
                raise ConflictError("Could not create user profile")
            profile.last_login = utcnow()
    return profile


def get_or_create_profile(db: Session, identity: Identity) -> UserProfile:
    """Stage a profile for the identity if none exists. Caller commits."""
    profile = db.get(UserProfile, identity.id)
    if profile is None:
        profile = _new_profile(identity)
        db.add(profile)
        logger.info("Bootstrapped missing profile for user %s", identity.id)
    return profile


def get_or_create_settings(db: Session, user_id: str) -> UserSettings:
    """Stage default settings for the user if none exist. Caller commits."""
    user_settings = db.get(UserSettings, user_id)
    if user_settings is None:
        user_settings = _new_settings(user_id)
        db.add(user_settings)
    return user_settings


# ── Profile ───────────────────────────────────────────────────────────────────

def get_user_profile(db: Session, identity: Optional[Identity]) -> UserProfile:
    identity = require_identity(identity)
    profile = db.get(UserProfile, identity.id)
    if profile is None:
        raise NotFoundError("User profile not found")
    return profile


def update_user_profile(db: Session, identity: Optional[Identity], patch: UserProfileUpdate) -> UserProfile:
    """Apply user-editable profile fields. Admin flag and subscription are not editable here."""
    profile = get_user_profile(db, identity)
    with transaction(db):
        for field, value in patch.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(profile, field, value)
        profile.updated_at = utcnow()
    return profile


def has_active_subscription(profile: UserProfile, now: Optional[datetime] = None) -> bool:
    """True when now falls inside the profile's subscription window."""
    if not profile.subscription_type:
        return False
    now = now or utcnow()
    start = as_utc(profile.subscription_start)
    end = as_utc(profile.subscription_end)
    if start is not None and now < start:
        return False
    if end is not None and now >= end:
        return False
    return True


# ── Settings ──────────────────────────────────────────────────────────────────

def get_user_settings(db: Session, identity: Optional[Identity]) -> UserSettings:
    identity = require_identity(identity)
    user_settings = db.get(UserSettings, identity.id)
    if user_settings is None:
        raise NotFoundError("User settings not found")
    return user_settings


def update_user_settings(db: Session, identity: Optional[Identity], patch: UserSettingsUpdate) -> UserSettings:
    """Apply preference changes. Recently-used lists are bookkeeping and not patchable."""
    user_settings = get_user_settings(db, identity)
    with transaction(db):
        if patch.theme is not None:
            user_settings.theme = patch.theme
        if patch.language is not None:
            user_settings.language = patch.language
        if patch.default_template is not None:
            user_settings.default_template = patch.default_template
        if patch.notifications is not None:
            user_settings.notify_email = patch.notifications.email
            user_settings.notify_browser = patch.notifications.browser
        if patch.privacy_settings is not None:
            user_settings.allow_data_collection = patch.privacy_settings.allow_data_collection
            user_settings.share_usage_stats = patch.privacy_settings.share_usage_stats
        user_settings.updated_at = utcnow()
    return user_settings


# ── Recency bookkeeping (staged; the calling operation commits) ──────────────

def record_resume_use(
    user_settings: Optional[UserSettings],
    resume_id: str,
    template_id: Optional[str] = None,
) -> None:
    if user_settings is None:
        return
    user_settings.recent_resumes = recency.push_front(
        user_settings.recent_resumes, resume_id, settings.RECENT_RESUMES_LIMIT
    )
    if template_id:
        user_settings.recent_templates = recency.push_front(
            user_settings.recent_templates, template_id, settings.RECENT_TEMPLATES_LIMIT
        )
    user_settings.updated_at = utcnow()


def forget_resume(user_settings: Optional[UserSettings], resume_id: str) -> None:
    if user_settings is None or resume_id not in (user_settings.recent_resumes or []):
        return
    user_settings.recent_resumes = recency.remove(user_settings.recent_resumes, resume_id)
    user_settings.updated_at = utcnow()
