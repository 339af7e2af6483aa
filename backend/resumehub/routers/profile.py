"""Profile router — sign-in bootstrap, profile, and settings."""

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from resumehub.database import as_utc, get_db
from resumehub.middleware.auth import get_current_identity
from resumehub.models.user import UserProfile
from resumehub.models.user_settings import UserSettings
from resumehub.schemas.auth import Identity
from resumehub.schemas.profile import (
    NotificationPrefs,
    PrivacySettings,
    RecentlyUsed,
    Subscription,
    UserProfileResponse,
    UserProfileUpdate,
    UserSettingsResponse,
    UserSettingsUpdate,
)
from resumehub.services import profile_service

router = APIRouter(prefix="/api/profile", tags=["profile"])


def _profile_to_response(profile: UserProfile) -> UserProfileResponse:
    subscription = None
    if profile.subscription_type:
        subscription = Subscription(
            type=profile.subscription_type,
            start_date=as_utc(profile.subscription_start).isoformat() if profile.subscription_start else None,
            end_date=as_utc(profile.subscription_end).isoformat() if profile.subscription_end else None,
            features=profile.subscription_features or [],
        )
    return UserProfileResponse(
        id=profile.id,
        email=profile.email,
        display_name=profile.display_name,
        photo_url=profile.photo_url,
        is_admin=profile.is_admin,
        created_at=as_utc(profile.created_at).isoformat(),
        last_login=as_utc(profile.last_login).isoformat(),
        subscription=subscription,
        subscription_active=profile_service.has_active_subscription(profile),
    )


def _settings_to_response(user_settings: UserSettings) -> UserSettingsResponse:
    return UserSettingsResponse(
        user_id=user_settings.user_id,
        theme=user_settings.theme,
        language=user_settings.language,
        notifications=NotificationPrefs(
            email=user_settings.notify_email,
            browser=user_settings.notify_browser,
        ),
        default_template=user_settings.default_template,
        privacy_settings=PrivacySettings(
            allow_data_collection=user_settings.allow_data_collection,
            share_usage_stats=user_settings.share_usage_stats,
        ),
        recently_used=RecentlyUsed(
            resumes=list(user_settings.recent_resumes or []),
            templates=list(user_settings.recent_templates or []),
        ),
    )


@router.post("/bootstrap", response_model=UserProfileResponse)
def bootstrap_profile(
    db: Session = Depends(get_db),
    identity: Optional[Identity] = Depends(get_current_identity),
):
    """Create or touch the caller's profile. Call on every sign-in."""
    profile = profile_service.ensure_user_profile(db, identity)
    return _profile_to_response(profile)


@router.get("", response_model=UserProfileResponse)
def get_profile(
    db: Session = Depends(get_db),
    identity: Optional[Identity] = Depends(get_current_identity),
):
    return _profile_to_response(profile_service.get_user_profile(db, identity))


@router.patch("", response_model=UserProfileResponse)
def update_profile(
    req: UserProfileUpdate,
    db: Session = Depends(get_db),
    identity: Optional[Identity] = Depends(get_current_identity),
):
    return _profile_to_response(profile_service.update_user_profile(db, identity, req))


@router.get("/settings", response_model=UserSettingsResponse)
def get_settings(
    db: Session = Depends(get_db),
    identity: Optional[Identity] = Depends(get_current_identity),
):
    return _settings_to_response(profile_service.get_user_settings(db, identity))


@router.patch("/settings", response_model=UserSettingsResponse)
def update_settings(
    req: UserSettingsUpdate,
    db: Session = Depends(get_db),
    identity: Optional[Identity] = Depends(get_current_identity),
):
    return _settings_to_response(profile_service.update_user_settings(db, identity, req))
