"""User profile and settings schemas."""

from typing import Literal, Optional

from pydantic import BaseModel, Field


class Subscription(BaseModel):
    type: str
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    features: list[str] = []


class UserProfileResponse(BaseModel):
    id: str
    email: str
    display_name: str
    photo_url: str
    is_admin: bool
    created_at: str
    last_login: str
    subscription: Optional[Subscription] = None
    subscription_active: bool = False

    class Config:
        from_attributes = True


class UserProfileUpdate(BaseModel):
    display_name: Optional[str] = Field(default=None, max_length=255)
    photo_url: Optional[str] = Field(default=None, max_length=1024)


class NotificationPrefs(BaseModel):
    email: bool = True
    browser: bool = True


class PrivacySettings(BaseModel):
    allow_data_collection: bool = True
    share_usage_stats: bool = True


class RecentlyUsed(BaseModel):
    resumes: list[str] = []
    templates: list[str] = []


class UserSettingsResponse(BaseModel):
    user_id: str
    theme: str
    language: str
    notifications: NotificationPrefs
    default_template: str
    privacy_settings: PrivacySettings
    recently_used: RecentlyUsed


class UserSettingsUpdate(BaseModel):
    theme: Optional[Literal["light", "dark", "system"]] = None
    language: Optional[str] = Field(default=None, min_length=2, max_length=10)
    notifications: Optional[NotificationPrefs] = None
    default_template: Optional[str] = Field(default=None, max_length=128)
    privacy_settings: Optional[PrivacySettings] = None
