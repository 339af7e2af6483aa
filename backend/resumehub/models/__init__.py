"""SQLAlchemy ORM models."""

from resumehub.models.user import UserProfile
from resumehub.models.user_settings import UserSettings
from resumehub.models.resume import Resume, ResumeVersion
from resumehub.models.template import Template, DefaultTemplate
from resumehub.models.shared_resume import SharedResume
from resumehub.models.analytics_event import AnalyticsEvent

__all__ = [
    "UserProfile",
    "UserSettings",
    "Resume",
    "ResumeVersion",
    "Template",
    "DefaultTemplate",
    "SharedResume",
    "AnalyticsEvent",
]
