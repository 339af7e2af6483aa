"""User settings model — preferences plus the recently-used lists."""

from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime, Boolean, Integer, JSON, ForeignKey
from sqlalchemy.orm import relationship

from resumehub.database import Base


class UserSettings(Base):
    __tablename__ = "user_settings"

    user_id = Column(String(128), ForeignKey("users.id"), primary_key=True)
    theme = Column(String(20), nullable=False, default="light")
    language = Column(String(10), nullable=False, default="en")
    notify_email = Column(Boolean, nullable=False, default=True)
    notify_browser = Column(Boolean, nullable=False, default=True)
    default_template = Column(String(128), nullable=False, default="")
    allow_data_collection = Column(Boolean, nullable=False, default=True)
    share_usage_stats = Column(Boolean, nullable=False, default=True)

    # Most-recent-first id lists; always reassigned, never mutated in place
    recent_resumes = Column(JSON, nullable=False, default=list)
    recent_templates = Column(JSON, nullable=False, default=list)

    # Bumped by the ORM on every UPDATE and checked in its WHERE clause
    revision = Column(Integer, nullable=False)

    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    user = relationship("UserProfile", back_populates="settings")

    __mapper_args__ = {"version_id_col": revision}
