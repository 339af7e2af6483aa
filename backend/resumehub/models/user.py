"""User profile model."""

from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime, Boolean, JSON
from sqlalchemy.orm import relationship

from resumehub.database import Base


class UserProfile(Base):
    __tablename__ = "users"

    # Identity provider's subject id
    id = Column(String(128), primary_key=True)
    email = Column(String(255), nullable=False, default="")
    display_name = Column(String(255), nullable=False, default="")
    photo_url = Column(String(1024), nullable=False, default="")
    is_admin = Column(Boolean, nullable=False, default=False)

    # Optional subscription window
    subscription_type = Column(String(50), nullable=True)  # free | pro | team
    subscription_start = Column(DateTime, nullable=True)
    subscription_end = Column(DateTime, nullable=True)
    subscription_features = Column(JSON, nullable=True)  # ["premium_templates", ...]

    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
    last_login = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime, nullable=True)

    # Relationships
    settings = relationship("UserSettings", back_populates="user", uselist=False)
    resumes = relationship("Resume", back_populates="owner")
