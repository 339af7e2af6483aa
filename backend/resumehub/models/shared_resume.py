"""Shared resume model — public point-in-time snapshot of a private resume."""

from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime, Integer, JSON

from resumehub.database import Base


class SharedResume(Base):
    __tablename__ = "shared_resumes"

    # Same id as the source resume; no FK so the snapshot can outlive it
    resume_id = Column(String(36), primary_key=True)
    owner_id = Column(String(128), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    content = Column(JSON, nullable=False)
    template_id = Column(String(128), nullable=False, default="")
    public_url = Column(String(1024), nullable=False)
    view_count = Column(Integer, nullable=False, default=0)
    expires_at = Column(DateTime, nullable=True)  # NULL = never expires
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
