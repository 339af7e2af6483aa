"""Analytics event model — append-only, best-effort usage log."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime, JSON, Text

from resumehub.database import Base


class AnalyticsEvent(Base):
    __tablename__ = "analytics_events"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(128), nullable=False, index=True)
    event_type = Column(String(100), nullable=False)  # resume_created | resume_shared | ...
    payload = Column(JSON, nullable=False, default=dict)
    device = Column(Text, nullable=False, default="")  # raw user agent
    browser = Column(String(20), nullable=False, default="Unknown")
    timestamp = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
