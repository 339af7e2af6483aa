"""Analytics service — fire-and-forget usage events.

Nothing here may fail the action that triggered it: store errors are rolled
back and logged, never raised.
"""

import logging
import re
from typing import Any, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from resumehub.database import utcnow
from resumehub.models.analytics_event import AnalyticsEvent
from resumehub.models.user_settings import UserSettings
from resumehub.schemas.auth import Identity

logger = logging.getLogger(__name__)

# Order matters: Edge and Opera user agents also contain "Chrome",
# and Chrome's contains "Safari".
_BROWSER_PATTERNS = [
    ("Edge", re.compile(r"edg", re.I)),
    ("Opera", re.compile(r"opr/|opera", re.I)),
    ("Chrome", re.compile(r"chrome|chromium|crios", re.I)),
    ("Firefox", re.compile(r"firefox|fxios", re.I)),
    ("Safari", re.compile(r"safari", re.I)),
]


def browser_family(user_agent: Optional[str]) -> str:
    if not user_agent:
        return "Unknown"
    for name, pattern in _BROWSER_PATTERNS:
        if pattern.search(user_agent):
            return name
    return "Unknown"


def log_event(
    db: Session,
    identity: Optional[Identity],
    event_type: str,
    data: Optional[dict[str, Any]] = None,
    user_agent: Optional[str] = None,
) -> bool:
    """Record an event for the signed-in user. Returns whether it was stored."""
    if identity is None:
        return False
    try:
        user_settings = db.get(UserSettings, identity.id)
        if user_settings is not None and not user_settings.allow_data_collection:
            return False
        db.add(AnalyticsEvent(
            user_id=identity.id,
            event_type=event_type,
            payload=dict(data or {}),
            device=user_agent or "",
            browser=browser_family(user_agent),
            timestamp=utcnow(),
        ))
        db.commit()
        return True
    except SQLAlchemyError as e:
        db.rollback()
        logger.warning("Dropped analytics event %r for %s: %s", event_type, identity.id, e)
        return False
