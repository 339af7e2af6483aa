"""Analytics router — client-reported usage events."""

from typing import Optional

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from resumehub.database import get_db
from resumehub.middleware.auth import get_current_identity
from resumehub.schemas.analytics import AnalyticsAck, AnalyticsEventCreate
from resumehub.schemas.auth import Identity
from resumehub.services import analytics_service

router = APIRouter(prefix="/api/analytics", tags=["analytics"])


@router.post("/events", response_model=AnalyticsAck, status_code=202)
def log_event(
    req: AnalyticsEventCreate,
    request: Request,
    db: Session = Depends(get_db),
    identity: Optional[Identity] = Depends(get_current_identity),
):
    """Best effort: always accepted, even when the event is dropped."""
    logged = analytics_service.log_event(
        db, identity, req.event_type, req.data,
        user_agent=request.headers.get("user-agent"),
    )
    return AnalyticsAck(logged=logged)
