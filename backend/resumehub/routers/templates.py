"""Templates router — catalog reads and admin maintenance."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from resumehub.database import as_utc, get_db
from resumehub.middleware.auth import get_current_identity
from resumehub.schemas.auth import Identity
from resumehub.schemas.template import (
    TemplateCreate,
    TemplateResponse,
    TemplateStructure,
    TemplateUpdate,
)
from resumehub.services import template_service

router = APIRouter(prefix="/api/templates", tags=["templates"])


def _template_to_response(template) -> TemplateResponse:
    """Convert a Template or DefaultTemplate row to a response schema."""
    return TemplateResponse(
        id=template.id,
        name=template.name,
        description=template.description,
        thumbnail=template.thumbnail,
        category=template.category,
        tags=list(template.tags or []),
        popularity=template.popularity,
        premium=template.premium,
        structure=TemplateStructure(**template.structure),
        html=template.html,
        css=template.css,
        created_by=template.created_by,
        created_at=as_utc(template.created_at).isoformat(),
        updated_at=as_utc(template.updated_at).isoformat(),
        is_default=template.is_default,
    )


@router.get("", response_model=list[TemplateResponse])
def list_templates(
    category: Optional[str] = Query(None),
    is_premium: Optional[bool] = Query(None),
    db: Session = Depends(get_db),
):
    """List the template catalog, most popular first."""
    return [_template_to_response(t) for t in template_service.get_templates(db, category, is_premium)]


@router.get("/defaults", response_model=list[TemplateResponse])
def list_default_templates(db: Session = Depends(get_db)):
    return [_template_to_response(t) for t in template_service.get_default_templates(db)]


@router.get("/{template_id}", response_model=TemplateResponse)
def get_template(
    template_id: str,
    is_default: bool = Query(False),
    db: Session = Depends(get_db),
):
    return _template_to_response(template_service.get_template_by_id(db, template_id, is_default))


@router.post("", response_model=TemplateResponse, status_code=201)
def create_template(
    req: TemplateCreate,
    is_default: bool = Query(False),
    db: Session = Depends(get_db),
    identity: Optional[Identity] = Depends(get_current_identity),
):
    """Add a template to either catalog (admin only)."""
    return _template_to_response(template_service.create_template(db, identity, req, is_default))


@router.patch("/{template_id}", response_model=TemplateResponse)
def update_template(
    template_id: str,
    req: TemplateUpdate,
    is_default: bool = Query(False),
    db: Session = Depends(get_db),
    identity: Optional[Identity] = Depends(get_current_identity),
):
    return _template_to_response(
        template_service.update_template(db, identity, template_id, req, is_default)
    )


@router.delete("/{template_id}", status_code=204)
def delete_template(
    template_id: str,
    is_default: bool = Query(False),
    db: Session = Depends(get_db),
    identity: Optional[Identity] = Depends(get_current_identity),
):
    template_service.delete_template(db, identity, template_id, is_default)
    return Response(status_code=204)
