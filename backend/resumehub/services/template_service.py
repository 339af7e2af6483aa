"""Template service — read access to both catalogs, admin-only mutation."""

import logging
import uuid
from typing import Optional

from sqlalchemy.orm import Session

from resumehub.database import transaction, utcnow
from resumehub.errors import NotFoundError
from resumehub.models.template import Template, DefaultTemplate
from resumehub.schemas.auth import Identity
from resumehub.schemas.template import TemplateCreate, TemplateUpdate
from resumehub.services.profile_service import require_admin

logger = logging.getLogger(__name__)


def _catalog(is_default: bool):
    return DefaultTemplate if is_default else Template


# ── Reads ─────────────────────────────────────────────────────────────────────

def get_templates(
    db: Session,
    category: Optional[str] = None,
    is_premium: Optional[bool] = None,
) -> list[Template]:
    """List the regular catalog with optional filters, most popular first."""
    query = db.query(Template)
    if category:
        query = query.filter(Template.category == category)
    if is_premium is not None:
        query = query.filter(Template.premium == is_premium)
    return query.order_by(Template.popularity.desc(), Template.name.asc()).all()


def get_default_templates(db: Session) -> list[DefaultTemplate]:
    return (
        db.query(DefaultTemplate)
        .order_by(DefaultTemplate.popularity.desc(), DefaultTemplate.name.asc())
        .all()
    )


def get_template_by_id(db: Session, template_id: str, is_default: bool = False):
    """Fetch from the catalog the caller names; there is no fallback to the other one."""
    template = db.get(_catalog(is_default), template_id)
    if template is None:
        raise NotFoundError("Template not found")
    return template


# ── Admin mutation ────────────────────────────────────────────────────────────

def create_template(
    db: Session,
    identity: Optional[Identity],
    data: TemplateCreate,
    is_default: bool = False,
):
    admin = require_admin(db, identity)
    model = _catalog(is_default)
    now = utcnow()
    values = data.model_dump()
    with transaction(db):
        template = model(
            id=str(uuid.uuid4()),
            created_by=admin.id,
            created_at=now,
            updated_at=now,
            **values,
        )
        db.add(template)
    logger.info("Admin %s created template %s in %s", admin.id, template.id, model.__tablename__)
    return template


def update_template(
    db: Session,
    identity: Optional[Identity],
    template_id: str,
    patch: TemplateUpdate,
    is_default: bool = False,
):
    require_admin(db, identity)
    template = get_template_by_id(db, template_id, is_default)
    with transaction(db):
        for field, value in patch.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(template, field, value)
        template.updated_at = utcnow()
    return template


def delete_template(
    db: Session,
    identity: Optional[Identity],
    template_id: str,
    is_default: bool = False,
) -> None:
    admin = require_admin(db, identity)
    template = get_template_by_id(db, template_id, is_default)
    with transaction(db):
        db.delete(template)
    logger.info("Admin %s deleted template %s", admin.id, template_id)
