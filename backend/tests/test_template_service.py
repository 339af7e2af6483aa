"""Tests for the two template catalogs and admin-only maintenance."""

import pytest

from resumehub.errors import NotFoundError, PermissionDeniedError, UnauthenticatedError
from resumehub.models.template import DefaultTemplate, Template
from resumehub.schemas.template import (
    TemplateCreate,
    TemplateSection,
    TemplateStructure,
    TemplateUpdate,
)
from resumehub.services import profile_service, template_service


def _seed(db, model, **kwargs):
    values = {"name": "Plain", "structure": {"sections": [], "styling": {}}}
    values.update(kwargs)
    template = model(**values)
    db.add(template)
    db.commit()
    return template.id


class TestReads:

    def test_empty_catalog(self, db):
        assert template_service.get_templates(db) == []
        assert template_service.get_default_templates(db) == []

    def test_most_popular_first(self, db):
        _seed(db, Template, name="Low", popularity=1)
        _seed(db, Template, name="High", popularity=50)
        _seed(db, Template, name="Mid", popularity=10)
        assert [t.name for t in template_service.get_templates(db)] == ["High", "Mid", "Low"]

    def test_filters_combine(self, db):
        _seed(db, Template, name="Tech free", category="tech", premium=False)
        _seed(db, Template, name="Tech pro", category="tech", premium=True)
        _seed(db, Template, name="Design pro", category="design", premium=True)

        assert {t.name for t in template_service.get_templates(db, category="tech")} == {"Tech free", "Tech pro"}
        assert {t.name for t in template_service.get_templates(db, is_premium=True)} == {"Tech pro", "Design pro"}
        assert [t.name for t in template_service.get_templates(db, category="tech", is_premium=False)] == ["Tech free"]

    def test_catalogs_are_separate(self, db):
        regular_id = _seed(db, Template, name="Regular")
        default_id = _seed(db, DefaultTemplate, name="Starter")

        assert template_service.get_template_by_id(db, regular_id).is_default is False
        assert template_service.get_template_by_id(db, default_id, is_default=True).is_default is True
        # No fallback from one catalog to the other
        with pytest.raises(NotFoundError):
            template_service.get_template_by_id(db, default_id)
        with pytest.raises(NotFoundError):
            template_service.get_template_by_id(db, regular_id, is_default=True)

        assert [t.name for t in template_service.get_default_templates(db)] == ["Starter"]


class TestAdminMaintenance:

    def _create(self, **kwargs):
        structure = TemplateStructure(sections=[
            TemplateSection(id="exp", type="experience", label="Experience", order=2),
            TemplateSection(id="info", type="personal_info", label="About", required=True, order=1),
        ])
        return TemplateCreate(name="Modern", category="tech", structure=structure, **kwargs)

    def test_admin_creates_template(self, db, admin):
        template = template_service.create_template(db, admin, self._create(popularity=3))

        assert template.created_by == admin.id
        assert template.popularity == 3
        # Sections are stored in display order
        assert [s["id"] for s in template.structure["sections"]] == ["info", "exp"]
        assert [t.id for t in template_service.get_templates(db)] == [template.id]

    def test_admin_creates_default_template(self, db, admin):
        template = template_service.create_template(db, admin, self._create(), is_default=True)
        assert isinstance(template, DefaultTemplate)
        assert template_service.get_templates(db) == []

    def test_non_admin_is_rejected(self, db, alice):
        profile_service.ensure_user_profile(db, alice)
        with pytest.raises(PermissionDeniedError):
            template_service.create_template(db, alice, self._create())
        assert db.query(Template).count() == 0

    def test_anonymous_is_rejected(self, db):
        with pytest.raises(UnauthenticatedError):
            template_service.create_template(db, None, self._create())

    def test_update_and_delete(self, db, admin, alice):
        template = template_service.create_template(db, admin, self._create())

        updated = template_service.update_template(db, admin, template.id, TemplateUpdate(premium=True))
        assert updated.premium is True
        assert updated.name == "Modern"

        profile_service.ensure_user_profile(db, alice)
        with pytest.raises(PermissionDeniedError):
            template_service.delete_template(db, alice, template.id)

        template_service.delete_template(db, admin, template.id)
        with pytest.raises(NotFoundError):
            template_service.get_template_by_id(db, template.id)

    def test_update_missing(self, db, admin):
        with pytest.raises(NotFoundError):
            template_service.update_template(db, admin, "nope", TemplateUpdate(name="x"))

    def test_duplicate_section_ids_rejected(self):
        with pytest.raises(ValueError):
            TemplateStructure(sections=[
                TemplateSection(id="a", type="custom", label="A"),
                TemplateSection(id="a", type="custom", label="B"),
            ])
