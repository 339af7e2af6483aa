"""End-to-end HTTP tests through the FastAPI app."""

from datetime import timedelta

from resumehub.database import utcnow
from resumehub.models.analytics_event import AnalyticsEvent
from resumehub.models.shared_resume import SharedResume


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


class TestAuthentication:

    def test_missing_token_is_401(self, client):
        response = client.get("/api/resumes")
        assert response.status_code == 401
        assert response.json()["detail"] == "User not authenticated"

    def test_bad_token_is_401(self, client):
        response = client.get("/api/resumes", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 401

    def test_bootstrap_creates_profile_and_settings(self, client, alice, auth_headers):
        headers = auth_headers(alice)
        profile = client.post("/api/profile/bootstrap", headers=headers)
        assert profile.status_code == 200
        assert profile.json()["display_name"] == "Alice Doe"
        assert profile.json()["subscription_active"] is False

        user_settings = client.get("/api/profile/settings", headers=headers).json()
        assert user_settings["theme"] == "light"
        assert user_settings["recently_used"] == {"resumes": [], "templates": []}

    def test_profile_before_bootstrap_is_404(self, client, alice, auth_headers):
        assert client.get("/api/profile", headers=auth_headers(alice)).status_code == 404


class TestResumeLifecycle:

    def test_create_edit_share_view_unshare(self, client, alice, auth_headers, session_factory):
        headers = auth_headers(alice)

        created = client.post("/api/resumes", json={"title": "Engineer", "template_id": "tpl-1"}, headers=headers)
        assert created.status_code == 201
        resume_id = created.json()["id"]

        updated = client.patch(
            f"/api/resumes/{resume_id}",
            json={"title": "Staff Engineer", "changes": "Promotion", "expected_version": 1},
            headers=headers,
        )
        assert updated.status_code == 200
        body = updated.json()
        assert body["version"] == 2
        assert [v["changes"] for v in body["versions"]] == ["Initial creation", "Promotion"]

        stale = client.patch(
            f"/api/resumes/{resume_id}",
            json={"title": "Lost edit", "expected_version": 1},
            headers=headers,
        )
        assert stale.status_code == 409

        shared = client.post(f"/api/resumes/{resume_id}/share", json={"expires_in_days": 7}, headers=headers)
        assert shared.status_code == 200
        assert shared.json()["public_url"].endswith(f"/shared/{resume_id}")

        # Public view needs no token
        first = client.get(f"/api/shared/{resume_id}")
        second = client.get(f"/api/shared/{resume_id}")
        assert first.status_code == 200
        assert first.json()["title"] == "Staff Engineer"
        assert first.json()["expires_at"] is not None
        assert [first.json()["view_count"], second.json()["view_count"]] == [1, 2]

        listed = client.get("/api/resumes", headers=headers).json()
        assert [(r["id"], r["is_public"]) for r in listed] == [(resume_id, True)]

        assert client.delete(f"/api/resumes/{resume_id}/share", headers=headers).status_code == 204
        assert client.get(f"/api/shared/{resume_id}").status_code == 404

        db = session_factory()
        try:
            events = [e.event_type for e in db.query(AnalyticsEvent).all()]
        finally:
            db.close()
        assert sorted(events) == ["resume_created", "resume_shared", "resume_unshared"]

    def test_timestamps_carry_utc_offset(self, client, alice, auth_headers):
        headers = auth_headers(alice)
        resume_id = client.post("/api/resumes", json={}, headers=headers).json()["id"]
        client.post(f"/api/resumes/{resume_id}/share", json={"expires_in_days": 7}, headers=headers)

        resume = client.get(f"/api/resumes/{resume_id}", headers=headers).json()
        assert resume["created_at"].endswith("+00:00")
        assert resume["updated_at"].endswith("+00:00")
        assert resume["versions"][0]["timestamp"].endswith("+00:00")

        shared = client.get(f"/api/shared/{resume_id}").json()
        assert shared["created_at"].endswith("+00:00")
        assert shared["expires_at"].endswith("+00:00")

        profile = client.get("/api/profile", headers=headers).json()
        assert profile["last_login"].endswith("+00:00")

    def test_share_without_body_never_expires(self, client, alice, auth_headers):
        headers = auth_headers(alice)
        resume_id = client.post("/api/resumes", json={}, headers=headers).json()["id"]

        assert client.post(f"/api/resumes/{resume_id}/share", headers=headers).status_code == 200
        assert client.get(f"/api/shared/{resume_id}").json()["expires_at"] is None

    def test_invalid_expiry_is_422(self, client, alice, auth_headers):
        headers = auth_headers(alice)
        resume_id = client.post("/api/resumes", json={}, headers=headers).json()["id"]
        response = client.post(f"/api/resumes/{resume_id}/share", json={"expires_in_days": 0}, headers=headers)
        assert response.status_code == 422

    def test_expired_link_is_410(self, client, alice, auth_headers, session_factory):
        headers = auth_headers(alice)
        resume_id = client.post("/api/resumes", json={}, headers=headers).json()["id"]
        client.post(f"/api/resumes/{resume_id}/share", json={"expires_in_days": 1}, headers=headers)

        db = session_factory()
        try:
            db.get(SharedResume, resume_id).expires_at = utcnow() - timedelta(hours=1)
            db.commit()
        finally:
            db.close()

        response = client.get(f"/api/shared/{resume_id}")
        assert response.status_code == 410
        assert response.json()["detail"] == "This shared resume has expired"

    def test_other_owner_sees_404(self, client, alice, bob, auth_headers):
        resume_id = client.post("/api/resumes", json={}, headers=auth_headers(alice)).json()["id"]

        for method in ("get", "delete"):
            response = getattr(client, method)(f"/api/resumes/{resume_id}", headers=auth_headers(bob))
            assert response.status_code == 404
        assert client.get(f"/api/resumes/{resume_id}", headers=auth_headers(alice)).status_code == 200

    def test_delete(self, client, alice, auth_headers):
        headers = auth_headers(alice)
        resume_id = client.post("/api/resumes", json={}, headers=headers).json()["id"]

        assert client.delete(f"/api/resumes/{resume_id}", headers=headers).status_code == 204
        assert client.get(f"/api/resumes/{resume_id}", headers=headers).status_code == 404
        assert client.get("/api/profile/settings", headers=headers).json()["recently_used"]["resumes"] == []


class TestTemplatesApi:

    def test_admin_only_writes(self, client, alice, admin, auth_headers):
        payload = {"name": "Modern", "category": "tech", "popularity": 5}

        assert client.post("/api/templates", json=payload).status_code == 401
        client.post("/api/profile/bootstrap", headers=auth_headers(alice))
        assert client.post("/api/templates", json=payload, headers=auth_headers(alice)).status_code == 403

        created = client.post("/api/templates", json=payload, headers=auth_headers(admin))
        assert created.status_code == 201
        template_id = created.json()["id"]

        listed = client.get("/api/templates", params={"category": "tech"}).json()
        assert [t["id"] for t in listed] == [template_id]
        assert client.get(f"/api/templates/{template_id}").json()["is_default"] is False
        assert client.get(f"/api/templates/{template_id}", params={"is_default": True}).status_code == 404

    def test_default_catalog(self, client, admin, auth_headers):
        created = client.post(
            "/api/templates", params={"is_default": True}, json={"name": "Starter"},
            headers=auth_headers(admin),
        )
        assert created.json()["is_default"] is True
        assert [t["name"] for t in client.get("/api/templates/defaults").json()] == ["Starter"]
        assert client.get("/api/templates").json() == []


class TestAnalyticsApi:

    def test_event_is_accepted_even_when_dropped(self, client, alice, auth_headers):
        anonymous = client.post("/api/analytics/events", json={"event_type": "page_view"})
        assert anonymous.status_code == 202
        assert anonymous.json() == {"logged": False}

        signed_in = client.post(
            "/api/analytics/events", json={"event_type": "page_view", "data": {"page": "/"}},
            headers=auth_headers(alice),
        )
        assert signed_in.json() == {"logged": True}


class TestReconcileApi:

    def test_admin_only(self, client, alice, admin, auth_headers):
        client.post("/api/profile/bootstrap", headers=auth_headers(alice))
        assert client.post("/api/shared/reconcile", headers=auth_headers(alice)).status_code == 403

        response = client.post("/api/shared/reconcile", headers=auth_headers(admin))
        assert response.status_code == 200
        assert response.json() == {"flags_set": 0, "flags_cleared": 0, "orphans_removed": 0}
