"""
HTTP API tests
"""
import pytest

from portfolio_cms.container import Container
from portfolio_cms.core.security import create_access_token

from conftest import ADMIN_EMAIL, ADMIN_PASSWORD, ADMIN_USERNAME, TEST_JWT_SECRET


def _token_for(role: str, secret: str = TEST_JWT_SECRET) -> str:
    return create_access_token(
        {"userId": "user_1", "username": "someone", "email": "someone@portfolio.dev", "role": role},
        secret,
    )


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert "X-Process-Time" in response.headers

    def test_root(self, client):
        assert client.get("/").json()["docs"] == "/docs"

    def test_auth_health(self, client):
        assert client.get("/api/v1/auth/health").json()["service"] == "authentication"


class TestAuth:
    def test_login(self, client):
        response = client.post(
            "/api/v1/auth/login",
            json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD},
        )
        body = response.json()

        assert response.status_code == 200
        assert body["success"] is True
        assert body["user"]["email"] == ADMIN_EMAIL
        assert "password_hash" not in body["user"]
        assert response.cookies.get("auth-token") == body["token"]

    def test_login_by_email(self, client):
        response = client.post(
            "/api/v1/auth/login",
            json={"username": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
        )
        assert response.status_code == 200

    def test_login_failure(self, client):
        response = client.post(
            "/api/v1/auth/login",
            json={"username": ADMIN_USERNAME, "password": "wrong"},
        )
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid credentials"

    def test_me_with_bearer(self, client, admin_headers):
        response = client.get("/api/v1/auth/me", headers=admin_headers)
        user = response.json()["user"]

        assert response.status_code == 200
        assert user["userId"] == "admin_1"
        assert user["role"] == "admin"

    def test_me_with_cookie(self, client):
        client.post("/api/v1/auth/login", json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD})
        response = client.get("/api/v1/auth/me")

        assert response.status_code == 200
        assert response.json()["user"]["username"] == ADMIN_USERNAME

    def test_logout_clears_cookie(self, client):
        client.post("/api/v1/auth/login", json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD})
        client.post("/api/v1/auth/logout")

        assert client.get("/api/v1/auth/me").status_code == 401

    def test_me_without_token(self, client):
        response = client.get("/api/v1/auth/me")
        assert response.status_code == 401
        assert response.json()["detail"] == "Authentication required"

    def test_me_with_bad_token(self, client):
        response = client.get("/api/v1/auth/me", headers={"Authorization": "Bearer not.a.token"})
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid token"

    def test_me_with_foreign_token(self, client):
        headers = {"Authorization": f"Bearer {_token_for('admin', secret='another-secret')}"}
        assert client.get("/api/v1/auth/me", headers=headers).status_code == 401

    def test_create_user(self, client, admin_headers):
        response = client.post(
            "/api/v1/auth/users",
            json={"username": "editor", "email": "editor@portfolio.dev", "password": "s3cret"},
            headers=admin_headers,
        )
        assert response.status_code == 201
        assert response.json()["user"]["username"] == "editor"

        login = client.post("/api/v1/auth/login", json={"username": "editor", "password": "s3cret"})
        assert login.status_code == 200

    def test_create_user_collision(self, client, admin_headers):
        response = client.post(
            "/api/v1/auth/users",
            json={"username": ADMIN_USERNAME, "email": "new@portfolio.dev", "password": "pw"},
            headers=admin_headers,
        )
        assert response.status_code == 409

    def test_create_user_requires_auth(self, client):
        response = client.post(
            "/api/v1/auth/users",
            json={"username": "editor", "email": "editor@portfolio.dev", "password": "pw"},
        )
        assert response.status_code == 401


class TestAccessGuard:
    def test_non_admin_role_forbidden(self, client, project_data):
        headers = {"Authorization": f"Bearer {_token_for('editor')}"}
        response = client.post("/api/v1/projects/", json=project_data, headers=headers)

        assert response.status_code == 403
        assert response.json()["detail"] == "Admin access required"

    def test_mutations_require_token(self, client, project_data):
        assert client.post("/api/v1/projects/", json=project_data).status_code == 401
        assert client.put("/api/v1/sections/", json={"section": "hero", "content": {}}).status_code == 401
        assert client.post("/api/v1/team-members/", json={"name": "A", "role": "B"}).status_code == 401
        assert client.delete("/api/v1/projects/project_1").status_code == 401

    def test_reads_are_public(self, client):
        assert client.get("/api/v1/projects/").status_code == 200
        assert client.get("/api/v1/sections/").status_code == 200
        assert client.get("/api/v1/team-members/").status_code == 200


class TestProjects:
    def test_crud(self, client, admin_headers, project_data):
        created = client.post("/api/v1/projects/", json=project_data, headers=admin_headers)
        assert created.status_code == 200
        project = created.json()["data"]
        assert project["slug"] == "my-app"

        fetched = client.get(f"/api/v1/projects/{project['id']}")
        assert fetched.json()["data"]["title"] == "My App"
        assert client.get("/api/v1/projects/slug/my-app").json()["data"]["id"] == project["id"]

        updated = client.put(
            f"/api/v1/projects/{project['id']}",
            json={"title": "My New App"},
            headers=admin_headers,
        )
        assert updated.status_code == 200
        assert updated.json()["data"]["slug"] == "my-new-app"
        assert updated.json()["data"]["category"] == "web"
        assert client.get("/api/v1/projects/slug/my-app").status_code == 404

        deleted = client.delete(f"/api/v1/projects/{project['id']}", headers=admin_headers)
        assert deleted.json() == {"success": True, "message": "Project deleted successfully"}
        assert client.get(f"/api/v1/projects/{project['id']}").status_code == 404

    def test_missing_project(self, client, admin_headers):
        assert client.get("/api/v1/projects/project_missing").status_code == 404
        assert client.put(
            "/api/v1/projects/project_missing", json={"title": "x"}, headers=admin_headers
        ).status_code == 404
        assert client.delete("/api/v1/projects/project_missing", headers=admin_headers).status_code == 404

    def test_invalid_project_rejected(self, client, admin_headers, project_data):
        response = client.post(
            "/api/v1/projects/", json={**project_data, "title": "   "}, headers=admin_headers
        )
        assert response.status_code == 422

    def test_blank_title_update_rejected(self, client, admin_headers, project_data):
        project = client.post("/api/v1/projects/", json=project_data, headers=admin_headers).json()["data"]

        response = client.put(
            f"/api/v1/projects/{project['id']}", json={"title": "   "}, headers=admin_headers
        )

        assert response.status_code == 422
        assert client.get(f"/api/v1/projects/{project['id']}").json()["data"]["title"] == "My App"

    def test_pagination_envelope(self, client, admin_headers, project_data):
        for i in range(12):
            client.post("/api/v1/projects/", json={**project_data, "title": f"App {i}"}, headers=admin_headers)

        body = client.get("/api/v1/projects/", params={"page": 2, "limit": 5}).json()

        assert len(body["data"]) == 5
        assert body["pagination"] == {"page": 2, "limit": 5, "total": 12, "pages": 3}

    def test_listing_filters(self, client, admin_headers, project_data):
        client.post("/api/v1/projects/", json=project_data, headers=admin_headers)
        client.post(
            "/api/v1/projects/",
            json={**project_data, "title": "Data Tool", "category": "data", "featured": False},
            headers=admin_headers,
        )

        web = client.get("/api/v1/projects/", params={"category": "web"}).json()
        assert [p["title"] for p in web["data"]] == ["My App"]

        featured = client.get("/api/v1/projects/", params={"featured": "false"}).json()
        assert [p["title"] for p in featured["data"]] == ["Data Tool"]

        search = client.get("/api/v1/projects/", params={"search": "fastapi"}).json()
        assert search["pagination"]["total"] == 2

    def test_bad_paging_params(self, client):
        assert client.get("/api/v1/projects/", params={"page": 0}).status_code == 422
        assert client.get("/api/v1/projects/", params={"limit": 101}).status_code == 422


class TestSections:
    def test_defaults_seeded_at_startup(self, client):
        data = client.get("/api/v1/sections/").json()["data"]
        assert list(data) == ["hero", "about", "team", "tools", "contact", "footer"]

    def test_update_section(self, client, admin_headers):
        response = client.put(
            "/api/v1/sections/",
            json={"section": "hero", "content": {"title": "Hello"}},
            headers=admin_headers,
        )
        assert response.status_code == 200
        assert response.json()["data"]["id"] == "section_hero"

        hero = client.get("/api/v1/sections/hero").json()["data"]
        assert hero["content"] == {"title": "Hello"}

    def test_invalid_section_type(self, client, admin_headers):
        assert client.get("/api/v1/sections/sidebar").status_code == 422
        response = client.put(
            "/api/v1/sections/",
            json={"section": "sidebar", "content": {}},
            headers=admin_headers,
        )
        assert response.status_code == 422


class TestTeamMembers:
    def test_crud(self, client, admin_headers):
        created = client.post(
            "/api/v1/team-members/",
            json={"name": "Ada Lovelace", "role": "Lead Engineer", "skills": ["Python"]},
            headers=admin_headers,
        )
        assert created.status_code == 200
        member = created.json()["data"]
        assert member["is_active"] is True

        listed = client.get("/api/v1/team-members/").json()["data"]
        assert [m["id"] for m in listed] == [member["id"]]

        client.put(
            f"/api/v1/team-members/{member['id']}",
            json={"is_active": False},
            headers=admin_headers,
        )
        assert client.get("/api/v1/team-members/").json()["data"] == []

        deleted = client.delete(f"/api/v1/team-members/{member['id']}", headers=admin_headers)
        assert deleted.status_code == 200
        assert client.delete(f"/api/v1/team-members/{member['id']}", headers=admin_headers).status_code == 404


def test_not_found_body(client):
    response = client.get("/api/v1/projects/project_missing")

    assert response.status_code == 404
    assert response.json() == {
        "success": False,
        "code": "NOT_FOUND",
        "message": "Project not found",
        "details": {"id": "project_missing"},
    }


def test_unsupported_jwt_algorithm(test_settings):
    with pytest.raises(ValueError):
        Container(test_settings.model_copy(update={"JWT_ALGORITHM": "RS256"}))


def test_invalid_merged_record_is_422(client, admin_headers):
    member = client.post(
        "/api/v1/team-members/", json={"name": "Ada", "role": "Engineer"}, headers=admin_headers
    ).json()["data"]

    response = client.put(f"/api/v1/team-members/{member['id']}", json={"bio": None}, headers=admin_headers)

    assert response.status_code == 422
    assert response.json()["code"] == "INVALID_RECORD"
    assert response.json()["details"]["errors"][0]["loc"] == ["bio"]
