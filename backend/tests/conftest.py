"""
Portfolio CMS - Test Configuration and Fixtures
"""
import pytest
from fastapi.testclient import TestClient

from portfolio_cms.container import Container, set_container
from portfolio_cms.core.config import Settings
from portfolio_cms.db.database import MemoryBackend
from portfolio_cms.auth.auth_manager import AuthManager
from portfolio_cms.main import app

TEST_JWT_SECRET = "test-jwt-secret-key-for-testing"

ADMIN_USERNAME = "admin"
ADMIN_EMAIL = "admin@portfolio.com"
ADMIN_PASSWORD = "admin123"


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Settings pointing at a throwaway data directory"""
    return Settings(
        ENVIRONMENT="testing",
        DATA_DIR=str(tmp_path / "data"),
        JWT_SECRET=TEST_JWT_SECRET,
        AUTH_ENCRYPTION_KEY="test-auth-encryption-key",
        DB_ENCRYPTION_KEY="test-db-encryption-key",
    )


@pytest.fixture
def container(test_settings):
    """Fresh service container installed process-wide for the test"""
    c = Container(test_settings)
    set_container(c)
    yield c
    set_container(None)


@pytest.fixture
def auth(container) -> AuthManager:
    return container.auth


@pytest.fixture
def memory_auth() -> AuthManager:
    """AuthManager on the in-memory backend"""
    return AuthManager(MemoryBackend("users"), jwt_secret=TEST_JWT_SECRET)


@pytest.fixture
def project_store(container):
    return container.projects


@pytest.fixture
def section_store(container):
    return container.sections


@pytest.fixture
def team_member_store(container):
    return container.team_members


@pytest.fixture
def client(container):
    """Test client; entering it runs the startup bootstrap"""
    with TestClient(app) as c:
        yield c


@pytest.fixture
def admin_token(client) -> str:
    response = client.post(
        "/api/v1/auth/login",
        json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 200
    # Keep later requests explicit about how they authenticate
    client.cookies.clear()
    return response.json()["token"]


@pytest.fixture
def admin_headers(admin_token) -> dict:
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def project_data() -> dict:
    return {
        "title": "My App",
        "description": "A demo application",
        "technologies": ["Python", "FastAPI"],
        "images": ["https://cdn.portfolio.dev/my-app.png"],
        "live_url": "https://my-app.portfolio.dev",
        "github_url": None,
        "category": "web",
        "featured": True,
    }
