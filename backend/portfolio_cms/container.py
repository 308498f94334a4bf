"""
Service container

Builds the credential service and record stores from Settings once per
process. The API layer pulls services from here; tests install their own
container built on a temporary DATA_DIR.

Usage:
    from portfolio_cms.container import get_container
    get_container().projects.list(page=1, limit=10)
"""
import logging
from typing import Optional

from portfolio_cms.auth.auth_manager import AuthManager
from portfolio_cms.core.config import Settings, settings as default_settings
from portfolio_cms.core.security import TOKEN_HEADER
from portfolio_cms.db.database import build_backend
from portfolio_cms.services.project_store import ProjectStore
from portfolio_cms.services.section_store import SectionStore
from portfolio_cms.services.team_member_store import TeamMemberStore

logger = logging.getLogger(__name__)

_container: Optional["Container"] = None


class Container:
    """Holds one instance of every core service for a given configuration."""

    def __init__(self, config: Settings):
        if config.JWT_ALGORITHM != TOKEN_HEADER["alg"]:
            raise ValueError(f"Unsupported JWT_ALGORITHM: {config.JWT_ALGORITHM!r}; only HS256 is implemented")
        self.settings = config

        def store_backend(name: str):
            return build_backend(config.STORE_BACKEND, name, config.DATA_DIR, config.DB_ENCRYPTION_KEY)

        self.auth = AuthManager(
            build_backend(config.AUTH_BACKEND, "users", config.DATA_DIR, config.AUTH_ENCRYPTION_KEY),
            jwt_secret=config.JWT_SECRET,
            expires_in=config.JWT_EXPIRES_IN,
            password_scheme=config.PASSWORD_SCHEME,
            password_rounds=config.PASSWORD_HASH_ROUNDS,
            default_admin={
                "username": config.DEFAULT_ADMIN_USERNAME,
                "email": config.DEFAULT_ADMIN_EMAIL,
                "password": config.DEFAULT_ADMIN_PASSWORD,
            },
        )
        self.projects = ProjectStore(store_backend("projects"))
        self.sections = SectionStore(store_backend("sections"))
        self.team_members = TeamMemberStore(store_backend("team-members"))

        logger.info(
            f"Services configured (auth backend: {config.AUTH_BACKEND}, "
            f"store backend: {config.STORE_BACKEND}, data dir: {config.DATA_DIR})"
        )

    def bootstrap(self) -> None:
        """First-run initialization; safe on every start."""
        self.auth.bootstrap_default_admin()
        self.sections.initialize_default_sections()


def get_container() -> Container:
    global _container
    if _container is None:
        _container = Container(default_settings)
    return _container


def set_container(container: Optional[Container]) -> None:
    """Install (or clear, with None) the process-wide container."""
    global _container
    _container = container
