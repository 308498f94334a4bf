"""Credential & Session Service."""
from .auth_manager import AuthManager, DEFAULT_ADMIN_ID, is_admin

__all__ = [
    "AuthManager",
    "DEFAULT_ADMIN_ID",
    "is_admin",
]
