"""
API dependencies - service lookup and the access guard

The guard reads a bearer token from the Authorization header, falling back
to the auth cookie set at login, verifies it through the AuthManager and
rejects non-admin callers before any mutating route runs.
"""

from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from portfolio_cms.auth.auth_manager import AuthManager, is_admin
from portfolio_cms.container import get_container
from portfolio_cms.schemas.user import TokenClaims
from portfolio_cms.services.project_store import ProjectStore
from portfolio_cms.services.section_store import SectionStore
from portfolio_cms.services.team_member_store import TeamMemberStore

# Bearer token security; missing header falls through to the cookie
security = HTTPBearer(auto_error=False)


def get_auth_manager() -> AuthManager:
    return get_container().auth


def get_project_store() -> ProjectStore:
    return get_container().projects


def get_section_store() -> SectionStore:
    return get_container().sections


def get_team_member_store() -> TeamMemberStore:
    return get_container().team_members


def get_request_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[str]:
    if credentials is not None:
        return credentials.credentials
    return request.cookies.get(get_container().settings.AUTH_COOKIE_NAME)


def get_current_user(
    token: Optional[str] = Depends(get_request_token),
    auth: AuthManager = Depends(get_auth_manager),
) -> TokenClaims:
    """Verified token claims of the caller"""
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    result = auth.verify_token(token)
    if not result.success:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return result.user


def require_admin(user: TokenClaims = Depends(get_current_user)) -> TokenClaims:
    if not is_admin(user.role):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return user
