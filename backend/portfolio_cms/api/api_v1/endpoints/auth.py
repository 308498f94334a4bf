"""
Authentication endpoints: login, logout, current user, user creation
"""

from fastapi import APIRouter, Depends, HTTPException, Response, status
import logging

from portfolio_cms.api.deps import get_auth_manager, get_current_user, require_admin
from portfolio_cms.auth.auth_manager import AuthManager
from portfolio_cms.container import get_container
from portfolio_cms.core.security import parse_expiry
from portfolio_cms.schemas.user import AuthResult, LoginRequest, TokenClaims, UserCreate

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
async def auth_health():
    """Health check for auth endpoints"""
    return {"status": "healthy", "service": "authentication"}


@router.post("/login", response_model=AuthResult)
def login(
    credentials: LoginRequest,
    response: Response,
    auth: AuthManager = Depends(get_auth_manager),
):
    """
    Exchange username-or-email and password for a bearer token

    The token is returned in the body and also set as an HTTP-only cookie
    for browser clients of the admin area.
    """
    result = auth.login(credentials.username, credentials.password)
    if not result.success:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=result.message,
        )

    config = get_container().settings
    response.set_cookie(
        key=config.AUTH_COOKIE_NAME,
        value=result.token,
        max_age=parse_expiry(config.JWT_EXPIRES_IN),
        httponly=True,
        secure=config.ENVIRONMENT == "production",
        samesite="lax",
    )
    return result


@router.post("/logout")
async def logout(response: Response):
    """Drop the auth cookie; tokens themselves stay valid until they expire"""
    response.delete_cookie(get_container().settings.AUTH_COOKIE_NAME)
    return {"success": True, "message": "Logged out"}


@router.get("/me")
async def me(user: TokenClaims = Depends(get_current_user)):
    """Claims of the currently authenticated caller"""
    return {"success": True, "user": user.model_dump(by_alias=True)}


@router.post("/users", response_model=AuthResult, status_code=status.HTTP_201_CREATED)
def create_user(
    user_data: UserCreate,
    auth: AuthManager = Depends(get_auth_manager),
    _admin: TokenClaims = Depends(require_admin),
):
    """Create another admin user"""
    result = auth.create_user(user_data)
    if not result.success:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=result.message)
    return result
