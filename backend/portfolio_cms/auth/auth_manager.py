"""
Credential & Session Service - AuthManager facade

The single interface for admin identity:
  1. bootstrap_default_admin - idempotent first-run admin seed
  2. login                   - username-or-email + password -> signed token
  3. verify_token            - stateless bearer token check, never raises
  4. create_user             - add a user, rejecting username/email collisions
  5. get_all_users           - redacted listing

Users live in one collection document, persisted through whichever
CollectionBackend the container selected (encrypted file or memory):

    {"users": {id: user}, "user_ids": [id, ...]}

Expected failures are returned as AuthResult / VerifyResult values. Password
hashes never leave this module; callers only ever see UserPublic.
"""
import logging
from typing import Any, Dict, Iterator, List, Optional, Union

from pydantic import ValidationError

from portfolio_cms.core.exceptions import InvalidCredentials, TokenError, UserAlreadyExists
from portfolio_cms.core.records import new_record_id, utcnow
from portfolio_cms.core.security import (
    LEGACY_SCHEME,
    create_access_token,
    decode_token,
    get_password_hash,
    verify_password,
)
from portfolio_cms.db.database import CollectionBackend
from portfolio_cms.schemas.user import AuthResult, TokenClaims, User, UserCreate, UserPublic, VerifyResult

logger = logging.getLogger(__name__)

DEFAULT_ADMIN_ID = "admin_1"

# Verified against when no user matches, so both failure paths do the same work
_DUMMY_HASH = get_password_hash("not-a-real-password")


def is_admin(role: Optional[str]) -> bool:
    return role == "admin"


class AuthManager:
    """Facade class - the single import for all credential and token operations."""

    def __init__(
        self,
        backend: CollectionBackend,
        jwt_secret: str,
        expires_in: str = "7d",
        password_scheme: str = LEGACY_SCHEME,
        password_rounds: int = 12,
        default_admin: Optional[Dict[str, str]] = None,
    ):
        self.backend = backend
        self._jwt_secret = jwt_secret
        self.expires_in = expires_in
        self.password_scheme = password_scheme
        self.password_rounds = password_rounds
        self.default_admin = default_admin or {
            "username": "admin",
            "email": "admin@portfolio.com",
            "password": "admin123",
        }

    # ══════════════════════════════════════════════════════════════════
    #  STORAGE
    # ══════════════════════════════════════════════════════════════════

    @staticmethod
    def _empty() -> Dict[str, Any]:
        return {"users": {}, "user_ids": []}

    def _load(self) -> Dict[str, Any]:
        document = self.backend.load(self._empty)
        document.setdefault("users", {})
        document.setdefault("user_ids", [])
        return document

    def _iter_users(self, document: Dict[str, Any]) -> Iterator[User]:
        for raw in document["users"].values():
            try:
                yield User.model_validate(raw)
            except ValidationError as e:
                logger.error(f"Skipping unreadable user record {raw.get('id')!r}: {e}")

    def _insert(self, document: Dict[str, Any], user: User) -> None:
        document["users"][user.id] = user.model_dump(mode="json")
        document["user_ids"].append(user.id)
        self.backend.save(document)

    def _hash(self, password: str) -> str:
        return get_password_hash(password, rounds=self.password_rounds, scheme=self.password_scheme)

    # ══════════════════════════════════════════════════════════════════
    #  BOOTSTRAP
    # ══════════════════════════════════════════════════════════════════

    def bootstrap_default_admin(self) -> Optional[UserPublic]:
        """
        Create the documented default admin when there are no users.
        Returns the new admin, or None when users already exist.
        """
        with self.backend.lock:
            document = self._load()
            if document["user_ids"]:
                return None

            admin = User(
                id=DEFAULT_ADMIN_ID,
                username=self.default_admin["username"],
                email=self.default_admin["email"],
                password_hash=self._hash(self.default_admin["password"]),
                role="admin",
                created_at=utcnow(),
            )
            try:
                self._insert(document, admin)
            except OSError as e:
                logger.error(f"Error initializing default admin: {e}")
                return None

        logger.info(f"Default admin user created: {admin.username}")
        return admin.to_public()

    # ══════════════════════════════════════════════════════════════════
    #  LOGIN / TOKENS
    # ══════════════════════════════════════════════════════════════════

    def _authenticate(self, identifier: str, password: str) -> User:
        user = next(
            (u for u in self._iter_users(self._load()) if u.username == identifier or u.email == identifier),
            None,
        )
        if user is None:
            verify_password(password, _DUMMY_HASH)
            raise InvalidCredentials()
        if not verify_password(password, user.password_hash):
            raise InvalidCredentials()
        return user

    def login(self, identifier: str, password: str) -> AuthResult:
        """Exchange username-or-email + password for a signed token."""
        try:
            user = self._authenticate(identifier, password)
        except InvalidCredentials as e:
            logger.warning("Failed login attempt")
            return AuthResult(success=False, message=e.message)

        token = create_access_token(
            {"userId": user.id, "username": user.username, "email": user.email, "role": user.role},
            self._jwt_secret,
            expires_in=self.expires_in,
        )
        return AuthResult(success=True, token=token, user=user.to_public())

    def verify_token(self, token: str) -> VerifyResult:
        """Check signature, structure and expiry; report failure instead of raising."""
        try:
            payload = decode_token(token, self._jwt_secret)
            claims = TokenClaims.model_validate(payload)
        except TokenError as e:
            return VerifyResult(success=False, reason=e.message)
        except ValidationError:
            return VerifyResult(success=False, reason="Malformed token claims")
        return VerifyResult(success=True, user=claims)

    # ══════════════════════════════════════════════════════════════════
    #  USERS
    # ══════════════════════════════════════════════════════════════════

    def _check_unique(self, document: Dict[str, Any], data: UserCreate) -> None:
        """Case-sensitive collision check on username and email."""
        for existing in self._iter_users(document):
            if existing.username == data.username or existing.email == data.email:
                raise UserAlreadyExists()

    def create_user(self, fields: Union[UserCreate, Dict[str, Any]]) -> AuthResult:
        """Hash the password and append a new user unless username/email is taken."""
        try:
            data = fields if isinstance(fields, UserCreate) else UserCreate.model_validate(fields)
        except ValidationError:
            return AuthResult(success=False, message="Invalid user data")

        with self.backend.lock:
            document = self._load()
            try:
                self._check_unique(document, data)
            except UserAlreadyExists as e:
                return AuthResult(success=False, message=e.message)

            user = User(
                id=new_record_id("user"),
                username=data.username,
                email=data.email,
                password_hash=self._hash(data.password),
                role=data.role,
                created_at=utcnow(),
            )
            self._insert(document, user)

        logger.info(f"User created: {user.username}")
        return AuthResult(success=True, user=user.to_public())

    def get_all_users(self) -> List[UserPublic]:
        document = self._load()
        users = {u.id: u for u in self._iter_users(document)}
        return [users[i].to_public() for i in document["user_ids"] if i in users]
