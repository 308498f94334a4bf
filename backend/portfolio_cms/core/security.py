"""
Bearer token signing/verification and password hashing

Token layout: base64url(header).base64url(payload).base64url(signature)
    header    {"alg":"HS256","typ":"JWT"}
    payload   caller claims followed by iat and exp (Unix seconds)
    signature HMAC-SHA256(secret, "<header>.<payload>")

Tokens are built and checked with python-jose. For ASCII claims they are
byte-identical to ones minted by the previous site for the same claims,
secret and clock.

Password hashes: $<scheme>$<rounds>$<salt>$<hash>
    2b             sha256 hex digest applied `rounds` times to password + salt
    pbkdf2-sha256  passlib's pbkdf2_sha256 format
"""

import hashlib
import hmac
import re
import secrets
import time
from typing import Any, Dict, Optional

from jose import jwt
from jose.exceptions import JWTClaimsError, JWTError
from passlib.hash import pbkdf2_sha256

from portfolio_cms.core.exceptions import (
    TokenExpired,
    TokenMalformed,
    TokenSignatureMismatch,
)

ALGORITHM = "HS256"
TOKEN_HEADER = {"alg": ALGORITHM, "typ": "JWT"}

LEGACY_SCHEME = "2b"
PBKDF2_SCHEME = "pbkdf2-sha256"
PASSWORD_SCHEMES = (LEGACY_SCHEME, PBKDF2_SCHEME)

_EXPIRY_UNITS = {"d": 24 * 60 * 60, "h": 60 * 60, "m": 60, "s": 1}
_EXPIRY_PATTERN = re.compile(r"^(\d+)([dhms]?)$")

# exp is checked here against an injectable clock
_DECODE_OPTIONS = {"verify_exp": False}


def parse_expiry(expiry: str) -> int:
    """
    Convert an expiry string into seconds.

    "7d" -> 604800, "24h" -> 86400, "30m" -> 1800, "60s" -> 60.
    A bare integer is taken as seconds.
    """
    match = _EXPIRY_PATTERN.match(expiry.strip()) if expiry else None
    if not match:
        raise ValueError(f"Invalid expiry format: {expiry!r}")
    value, unit = match.groups()
    return int(value) * _EXPIRY_UNITS.get(unit or "s")


# ---------------------------------------------------------------------------
# Tokens
# ---------------------------------------------------------------------------

def create_access_token(
    claims: Dict[str, Any],
    secret: str,
    expires_in: str = "7d",
    now: Optional[int] = None,
) -> str:
    """Sign claims into a bearer token with injected iat/exp"""
    issued_at = int(time.time()) if now is None else now
    to_encode = {**claims, "iat": issued_at, "exp": issued_at + parse_expiry(expires_in)}
    return jwt.encode(to_encode, secret, algorithm=ALGORITHM)


def decode_token(token: str, secret: str, now: Optional[int] = None) -> Dict[str, Any]:
    """
    Verify a bearer token and return its payload.

    Raises:
        TokenMalformed: structure, encoding, JSON, header or claim problems
        TokenSignatureMismatch: signature does not match header.payload
        TokenExpired: exp is in the past
    """
    if not isinstance(token, str):
        raise TokenMalformed("Token must be a string")

    parts = token.split(".")
    if len(parts) != 3 or not all(parts):
        raise TokenMalformed("Token must have three segments")

    try:
        header = jwt.get_unverified_header(token)
        jwt.get_unverified_claims(token)
    except JWTError as e:
        raise TokenMalformed(f"Undecodable token: {e}")
    if header.get("alg") != ALGORITHM:
        raise TokenMalformed(f"Unsupported algorithm: {header.get('alg')!r}")

    try:
        payload = jwt.decode(token, secret, algorithms=[ALGORITHM], options=_DECODE_OPTIONS)
    except JWTClaimsError as e:
        raise TokenMalformed(f"Invalid token claims: {e}")
    except JWTError:
        raise TokenSignatureMismatch()

    exp = payload.get("exp")
    if isinstance(exp, bool) or not isinstance(exp, int):
        raise TokenMalformed("Token has no integer exp claim")

    current = int(time.time()) if now is None else now
    if exp < current:
        raise TokenExpired()

    return payload


# ---------------------------------------------------------------------------
# Passwords
# ---------------------------------------------------------------------------

def _iterated_sha256(password: str, salt: str, rounds: int) -> str:
    hashed = password + salt
    for _ in range(rounds):
        hashed = hashlib.sha256(hashed.encode("utf-8")).hexdigest()
    return hashed


def get_password_hash(password: str, rounds: int = 12, scheme: str = LEGACY_SCHEME) -> str:
    """Hash a password into the $scheme$rounds$salt$hash form"""
    if scheme not in PASSWORD_SCHEMES:
        raise ValueError(f"Unknown password scheme: {scheme!r}")
    if rounds < 1:
        raise ValueError("Password hash rounds must be positive")

    if scheme == PBKDF2_SCHEME:
        return pbkdf2_sha256.using(rounds=rounds).hash(password)

    salt = secrets.token_hex(16)
    return f"${LEGACY_SCHEME}${rounds}${salt}${_iterated_sha256(password, salt, rounds)}"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Recompute the stored digest; malformed hashes never verify"""
    parts = hashed_password.split("$") if hashed_password else []
    if len(parts) != 5 or parts[0]:
        return False

    _, scheme, rounds_text, salt, expected = parts
    if not rounds_text.isdigit() or int(rounds_text) < 1:
        return False

    if scheme == PBKDF2_SCHEME:
        try:
            return pbkdf2_sha256.verify(plain_password, hashed_password)
        except (ValueError, TypeError):
            return False
    if scheme != LEGACY_SCHEME:
        return False

    actual = _iterated_sha256(plain_password, salt, int(rounds_text))
    return hmac.compare_digest(actual.encode("utf-8"), expected.encode("utf-8"))
