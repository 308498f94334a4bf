"""
Custom exceptions for the portfolio core

Raised inside the credential service and record stores, and converted into
result values (AuthResult, VerifyResult, None, False) before they cross a
public operation boundary.

Usage:
    from portfolio_cms.core.exceptions import TokenExpired

    try:
        claims = decode_token(token, secret)
    except TokenError as e:
        logger.debug(f"Token rejected: {e}")
"""

from typing import Optional, Any, Dict, List


class PortfolioError(Exception):
    """Base exception for all portfolio core errors"""

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details
        }


# ============================================
# Authentication Errors
# ============================================

class InvalidCredentials(PortfolioError):
    """Login lookup or password mismatch (never says which)"""

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message, code="INVALID_CREDENTIALS")


class UserAlreadyExists(PortfolioError):
    """Username or email already taken"""

    def __init__(self, message: str = "User already exists"):
        super().__init__(message, code="USER_EXISTS")


# ============================================
# Token Errors
# ============================================

class TokenError(PortfolioError):
    """Base class for bearer token verification failures"""

    def __init__(self, message: str = "Invalid token", code: str = "TOKEN_INVALID"):
        super().__init__(message, code=code)


class TokenMalformed(TokenError):
    """Wrong segment count, bad base64url, or unparsable JSON"""

    def __init__(self, message: str = "Malformed token"):
        super().__init__(message, code="TOKEN_MALFORMED")


class TokenSignatureMismatch(TokenError):
    """Recomputed signature differs from the presented one"""

    def __init__(self, message: str = "Invalid signature"):
        super().__init__(message, code="TOKEN_SIGNATURE")


class TokenExpired(TokenError):
    """Embedded exp claim is in the past"""

    def __init__(self, message: str = "Token expired"):
        super().__init__(message, code="TOKEN_EXPIRED")


# ============================================
# Storage Errors
# ============================================

class RecordNotFound(PortfolioError):
    """Record id is absent from its collection"""

    def __init__(self, kind: str, record_id: str):
        super().__init__(
            f"{kind} not found",
            code="NOT_FOUND",
            details={"id": record_id}
        )


class StoreUnavailable(PortfolioError):
    """Backing collection file could not be read, decrypted or parsed"""

    def __init__(self, name: str, reason: str):
        super().__init__(
            f"Collection '{name}' unavailable: {reason}",
            code="STORE_UNAVAILABLE",
            details={"collection": name}
        )


class EncryptionError(PortfolioError):
    """Cipher could not be initialized or used"""

    def __init__(self, message: str):
        super().__init__(message, code="ENCRYPTION_ERROR")


class InvalidRecord(PortfolioError):
    """Merged fields do not form a valid record"""

    def __init__(self, kind: str, errors: List[Dict[str, Any]]):
        super().__init__(
            f"Invalid {kind.lower()} data",
            code="INVALID_RECORD",
            details={"errors": errors}
        )


class OperationNotSupported(PortfolioError):
    """Store does not offer this operation (e.g. deleting a section)"""

    def __init__(self, message: str):
        super().__init__(message, code="NOT_SUPPORTED")
