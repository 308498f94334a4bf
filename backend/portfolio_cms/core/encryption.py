"""
Encryption of collection documents at rest

Each collection file holds one Fernet token wrapping the serialized JSON
document. The Fernet key is derived from a configured passphrase
(DB_ENCRYPTION_KEY or AUTH_ENCRYPTION_KEY) with PBKDF2-HMAC-SHA256.
"""

import base64
import logging

from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from portfolio_cms.core.exceptions import EncryptionError

logger = logging.getLogger(__name__)

_KDF_SALT = b'portfolio_cms_collections'
_KDF_ITERATIONS = 100000
_MIN_PASSPHRASE_LENGTH = 16


class CollectionCipher:
    """Fernet cipher bound to one passphrase"""

    def __init__(self, passphrase: str):
        if not passphrase or len(passphrase) < _MIN_PASSPHRASE_LENGTH:
            raise EncryptionError(
                f"Encryption key is not configured or shorter than {_MIN_PASSPHRASE_LENGTH} characters"
            )
        self._fernet = Fernet(self._derive_key(passphrase))
        logger.debug("Collection cipher initialized")

    @staticmethod
    def _derive_key(passphrase: str) -> bytes:
        """32-byte PBKDF2 key, urlsafe-base64 encoded as Fernet expects"""
        kdf = PBKDF2HMAC(
            algorithm=hashes.SHA256(),
            length=32,
            salt=_KDF_SALT,
            iterations=_KDF_ITERATIONS,
        )
        return base64.urlsafe_b64encode(kdf.derive(passphrase.encode('utf-8')))

    def encrypt(self, document_json: str) -> str:
        return self._fernet.encrypt(document_json.encode('utf-8')).decode('ascii')

    def decrypt(self, token: str) -> str:
        """
        Recover the serialized document from a stored token

        Raises:
            EncryptionError: empty input, wrong key or tampered file
        """
        if not token or not token.strip():
            raise EncryptionError("Collection file is empty")

        try:
            return self._fernet.decrypt(token.strip().encode('ascii')).decode('utf-8')
        except (InvalidToken, UnicodeError):
            raise EncryptionError("Failed to decrypt collection: invalid key or corrupted payload")


def generate_key() -> str:
    """Random passphrase suitable for DB_ENCRYPTION_KEY / AUTH_ENCRYPTION_KEY"""
    return Fernet.generate_key().decode()
