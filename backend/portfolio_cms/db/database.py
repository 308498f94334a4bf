"""
Collection persistence backends

Each collection kind (users, projects, sections, team-members) is one JSON
document. A backend loads and saves that whole document:

  EncryptedFileBackend  - Fernet-encrypted file under DATA_DIR (production)
  MemoryBackend         - process-local dict (fallback / tests)

Load failures never propagate: a missing file is the bootstrap path and an
unreadable, undecryptable or unparsable file is logged and reported as an
empty document. Write failures do propagate.

File location: {DATA_DIR}/{name}.json
"""
import json
import logging
import os
import tempfile
import threading
from copy import deepcopy
from functools import lru_cache
from pathlib import Path
from typing import Any, Callable, Dict

from portfolio_cms.core.encryption import CollectionCipher
from portfolio_cms.core.exceptions import EncryptionError, StoreUnavailable

logger = logging.getLogger(__name__)

COLLECTION_NAMES = ("users", "projects", "sections", "team-members")


class CollectionBackend:
    """Whole-document persistence for one named collection."""

    def __init__(self, name: str):
        self.name = name
        # Held by stores across load -> mutate -> save
        self.lock = threading.RLock()

    def exists(self) -> bool:
        raise NotImplementedError

    def load(self, empty: Callable[[], Dict[str, Any]]) -> Dict[str, Any]:
        raise NotImplementedError

    def save(self, document: Dict[str, Any]) -> None:
        raise NotImplementedError


class EncryptedFileBackend(CollectionBackend):
    """One encrypted JSON file per collection, rewritten on every save."""

    def __init__(self, name: str, data_dir: str, cipher: CollectionCipher):
        super().__init__(name)
        self.path = Path(data_dir) / f"{name}.json"
        self._cipher = cipher

    # ── Setup ──────────────────────────────────────────────────────────

    def _ensure_data_dir(self) -> None:
        os.makedirs(self.path.parent, exist_ok=True)

    # ── Read / write ───────────────────────────────────────────────────

    def exists(self) -> bool:
        return self.path.exists()

    def load(self, empty: Callable[[], Dict[str, Any]]) -> Dict[str, Any]:
        if not self.path.exists():
            return empty()
        try:
            encrypted = self.path.read_text(encoding="utf-8")
            document = json.loads(self._cipher.decrypt(encrypted))
            if not isinstance(document, dict):
                raise ValueError("top-level JSON value is not an object")
            return document
        except (OSError, EncryptionError, ValueError) as e:
            error = StoreUnavailable(self.name, str(e))
            logger.error(f"Error loading {self.path}: {error.message}")
            return empty()

    def save(self, document: Dict[str, Any]) -> None:
        self._ensure_data_dir()
        encrypted = self._cipher.encrypt(json.dumps(document, default=str))

        # Temp file in the same directory so os.replace stays atomic
        fd, tmp_path = tempfile.mkstemp(prefix=f".{self.name}.", suffix=".tmp", dir=self.path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(encrypted)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise


class MemoryBackend(CollectionBackend):
    """Process-local collection; documents round-trip through JSON like the file backend."""

    def __init__(self, name: str):
        super().__init__(name)
        self._document: str | None = None

    def exists(self) -> bool:
        return self._document is not None

    def load(self, empty: Callable[[], Dict[str, Any]]) -> Dict[str, Any]:
        if self._document is None:
            return empty()
        return json.loads(self._document)

    def save(self, document: Dict[str, Any]) -> None:
        self._document = json.dumps(deepcopy(document), default=str)


@lru_cache(maxsize=8)
def _cipher_for(passphrase: str) -> CollectionCipher:
    # PBKDF2 derivation is slow; derive once per passphrase
    return CollectionCipher(passphrase)


def build_backend(kind: str, name: str, data_dir: str, passphrase: str) -> CollectionBackend:
    """
    Construct the backend selected by configuration.

    Args:
        kind:       "file" or "memory"
        name:       collection name, one of COLLECTION_NAMES
        data_dir:   directory holding encrypted files (file backend only)
        passphrase: encryption passphrase (file backend only)
    """
    if name not in COLLECTION_NAMES:
        raise ValueError(f"Unknown collection: {name!r}")
    if kind == "file":
        return EncryptedFileBackend(name, data_dir, _cipher_for(passphrase))
    if kind == "memory":
        return MemoryBackend(name)
    raise ValueError(f"Unknown storage backend: '{kind}'. Valid: ['file', 'memory']")
