"""Collection persistence backends (encrypted file / in-memory)."""
from .database import (
    COLLECTION_NAMES,
    CollectionBackend,
    EncryptedFileBackend,
    MemoryBackend,
    build_backend,
)

__all__ = [
    "COLLECTION_NAMES",
    "CollectionBackend", "EncryptedFileBackend", "MemoryBackend",
    "build_backend",
]
