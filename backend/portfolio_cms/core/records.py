"""
Helpers shared by everything that stamps records: ids and timestamps
"""

import secrets
import time
from datetime import datetime, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_record_id(prefix: str) -> str:
    """Time-based id with a random suffix, e.g. project_1717171717171_a1b2c3"""
    return f"{prefix}_{int(time.time() * 1000)}_{secrets.token_hex(3)}"
