"""
Noteful Backend: Document Identifiers
=====================================

What:  Generation and validation of store-assigned document ids.
How:   24 lowercase hex characters: a 4-byte big-endian creation timestamp
       followed by 8 random bytes, the same shape as a MongoDB ObjectId.
Who:   The store adapter assigns ids on create; services validate ids taken
       from the URL or request body before any query is issued.
"""

import re
import secrets
import time
from typing import Any

ID_LENGTH = 24

_ID_PATTERN = re.compile(r"[0-9a-fA-F]{24}")


def new_id() -> str:
    """Return a fresh document id, roughly ordered by creation time."""
    timestamp = int(time.time()) & 0xFFFFFFFF
    return f"{timestamp:08x}{secrets.token_hex(8)}"


def is_valid_id(value: Any) -> bool:
    """True when `value` is a string shaped like a document id."""
    return isinstance(value, str) and _ID_PATTERN.fullmatch(value) is not None


def normalize_id(value: str) -> str:
    """Ids are stored lowercase; lookups accept either case."""
    return value.lower()
