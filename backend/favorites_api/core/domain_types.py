"""Domain Types - rich types that replace bare primitives across the codebase.

Invariants:
    - FavoriteId wraps int and is always assigned by storage
    - SessionId wraps str and has no server-side meaning beyond grouping
    - Storage operations encoded as an Enum, never raw strings

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize into log records and error envelopes without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

FavoriteId = NewType("FavoriteId", int)
SessionId = NewType("SessionId", str)

FAVORITE_ID_MAX = 2**63 - 1  # signed 64-bit, same ceiling as BIGINT


# ─── Enums ───────────────────────────────────────────────────────

class StorageOperation(str, Enum):
    """One member per SQL statement the service can issue."""
    LIST_ALL = "list_all"
    LIST_BY_SESSION = "list_by_session"
    FIND_ID = "find_id"
    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"
    PING = "ping"
