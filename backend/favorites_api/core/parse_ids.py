"""Path ID Parsing - converts the raw `{id}` path segment into a FavoriteId.

Invariants:
    - Only ASCII digit strings ([0-9]+) are accepted; no sign, no whitespace
    - Values above FAVORITE_ID_MAX are rejected, never truncated
    - Pure function: raises BadInputError, never touches storage
"""

import re

from favorites_api.core.domain_types import FAVORITE_ID_MAX, FavoriteId
from favorites_api.core.errors import BadInputError

_DIGITS = re.compile(r"[0-9]+")


def parse_favorite_id(raw: str) -> FavoriteId:
    """Parse a path segment into a FavoriteId or raise BadInputError."""
    if not _DIGITS.fullmatch(raw):
        raise BadInputError(
            f"Invalid favorite id '{raw}': must match [0-9]+", field="id",
        )
    value = int(raw)
    if value > FAVORITE_ID_MAX:
        raise BadInputError(
            f"Invalid favorite id '{raw}': value out of range", field="id",
        )
    return FavoriteId(value)
