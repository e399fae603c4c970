"""Favorite Schemas - Pydantic wire contracts for the favorites endpoints.

Invariants:
    - FavoritePayload requires all five text fields; empty strings are allowed
    - favorite_id in a request body is type-checked then ignored (storage assigns it)
    - Unknown request keys are ignored
    - FavoriteResponse field names match the table columns exactly

Design Decisions:
    - One payload model for POST and PUT: update is a full replacement, never a patch
    - StrictStr: numbers or booleans in a text field are a decode failure, not coerced
"""

from pydantic import BaseModel, ConfigDict, StrictStr


class FavoritePayload(BaseModel):
    """Request body for create and update."""
    model_config = ConfigDict(extra="ignore")

    favorite_id: int | None = None
    session_id: StrictStr
    user_name: StrictStr
    name: StrictStr
    professional_headline: StrictStr
    img_url: StrictStr

    def column_values(self) -> dict[str, str]:
        """Values for every mutable column, keyed by column name."""
        return self.model_dump(exclude={"favorite_id"})


class FavoriteResponse(BaseModel):
    """A full favorite record as stored."""
    model_config = ConfigDict(from_attributes=True)

    favorite_id: int
    session_id: str
    user_name: str
    name: str
    professional_headline: str
    img_url: str


class FavoriteIdResponse(BaseModel):
    """Result of a lookup by session, name and image URL."""
    favorite_id: int
