"""Favorites Routes - the six CRUD operations over the favorites table.

Invariants:
    - Every handler issues at most one repository call
    - PUT/DELETE validate the `{id}` segment before the repository is reached
    - PUT/DELETE return 204 even when no row matched (idempotent by contract)
    - get-favorite returns 404 only when no row matches all three fields
    - Request bodies validated by FavoritePayload; failures surface as 400

Design Decisions:
    - `{id}` declared as str and parsed by core.parse_ids: a non-numeric id is a
      400 client error rather than an unmatched route
    - POST answers 200 with the stored record (wire-compatible with existing clients)
    - Bodies are read as raw bytes and decoded as JSON regardless of Content-Type,
      matching clients that post JSON as text/plain
"""

import logging

from fastapi import APIRouter, Depends, Query, Request, Response, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from favorites_api.core.domain_types import SessionId
from favorites_api.core.parse_ids import parse_favorite_id
from favorites_api.infrastructure.database import get_db
from favorites_api.schemas.favorite import (
    FavoriteIdResponse, FavoritePayload, FavoriteResponse,
)
from favorites_api.services.favorite_repository import FavoriteRepository

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/favorites", tags=["favorites"])


_PAYLOAD_OPENAPI = {
    "requestBody": {
        "required": True,
        "content": {
            "application/json": {"schema": FavoritePayload.model_json_schema()},
        },
    },
}


def get_favorite_repository(
    db: AsyncSession = Depends(get_db),
) -> FavoriteRepository:
    return FavoriteRepository(db)


async def read_favorite_payload(request: Request) -> FavoritePayload:
    """Decode the raw body as JSON whatever its Content-Type header says."""
    raw = await request.body()
    try:
        return FavoritePayload.model_validate_json(raw)
    except ValidationError as e:
        raise RequestValidationError(
            [
                {**err, "loc": ("body", *err["loc"])}
                for err in e.errors(include_url=False)
            ],
            body=raw,
        ) from e


@router.get("", response_model=list[FavoriteResponse])
async def list_favorites(
    repo: FavoriteRepository = Depends(get_favorite_repository),
):
    """List every favorite in storage order."""
    favorites = await repo.list_all()
    return [FavoriteResponse.model_validate(f) for f in favorites]


@router.get(
    "/by-session/{session_id}", response_model=list[FavoriteResponse],
)
async def list_favorites_by_session(
    session_id: str,
    repo: FavoriteRepository = Depends(get_favorite_repository),
):
    """List favorites whose session_id matches exactly. Empty list if none."""
    favorites = await repo.list_by_session(SessionId(session_id))
    return [FavoriteResponse.model_validate(f) for f in favorites]


@router.get("/get-favorite", response_model=FavoriteIdResponse)
async def get_favorite_by_fields(
    session_id: str = Query(...),
    name: str = Query(...),
    image_url: str = Query(...),
    repo: FavoriteRepository = Depends(get_favorite_repository),
):
    """Find the id of the favorite matching session, name and image URL."""
    favorite_id = await repo.find_id(SessionId(session_id), name, image_url)
    return FavoriteIdResponse(favorite_id=favorite_id)


@router.post(
    "", response_model=FavoriteResponse, openapi_extra=_PAYLOAD_OPENAPI,
)
async def create_favorite(
    body: FavoritePayload = Depends(read_favorite_payload),
    repo: FavoriteRepository = Depends(get_favorite_repository),
):
    """Create a favorite. Storage assigns favorite_id."""
    return await repo.create(body)


@router.put(
    "/{favorite_id}", status_code=status.HTTP_204_NO_CONTENT,
    openapi_extra=_PAYLOAD_OPENAPI,
)
async def update_favorite(
    favorite_id: str,
    body: FavoritePayload = Depends(read_favorite_payload),
    repo: FavoriteRepository = Depends(get_favorite_repository),
):
    """Replace every field of a favorite."""
    parsed_id = parse_favorite_id(favorite_id)
    affected = await repo.update(parsed_id, body)
    if not affected:
        logger.info(
            "Update matched no favorite", extra={"favorite_id": parsed_id},
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{favorite_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_favorite(
    favorite_id: str,
    repo: FavoriteRepository = Depends(get_favorite_repository),
):
    """Delete a favorite if present."""
    parsed_id = parse_favorite_id(favorite_id)
    await repo.delete(parsed_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
