"""Favorite Repository - one parameterized SQL statement per favorites operation.

Invariants:
    - Each method issues exactly one statement (plus commit for writes); no retries
    - Reads are all-or-nothing: a failure mid-fetch discards every row
    - update/delete report affected rows but never treat zero as an error
    - find_id picks the lowest favorite_id when several rows match

Design Decisions:
    - Core SQL expressions over session.add(): insert uses RETURNING so storage
      assigns the id in the same round trip
    - Errors translated by storage_errors(): callers only ever see StorageFailureError
"""

import logging

from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from favorites_api.core.domain_types import FavoriteId, SessionId, StorageOperation
from favorites_api.core.errors import FavoriteNotFoundError
from favorites_api.infrastructure.database import storage_errors
from favorites_api.models.favorite import Favorite
from favorites_api.schemas.favorite import FavoritePayload, FavoriteResponse

logger = logging.getLogger(__name__)


class FavoriteRepository:
    """Persistence for the favorites table over a single AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_all(self) -> list[Favorite]:
        async with storage_errors(self.db, StorageOperation.LIST_ALL):
            result = await self.db.execute(select(Favorite))
            return list(result.scalars().all())

    async def list_by_session(self, session_id: SessionId) -> list[Favorite]:
        async with storage_errors(self.db, StorageOperation.LIST_BY_SESSION):
            result = await self.db.execute(
                select(Favorite).where(Favorite.session_id == session_id),
            )
            return list(result.scalars().all())

    async def find_id(
        self, session_id: SessionId, name: str, image_url: str,
    ) -> FavoriteId:
        """Id of the row matching all three fields, or FavoriteNotFoundError."""
        async with storage_errors(self.db, StorageOperation.FIND_ID):
            result = await self.db.execute(
                select(Favorite.favorite_id)
                .where(Favorite.session_id == session_id)
                .where(Favorite.name == name)
                .where(Favorite.img_url == image_url)
                .order_by(Favorite.favorite_id)
                .limit(1),
            )
            favorite_id = result.scalar_one_or_none()
        if favorite_id is None:
            raise FavoriteNotFoundError(session_id, name, image_url)
        return FavoriteId(favorite_id)

    async def create(self, payload: FavoritePayload) -> FavoriteResponse:
        """Insert a row; storage assigns favorite_id, any client value is dropped."""
        values = payload.column_values()
        async with storage_errors(self.db, StorageOperation.INSERT):
            result = await self.db.execute(
                insert(Favorite).values(**values).returning(Favorite.favorite_id),
            )
            favorite_id = result.scalar_one()
            await self.db.commit()
        logger.info(
            "Favorite created",
            extra={"favorite_id": favorite_id, "session_id": values["session_id"]},
        )
        return FavoriteResponse(favorite_id=favorite_id, **values)

    async def update(
        self, favorite_id: FavoriteId, payload: FavoritePayload,
    ) -> int:
        """Overwrite every mutable column. Returns affected row count (0 or 1)."""
        async with storage_errors(self.db, StorageOperation.UPDATE):
            result = await self.db.execute(
                update(Favorite)
                .where(Favorite.favorite_id == favorite_id)
                .values(**payload.column_values())
                .execution_options(synchronize_session=False),
            )
            await self.db.commit()
        logger.info(
            f"Favorite update affected {result.rowcount} row(s)",
            extra={"favorite_id": favorite_id},
        )
        return result.rowcount

    async def delete(self, favorite_id: FavoriteId) -> int:
        """Hard delete. Returns affected row count (0 or 1)."""
        async with storage_errors(self.db, StorageOperation.DELETE):
            result = await self.db.execute(
                delete(Favorite)
                .where(Favorite.favorite_id == favorite_id)
                .execution_options(synchronize_session=False),
            )
            await self.db.commit()
        logger.info(
            f"Favorite delete affected {result.rowcount} row(s)",
            extra={"favorite_id": favorite_id},
        )
        return result.rowcount
