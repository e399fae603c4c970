"""Favorite ORM - declares the `favorites` table the service reads and writes.

Invariants:
    - favorite_id is an integer primary key assigned by storage (autoincrement)
    - All other columns are non-nullable text and fully replaced on update
    - No foreign keys and no uniqueness beyond the primary key

Design Decisions:
    - Declared here so SQL is built from column objects, not string templates;
      the physical table is still created outside the service
"""

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from favorites_api.db.base import Base


class Favorite(Base):
    """A saved reference to a profile, grouped by client session."""
    __tablename__ = "favorites"

    favorite_id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    session_id: Mapped[str] = mapped_column(Text, nullable=False)
    user_name: Mapped[str] = mapped_column(Text, nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    professional_headline: Mapped[str] = mapped_column(Text, nullable=False)
    img_url: Mapped[str] = mapped_column(Text, nullable=False)
