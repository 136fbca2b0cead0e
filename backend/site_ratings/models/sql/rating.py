"""SQLAlchemy model for submitted ratings."""

from datetime import datetime, timezone
from typing import Any, Dict
from uuid import uuid4

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from site_ratings.models.sql.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RatingRecord(Base):
    """One visitor rating. Rows are insert-only."""

    __tablename__ = "ratings"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    comment: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        index=True,
    )

    def to_dict(self) -> Dict[str, Any]:
        """Row as a plain dict, the shape every store backend returns."""
        return {
            "id": self.id,
            "rating": self.rating,
            "comment": self.comment,
            "created_at": self.created_at,
        }

    def __repr__(self):
        return f"<RatingRecord(id={self.id}, rating={self.rating}, created_at={self.created_at})>"
