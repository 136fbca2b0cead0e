"""SQLAlchemy-backed ratings store.

Sessions are synchronous; each call runs in a worker thread so the event
loop is never blocked on the database.
"""

import asyncio
import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import DisconnectionError, InterfaceError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from site_ratings.lib.exceptions import StoreConnectionError, StoreError
from site_ratings.lib.ratings.retry import TRANSIENT_ERROR_PHRASE
from site_ratings.lib.ratings.store import RatingStore, Row
from site_ratings.models.sql import RatingRecord, get_session_factory

logger = logging.getLogger(__name__)

_CONNECTION_FAILURE_MARKERS = (
    "could not connect",
    "connection refused",
    "connection failed",
    "server closed the connection",
    "timeout expired",
    "unable to open database",
)


def _is_connection_failure(exc: SQLAlchemyError) -> bool:
    """Separate unreachable-database errors from rejected statements."""
    if isinstance(exc, (DisconnectionError, InterfaceError)):
        return True
    if getattr(exc, "connection_invalidated", False):
        return True
    if isinstance(exc, OperationalError):
        message = str(exc.orig if exc.orig is not None else exc).lower()
        return any(marker in message for marker in _CONNECTION_FAILURE_MARKERS)
    return False


def _translate(exc: SQLAlchemyError, action: str) -> StoreError:
    detail = str(getattr(exc, "orig", None) or exc)
    if _is_connection_failure(exc):
        return StoreConnectionError(
            f"{TRANSIENT_ERROR_PHRASE} to ratings database: {detail}"
        )
    return StoreError(f"Failed to {action}: {detail}")


class SqlRatingStore(RatingStore):
    """Ratings persisted in the ``ratings`` table."""

    def __init__(self, session_factory: Optional[sessionmaker] = None):
        self._session_factory = session_factory

    @property
    def session_factory(self) -> sessionmaker:
        if self._session_factory is None:
            self._session_factory = get_session_factory()
        return self._session_factory

    async def select_all(self) -> List[Row]:
        return await asyncio.to_thread(self._select_all)

    async def insert_one(self, row: Row) -> Row:
        return await asyncio.to_thread(self._insert_one, row)

    def _select_all(self) -> List[Row]:
        session = self.session_factory()
        try:
            records = session.scalars(
                select(RatingRecord).order_by(RatingRecord.created_at.desc())
            ).all()
            return [record.to_dict() for record in records]
        except SQLAlchemyError as e:
            raise _translate(e, "select ratings") from e
        finally:
            session.close()

    def _insert_one(self, row: Row) -> Row:
        session = self.session_factory()
        try:
            record = RatingRecord(rating=row["rating"], comment=row.get("comment"))
            session.add(record)
            session.commit()
            logger.info('Inserted rating %s', record.id)
            return record.to_dict()
        except SQLAlchemyError as e:
            session.rollback()
            raise _translate(e, "insert rating") from e
        finally:
            session.close()
