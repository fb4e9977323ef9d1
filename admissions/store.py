"""
Chat Store

Document-store style access (append, get, update, delete, query) over the
SQLAlchemy tables. Collections are addressed by table name so callers never
touch ORM classes.
"""

import logging
from datetime import datetime
from typing import Any, Callable, Dict, List, Mapping, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.inspection import inspect

from db import get_db
from .logic.errors import UpstreamFailure
from .models import ChatExchange, FaqEntry, RecommendationRecord

logger = logging.getLogger(__name__)

COLLECTIONS = {
    ChatExchange.__tablename__: ChatExchange,
    FaqEntry.__tablename__: FaqEntry,
    RecommendationRecord.__tablename__: RecommendationRecord,
}


def _as_dict(row) -> Dict[str, Any]:
    return {attr.key: getattr(row, attr.key) for attr in inspect(row).mapper.column_attrs}


class SqlChatStore:
    """
    Record-level access to the admissions collections.

    Args:
        session_factory: Context manager yielding a Session that commits on
            success and rolls back on error (db.get_db by default)
    """

    def __init__(self, session_factory: Callable = get_db):
        self.session_factory = session_factory

    def _model(self, collection: str):
        model = COLLECTIONS.get(collection)
        if model is None:
            raise ValueError(f"Unknown collection: {collection}")
        return model

    def append_record(self, collection: str, record: Mapping[str, Any]) -> Dict[str, Any]:
        """Insert one record and return it as stored, id included."""
        model = self._model(collection)
        try:
            with self.session_factory() as db:
                row = model(**{k: v for k, v in record.items() if v is not None})
                db.add(row)
                db.flush()
                stored = _as_dict(row)
        except SQLAlchemyError as e:
            logger.error(f"Failed to append to {collection}: {e}")
            raise UpstreamFailure(f"Could not write to {collection}") from e
        return stored

    def query(
        self,
        collection: str,
        filters: Optional[Mapping[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = True,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """
        Equality-filtered, optionally ordered and limited read of a collection.

        Returns:
            List of records as plain dicts
        """
        model = self._model(collection)
        stmt = select(model)
        for field, value in (filters or {}).items():
            stmt = stmt.where(getattr(model, field) == value)
        if order_by:
            column = getattr(model, order_by)
            stmt = stmt.order_by(column.desc() if descending else column.asc())
        if limit:
            stmt = stmt.limit(limit)

        try:
            with self.session_factory() as db:
                rows = db.execute(stmt).scalars().all()
                return [_as_dict(row) for row in rows]
        except SQLAlchemyError as e:
            logger.error(f"Failed to query {collection}: {e}")
            raise UpstreamFailure(f"Could not read from {collection}") from e

    def get(self, collection: str, record_id: int) -> Optional[Dict[str, Any]]:
        """One record by id, or None."""
        model = self._model(collection)
        try:
            with self.session_factory() as db:
                row = db.get(model, record_id)
                return _as_dict(row) if row is not None else None
        except SQLAlchemyError as e:
            logger.error(f"Failed to read {collection}/{record_id}: {e}")
            raise UpstreamFailure(f"Could not read from {collection}") from e

    def update(self, collection: str, record_id: int, changes: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Apply `changes` to one record.

        Returns:
            The updated record, or None when no record has that id
        """
        model = self._model(collection)
        try:
            with self.session_factory() as db:
                row = db.get(model, record_id)
                if row is None:
                    return None
                for field, value in changes.items():
                    setattr(row, field, value)
                db.flush()
                return _as_dict(row)
        except SQLAlchemyError as e:
            logger.error(f"Failed to update {collection}/{record_id}: {e}")
            raise UpstreamFailure(f"Could not write to {collection}") from e

    def delete(self, collection: str, record_id: int) -> bool:
        """Delete one record; False when no record has that id."""
        model = self._model(collection)
        try:
            with self.session_factory() as db:
                row = db.get(model, record_id)
                if row is None:
                    return False
                db.delete(row)
                return True
        except SQLAlchemyError as e:
            logger.error(f"Failed to delete {collection}/{record_id}: {e}")
            raise UpstreamFailure(f"Could not write to {collection}") from e

    def record_faq(self, question: str, answer: str) -> Dict[str, Any]:
        """
        Tally a chat question in the FAQs.

        A question already on file (case-insensitive) has its frequency
        bumped and its answer refreshed; a new question starts at 1.
        """
        stmt = select(FaqEntry).where(func.lower(FaqEntry.question) == question.strip().lower()).limit(1)
        try:
            with self.session_factory() as db:
                row = db.execute(stmt).scalars().first()
                if row is None:
                    row = FaqEntry(question=question.strip(), answer=answer, frequency=1)
                    db.add(row)
                else:
                    row.frequency = (row.frequency or 0) + 1
                    row.answer = answer
                    row.timestamp = datetime.utcnow()
                db.flush()
                return _as_dict(row)
        except SQLAlchemyError as e:
            logger.error(f"Failed to record FAQ: {e}")
            raise UpstreamFailure(f"Could not write to {FaqEntry.__tablename__}") from e
