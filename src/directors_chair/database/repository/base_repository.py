from typing import Generic, TypeVar, Type, Optional, List, Any
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from directors_chair.database.errors import RecordNotFoundError
from directors_chair.database.models.base import Base
from directors_chair.logger import logger

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Base repository class with common CRUD operations.

    Repositories only flush; committing belongs to the caller's unit of work
    (DatabaseManager.session_scope), so several repository calls can form one
    atomic transaction.
    """

    def __init__(self, model: Type[ModelType], db_session: Session):
        self.model = model
        self.db_session = db_session

    @property
    def _tag(self) -> str:
        return self.__class__.__name__

    def create(self, **kwargs) -> ModelType:
        """Create a new record"""
        obj = self.model(**kwargs)
        self.db_session.add(obj)
        self.db_session.flush()
        logger.info(f"[{self._tag}] Created {self.model.__name__} with id: {obj.id}")
        return obj

    def get_by_id(self, id: str) -> Optional[ModelType]:
        """Get record by ID, or None"""
        obj = self.db_session.get(self.model, id)
        if obj:
            logger.debug(f"[{self._tag}] Found {self.model.__name__} with id: {id}")
        else:
            logger.warning(f"[{self._tag}] {self.model.__name__} not found with id: {id}")
        return obj

    def get_or_raise(self, id: str) -> ModelType:
        obj = self.get_by_id(id)
        if obj is None:
            raise RecordNotFoundError(self.model.__name__, id)
        return obj

    def get_all(self, limit: Optional[int] = None, offset: Optional[int] = None, order_by: Any = None) -> List[ModelType]:
        """Get all records with optional ordering and pagination"""
        query = select(self.model)
        if order_by is not None:
            query = query.order_by(*order_by) if isinstance(order_by, (list, tuple)) else query.order_by(order_by)
        if offset:
            query = query.offset(offset)
        if limit:
            query = query.limit(limit)
        results = list(self.db_session.scalars(query))
        logger.debug(f"[{self._tag}] Found {len(results)} {self.model.__name__} records")
        return results

    def get_by_filter(self, order_by: Any = None, **filters) -> List[ModelType]:
        """Get records by equality filters on model columns"""
        query = select(self.model)
        for key, value in filters.items():
            query = query.where(getattr(self.model, key) == value)
        if order_by is not None:
            query = query.order_by(*order_by) if isinstance(order_by, (list, tuple)) else query.order_by(order_by)
        results = list(self.db_session.scalars(query))
        logger.debug(f"[{self._tag}] Found {len(results)} {self.model.__name__} records with filters: {filters}")
        return results

    def update(self, id: str, **kwargs) -> ModelType:
        """Update mutable columns of the record with this ID"""
        obj = self.get_or_raise(id)
        changed = obj.update_from_dict(kwargs)
        self.db_session.flush()
        if changed:
            logger.info(f"[{self._tag}] Updated {self.model.__name__} with id: {id} fields: {sorted(changed)}")
        return obj

    def delete(self, id: str) -> None:
        """Delete record by ID"""
        obj = self.get_or_raise(id)
        self.db_session.delete(obj)
        self.db_session.flush()
        logger.info(f"[{self._tag}] Deleted {self.model.__name__} with id: {id}")

    def count(self, **filters) -> int:
        """Count records with optional filters"""
        query = select(func.count()).select_from(self.model)
        for key, value in filters.items():
            query = query.where(getattr(self.model, key) == value)
        count = self.db_session.scalar(query) or 0
        logger.debug(f"[{self._tag}] Count of {self.model.__name__} with filters {filters}: {count}")
        return count

    def exists(self, id: str) -> bool:
        """Check if record exists by ID"""
        pk = self.model.__table__.primary_key.columns.values()[0]
        exists = self.db_session.scalar(select(pk).where(pk == id)) is not None
        logger.debug(f"[{self._tag}] {self.model.__name__} exists with id {id}: {exists}")
        return exists
