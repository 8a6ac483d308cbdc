from datetime import datetime
from typing import Any, Dict
from sqlalchemy import Text, text
from sqlalchemy.orm import declarative_base
from sqlalchemy.types import TypeDecorator

# Matches the TEXT timestamps existing databases were created with
SQLITE_NOW = text("(datetime('now'))")


class SqliteTimestamp(TypeDecorator):
    """
    Naive UTC datetime stored as TEXT in SQLite's `YYYY-MM-DD HH:MM:SS` layout.
    Sub-second precision is appended only when present, so values sort as text
    alongside rows stamped by datetime('now').
    """

    impl = Text
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None or isinstance(value, str):
            return value
        return value.replace(tzinfo=None).isoformat(sep=" ")

    def process_result_value(self, value, dialect):
        if value is None or isinstance(value, datetime):
            return value
        return datetime.fromisoformat(value)


class BaseModel:
    """Base model with common serialization helpers"""

    # Identity, ownership and store-managed timestamps; update_from_dict never touches these
    __immutable_fields__ = frozenset({
        "id", "project_id", "scene_id", "created_at", "updated_at", "started_at", "completed_at",
    })

    def to_dict(self) -> Dict[str, Any]:
        """Convert model to a plain dictionary for the presentation layer"""
        result = {}
        for column in self.__table__.columns:
            value = getattr(self, column.name)
            if isinstance(value, datetime):
                result[column.name] = value.isoformat()
            else:
                result[column.name] = value
        return result

    def update_from_dict(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Apply mutable column values from `data`, returning only what actually changed"""
        changed = {}
        columns = self.__table__.columns.keys()
        for key, value in data.items():
            if key in self.__immutable_fields__ or key not in columns:
                continue
            if getattr(self, key) != value:
                setattr(self, key, value)
                changed[key] = value
        return changed

    def __repr__(self):
        pk = ", ".join(f"{col.name}='{getattr(self, col.name)}'" for col in self.__table__.primary_key)
        return f"<{self.__class__.__name__}({pk})>"


# Create the base class for all models
Base = declarative_base(cls=BaseModel)
