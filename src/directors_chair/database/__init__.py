from directors_chair.database.database_manager import DatabaseManager, open_store
from directors_chair.database.errors import (
    StoreError,
    StoreInitializationError,
    StoreUnavailableError,
    ConstraintViolationError,
    RecordNotFoundError,
)

__all__ = [
    "DatabaseManager",
    "open_store",
    "StoreError",
    "StoreInitializationError",
    "StoreUnavailableError",
    "ConstraintViolationError",
    "RecordNotFoundError",
]
