"""
Error taxonomy for the project store.

Callers can tell "my data is invalid" (ConstraintViolationError) apart from
"that row does not exist" (RecordNotFoundError) and "there is no store to
write to" (StoreUnavailableError).
"""

from typing import Optional


class StoreError(Exception):
    """Base class for every project store failure"""


class StoreInitializationError(StoreError):
    """Backing file or schema could not be created or opened"""


class StoreUnavailableError(StoreError):
    """Operation attempted on a store that failed to initialize or was closed"""


class ConstraintViolationError(StoreError):
    """Required field missing, invalid value, or foreign key not satisfied"""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class RecordNotFoundError(StoreError):
    """No row with the requested id (or key)"""

    def __init__(self, entity: str, record_id: str):
        super().__init__(f"{entity} not found with id: {record_id}")
        self.entity = entity
        self.record_id = record_id
