from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Optional


class CaseInsensitiveEnum(Enum):
    """Enum class that enables case-insensitive matching, plus per-enum aliases."""

    @classmethod
    def _aliases(cls) -> dict:
        return {}

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            normalized = value.strip().lower()
            for member in cls:
                if member.value.lower() == normalized:
                    return member
            alias = cls._aliases().get(normalized)
            if alias is not None:
                return cls(alias)
        return super()._missing_(value)


def utc_now() -> datetime:
    """Naive UTC timestamp, matching SQLite's datetime('now')"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def monotonic_after(previous: Optional[datetime]) -> datetime:
    """Current time, bumped past `previous` so successive stamps strictly increase"""
    now = utc_now()
    if previous is not None and now <= previous:
        return previous + timedelta(microseconds=1)
    return now
