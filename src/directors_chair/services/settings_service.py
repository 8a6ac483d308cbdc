import json
from typing import Any, Dict, Optional

from directors_chair.logger import logger
from directors_chair.database.database_manager import DatabaseManager
from directors_chair.database.errors import ConstraintViolationError
from directors_chair.database.repository import SettingRepository


class SettingsService:
    """Process-wide key-value settings. Values are strings; structured values go through the JSON helpers."""

    def __init__(self, db_manager: DatabaseManager):
        self.db_manager = db_manager

    @staticmethod
    def _check_key(key: str) -> str:
        if not isinstance(key, str) or not key.strip():
            raise ConstraintViolationError("Setting key is required", field="key")
        return key

    def set_setting(self, key: str, value: str) -> None:
        self._check_key(key)
        if not isinstance(value, str):
            raise ConstraintViolationError(
                f"Setting value for '{key}' must be a string; use set_json_setting for structured values",
                field="value",
            )
        with self.db_manager.session_scope() as session:
            SettingRepository(session).upsert(key, value)

    def get_setting(self, key: str) -> Optional[str]:
        """Stored value, or None when the key is not set"""
        with self.db_manager.session_scope() as session:
            return SettingRepository(session).get_value(key)

    def delete_setting(self, key: str) -> bool:
        with self.db_manager.session_scope() as session:
            return SettingRepository(session).remove(key)

    def list_settings(self) -> Dict[str, str]:
        with self.db_manager.session_scope() as session:
            return SettingRepository(session).as_dict()

    def set_json_setting(self, key: str, value: Any) -> None:
        self.set_setting(key, json.dumps(value))

    def get_json_setting(self, key: str, default: Any = None) -> Any:
        raw = self.get_setting(key)
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning(f"[SETTINGS_SERVICE] Setting '{key}' is not valid JSON, returning default")
            return default
