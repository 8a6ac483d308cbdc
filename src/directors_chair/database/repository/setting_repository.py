from typing import Dict, Optional
from sqlalchemy import delete, select
from sqlalchemy.dialects.sqlite import insert
from sqlalchemy.orm import Session

from directors_chair.database.models import Setting
from directors_chair.database.repository.base_repository import BaseRepository
from directors_chair.logger import logger


class SettingRepository(BaseRepository[Setting]):
    """Repository for the key-value Setting model"""

    def __init__(self, db_session: Session):
        super().__init__(Setting, db_session)

    def upsert(self, key: str, value: str) -> None:
        statement = insert(Setting).values(key=key, value=value)
        statement = statement.on_conflict_do_update(
            index_elements=[Setting.key],
            set_={"value": statement.excluded.value},
        )
        self.db_session.execute(statement)
        logger.info(f"[SETTING_REPOSITORY] Upserted setting: {key}")

    def get_value(self, key: str) -> Optional[str]:
        return self.db_session.scalar(select(Setting.value).where(Setting.key == key))

    def remove(self, key: str) -> bool:
        removed = self.db_session.execute(delete(Setting).where(Setting.key == key)).rowcount
        if removed:
            logger.info(f"[SETTING_REPOSITORY] Deleted setting: {key}")
        return bool(removed)

    def as_dict(self) -> Dict[str, str]:
        return {row.key: row.value for row in self.get_all(order_by=Setting.key)}
