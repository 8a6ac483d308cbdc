from typing import Iterable, List
from sqlalchemy import select
from sqlalchemy.orm import Session

from directors_chair.database.models import Character
from directors_chair.database.repository.base_repository import BaseRepository
from directors_chair.logger import logger


class CharacterRepository(BaseRepository[Character]):
    """Repository for Character model"""

    def __init__(self, db_session: Session):
        super().__init__(Character, db_session)

    def get_by_project_id(self, project_id: str) -> List[Character]:
        """Characters of a project in creation order"""
        return self.get_by_filter(project_id=project_id, order_by=[Character.created_at, Character.id])

    def get_existing_ids(self, project_id: str, character_ids: Iterable[str]) -> set:
        """Subset of `character_ids` that still exist in the project"""
        ids = list(dict.fromkeys(character_ids))
        if not ids:
            return set()
        found = set(self.db_session.scalars(
            select(Character.id).where(Character.project_id == project_id, Character.id.in_(ids))
        ))
        logger.debug(f"[CHARACTER_REPOSITORY] {len(found)}/{len(ids)} referenced characters exist in project {project_id}")
        return found
