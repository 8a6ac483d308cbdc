from typing import Optional, Dict, Any, List

from directors_chair.logger import logger
from directors_chair.database.database_manager import DatabaseManager
from directors_chair.database.repository import CharacterRepository
from directors_chair.database.schemas import CharacterCreate, CharacterUpdate, validate_input


class CharacterService:
    """Cast members of a project. Deleting one leaves scene references dangling on purpose."""

    def __init__(self, db_manager: DatabaseManager):
        self.db_manager = db_manager

    def create_character(self, character_data: Dict[str, Any]) -> Dict[str, Any]:
        payload = validate_input(CharacterCreate, character_data)
        with self.db_manager.session_scope() as session:
            character = CharacterRepository(session).create(**payload.to_row())
            return character.to_dict()

    def get_character(self, character_id: str) -> Dict[str, Any]:
        with self.db_manager.session_scope() as session:
            return CharacterRepository(session).get_or_raise(character_id).to_dict()

    def find_character(self, character_id: str) -> Optional[Dict[str, Any]]:
        with self.db_manager.session_scope() as session:
            character = CharacterRepository(session).get_by_id(character_id)
            return character.to_dict() if character else None

    def list_characters(self, project_id: str) -> List[Dict[str, Any]]:
        with self.db_manager.session_scope() as session:
            return [c.to_dict() for c in CharacterRepository(session).get_by_project_id(project_id)]

    def update_character(self, character_id: str, updates: Dict[str, Any]) -> Dict[str, Any]:
        payload = validate_input(CharacterUpdate, updates)
        with self.db_manager.session_scope() as session:
            return CharacterRepository(session).update(character_id, **payload.to_row()).to_dict()

    def delete_character(self, character_id: str) -> None:
        with self.db_manager.session_scope() as session:
            CharacterRepository(session).delete(character_id)
        logger.info(f"[CHARACTER_SERVICE] Deleted character {character_id}")
