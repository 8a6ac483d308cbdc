"""
Scene Service - storyboard scenes of a project.

sort_order is the canonical sequence; scene_number is author-facing metadata.
characters_json holds soft references: reads resolve them against the
characters that still exist and skip the rest.
"""

import json
from typing import Optional, Dict, Any, List, Sequence

from directors_chair.logger import logger
from directors_chair.database.database_manager import DatabaseManager
from directors_chair.database.errors import ConstraintViolationError
from directors_chair.database.repository import CharacterRepository, ProjectRepository, SceneRepository
from directors_chair.database.schemas import SceneCreate, SceneUpdate, validate_input


class SceneService:

    def __init__(self, db_manager: DatabaseManager):
        self.db_manager = db_manager

    def create_scene(self, scene_data: Dict[str, Any]) -> Dict[str, Any]:
        """Create a scene; sort_order defaults to 0 when omitted"""
        payload = validate_input(SceneCreate, scene_data)
        with self.db_manager.session_scope() as session:
            return SceneRepository(session).create(**payload.to_row()).to_dict()

    def append_scene(self, scene_data: Dict[str, Any]) -> Dict[str, Any]:
        """Create a scene placed after every existing scene of its project"""
        payload = validate_input(SceneCreate, scene_data)
        row = payload.to_row()
        with self.db_manager.session_scope() as session:
            repo = SceneRepository(session)
            current_max = repo.get_max_sort_order(payload.project_id)
            row["sort_order"] = 0 if current_max is None else current_max + 1
            return repo.create(**row).to_dict()

    def get_scene(self, scene_id: str) -> Dict[str, Any]:
        with self.db_manager.session_scope() as session:
            return SceneRepository(session).get_or_raise(scene_id).to_dict()

    def find_scene(self, scene_id: str) -> Optional[Dict[str, Any]]:
        with self.db_manager.session_scope() as session:
            scene = SceneRepository(session).get_by_id(scene_id)
            return scene.to_dict() if scene else None

    def list_scenes(self, project_id: str) -> List[Dict[str, Any]]:
        """Scenes of a project, ascending sort_order"""
        with self.db_manager.session_scope() as session:
            return [s.to_dict() for s in SceneRepository(session).get_by_project_id(project_id)]

    def next_sort_order(self, project_id: str) -> int:
        with self.db_manager.session_scope() as session:
            current_max = SceneRepository(session).get_max_sort_order(project_id)
            return 0 if current_max is None else current_max + 1

    def update_scene(self, scene_id: str, updates: Dict[str, Any]) -> Dict[str, Any]:
        payload = validate_input(SceneUpdate, updates)
        with self.db_manager.session_scope() as session:
            return SceneRepository(session).update(scene_id, **payload.to_row()).to_dict()

    def delete_scene(self, scene_id: str) -> Dict[str, int]:
        """Delete a scene and its video jobs, atomically"""
        with self.db_manager.session_scope() as session:
            return SceneRepository(session).delete_cascade(scene_id)

    def reorder_scenes(self, project_id: str, ordered_scene_ids: Sequence[str]) -> List[Dict[str, Any]]:
        """
        Rewrite the sequence of a project's scenes in one transaction:
        sort_order becomes the position and scene_number the 1-based position.
        The ids must be exactly the project's scenes, each listed once.
        """
        ordered_scene_ids = list(ordered_scene_ids)
        if len(set(ordered_scene_ids)) != len(ordered_scene_ids):
            raise ConstraintViolationError("Duplicate scene id in reorder request", field="ordered_scene_ids")

        with self.db_manager.session_scope() as session:
            ProjectRepository(session).get_or_raise(project_id)
            repo = SceneRepository(session)
            scenes = {scene.id: scene for scene in repo.get_by_project_id(project_id)}

            if set(scenes) != set(ordered_scene_ids):
                missing = sorted(set(scenes) - set(ordered_scene_ids))
                unknown = sorted(set(ordered_scene_ids) - set(scenes))
                raise ConstraintViolationError(
                    f"Reorder must list every scene of project {project_id} exactly once "
                    f"(missing: {missing}, unknown: {unknown})",
                    field="ordered_scene_ids",
                )

            for index, scene_id in enumerate(ordered_scene_ids):
                scene = scenes[scene_id]
                scene.sort_order = index
                scene.scene_number = index + 1
            session.flush()
            logger.info(f"[SCENE_SERVICE] Reordered {len(ordered_scene_ids)} scenes of project {project_id}")
            return [scenes[scene_id].to_dict() for scene_id in ordered_scene_ids]

    def get_scene_characters(self, scene_id: str) -> List[Dict[str, Any]]:
        """Characters referenced by a scene that still exist, in reference order"""
        with self.db_manager.session_scope() as session:
            scene = SceneRepository(session).get_or_raise(scene_id)
            referenced = scene.character_ids
            characters = CharacterRepository(session)
            existing = characters.get_existing_ids(scene.project_id, referenced)

            dangling = [cid for cid in referenced if cid not in existing]
            if dangling:
                logger.debug(f"[SCENE_SERVICE] Scene {scene_id} skips dangling character refs: {dangling}")

            return [characters.get_by_id(cid).to_dict() for cid in dict.fromkeys(referenced) if cid in existing]

    def prune_dangling_characters(self, project_id: str) -> int:
        """Drop references to deleted characters from a project's scenes. Returns scenes rewritten."""
        rewritten = 0
        with self.db_manager.session_scope() as session:
            ProjectRepository(session).get_or_raise(project_id)
            existing = {c.id for c in CharacterRepository(session).get_by_project_id(project_id)}
            for scene in SceneRepository(session).get_by_project_id(project_id):
                referenced = scene.character_ids
                kept = [cid for cid in referenced if cid in existing]
                if kept != referenced:
                    scene.characters_json = json.dumps(kept)
                    rewritten += 1
            session.flush()
        logger.info(f"[SCENE_SERVICE] Pruned dangling character refs in {rewritten} scenes of project {project_id}")
        return rewritten
