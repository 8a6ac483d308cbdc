"""
Project Service - project operations against an explicit store handle.
Deleting a project removes its characters, scenes and their video jobs in one transaction.
"""

from typing import Optional, Dict, Any, List

from directors_chair.logger import logger
from directors_chair.database.database_manager import DatabaseManager
from directors_chair.database.repository import (
    CharacterRepository,
    ProjectRepository,
    SceneRepository,
    VideoJobRepository,
)
from directors_chair.database.schemas import ProjectCreate, ProjectUpdate, validate_input


class ProjectService:

    def __init__(self, db_manager: DatabaseManager):
        self.db_manager = db_manager

    def create_project(self, project_data: Dict[str, Any]) -> Dict[str, Any]:
        """Create a new project; omitted fields get their column defaults"""
        payload = validate_input(ProjectCreate, project_data)
        with self.db_manager.session_scope() as session:
            project = ProjectRepository(session).create(**payload.to_row())
            logger.info(f"[PROJECT_SERVICE] Created project {project.id}")
            return project.to_dict()

    def get_project(self, project_id: str) -> Dict[str, Any]:
        """Get a project; raises RecordNotFoundError when missing"""
        with self.db_manager.session_scope() as session:
            return ProjectRepository(session).get_or_raise(project_id).to_dict()

    def find_project(self, project_id: str) -> Optional[Dict[str, Any]]:
        with self.db_manager.session_scope() as session:
            project = ProjectRepository(session).get_by_id(project_id)
            return project.to_dict() if project else None

    def list_projects(self, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        with self.db_manager.session_scope() as session:
            return [p.to_dict() for p in ProjectRepository(session).get_recent(limit=limit)]

    def update_project(self, project_id: str, updates: Dict[str, Any]) -> Dict[str, Any]:
        """Update scalar fields; the store refreshes updated_at"""
        payload = validate_input(ProjectUpdate, updates)
        with self.db_manager.session_scope() as session:
            project = ProjectRepository(session).update(project_id, **payload.to_row())
            return project.to_dict()

    def delete_project(self, project_id: str) -> Dict[str, int]:
        """Delete a project and everything it owns, atomically. Returns rows removed per table."""
        with self.db_manager.session_scope() as session:
            removed = ProjectRepository(session).delete_cascade(project_id)
        logger.info(f"[PROJECT_SERVICE] Deleted project {project_id}")
        return removed

    def project_exists(self, project_id: str) -> bool:
        with self.db_manager.session_scope() as session:
            return ProjectRepository(session).exists(project_id)

    def get_project_summary(self, project_id: str) -> Dict[str, Any]:
        """Counts of owned rows, scene status breakdown and total recorded generation cost"""
        with self.db_manager.session_scope() as session:
            ProjectRepository(session).get_or_raise(project_id)
            scenes = SceneRepository(session)
            jobs = VideoJobRepository(session)
            return {
                "project_id": project_id,
                "characters": CharacterRepository(session).count(project_id=project_id),
                "scenes": scenes.count(project_id=project_id),
                "scene_status": scenes.count_by_status(project_id),
                "video_jobs": jobs.count_by_project_id(project_id),
                "total_cost": jobs.total_cost_for_project(project_id),
            }
