from typing import Dict, List, Optional
from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from directors_chair.database.models import Character, Project, Scene, VideoJob
from directors_chair.database.repository.base_repository import BaseRepository
from directors_chair.logger import logger
from directors_chair.utils.common_models import monotonic_after, utc_now


class ProjectRepository(BaseRepository[Project]):
    """Repository for Project model"""

    def __init__(self, db_session: Session):
        super().__init__(Project, db_session)

    def create(self, **kwargs) -> Project:
        """Create a project whose created_at and updated_at start out identical"""
        now = utc_now()
        kwargs.setdefault("created_at", now)
        kwargs.setdefault("updated_at", now)
        return super().create(**kwargs)

    def get_recent(self, limit: Optional[int] = None) -> List[Project]:
        """All projects, most recently modified first"""
        return self.get_all(limit=limit, order_by=[Project.updated_at.desc(), Project.created_at.desc()])

    def update(self, id: str, **kwargs) -> Project:
        """Update scalar fields; updated_at is refreshed whenever something actually changed"""
        project = self.get_or_raise(id)
        changed = project.update_from_dict(kwargs)
        if changed:
            project.updated_at = monotonic_after(project.updated_at)
            logger.info(f"[PROJECT_REPOSITORY] Updated project {id} fields: {sorted(changed)}")
        self.db_session.flush()
        return project

    def delete_cascade(self, project_id: str) -> Dict[str, int]:
        """
        Delete a project with its characters, scenes and their video jobs.
        Issues every statement on the caller's transaction; nothing is committed here.
        """
        self.get_or_raise(project_id)

        scene_ids = select(Scene.id).where(Scene.project_id == project_id)
        removed = {
            "video_jobs": self.db_session.execute(
                delete(VideoJob).where(VideoJob.scene_id.in_(scene_ids)).execution_options(synchronize_session=False)
            ).rowcount,
            "scenes": self.db_session.execute(
                delete(Scene).where(Scene.project_id == project_id).execution_options(synchronize_session=False)
            ).rowcount,
            "characters": self.db_session.execute(
                delete(Character).where(Character.project_id == project_id).execution_options(synchronize_session=False)
            ).rowcount,
            "projects": self.db_session.execute(
                delete(Project).where(Project.id == project_id).execution_options(synchronize_session=False)
            ).rowcount,
        }
        # Bulk deletes bypass the identity map
        self.db_session.expire_all()
        logger.info(f"[PROJECT_REPOSITORY] Deleted project {project_id} with dependents: {removed}")
        return removed
