from typing import Dict, List, Optional
from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from directors_chair.database.models import Scene, VideoJob
from directors_chair.database.repository.base_repository import BaseRepository
from directors_chair.logger import logger


class SceneRepository(BaseRepository[Scene]):
    """Repository for Scene model"""

    def __init__(self, db_session: Session):
        super().__init__(Scene, db_session)

    def get_by_project_id(self, project_id: str) -> List[Scene]:
        """Scenes of a project in canonical (sort_order) sequence"""
        return self.get_by_filter(
            project_id=project_id,
            order_by=[Scene.sort_order, Scene.created_at, Scene.id],
        )

    def get_max_sort_order(self, project_id: str) -> Optional[int]:
        return self.db_session.scalar(
            select(func.max(Scene.sort_order)).where(Scene.project_id == project_id)
        )

    def count_by_status(self, project_id: str) -> Dict[str, int]:
        rows = self.db_session.execute(
            select(Scene.status, func.count()).where(Scene.project_id == project_id).group_by(Scene.status)
        ).all()
        return {status: count for status, count in rows}

    def delete_cascade(self, scene_id: str) -> Dict[str, int]:
        """Delete a scene and its video jobs on the caller's transaction"""
        self.get_or_raise(scene_id)
        removed = {
            "video_jobs": self.db_session.execute(
                delete(VideoJob).where(VideoJob.scene_id == scene_id).execution_options(synchronize_session=False)
            ).rowcount,
            "scenes": self.db_session.execute(
                delete(Scene).where(Scene.id == scene_id).execution_options(synchronize_session=False)
            ).rowcount,
        }
        self.db_session.expire_all()
        logger.info(f"[SCENE_REPOSITORY] Deleted scene {scene_id} with dependents: {removed}")
        return removed
