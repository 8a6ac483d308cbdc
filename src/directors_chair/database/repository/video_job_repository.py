from typing import List, Optional
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from directors_chair.database.models import Scene, VideoJob
from directors_chair.database.repository.base_repository import BaseRepository


class VideoJobRepository(BaseRepository[VideoJob]):
    """Repository for VideoJob model"""

    def __init__(self, db_session: Session):
        super().__init__(VideoJob, db_session)

    def get_by_scene_id(self, scene_id: str) -> List[VideoJob]:
        """Jobs of a scene, oldest attempt first"""
        return self.get_by_filter(scene_id=scene_id, order_by=[VideoJob.started_at, VideoJob.id])

    def get_latest_for_scene(self, scene_id: str) -> Optional[VideoJob]:
        return self.db_session.scalars(
            select(VideoJob)
            .where(VideoJob.scene_id == scene_id)
            .order_by(VideoJob.started_at.desc(), VideoJob.id.desc())
            .limit(1)
        ).first()

    def get_by_project_id(self, project_id: str) -> List[VideoJob]:
        return list(self.db_session.scalars(
            select(VideoJob)
            .join(Scene, VideoJob.scene_id == Scene.id)
            .where(Scene.project_id == project_id)
            .order_by(Scene.sort_order, VideoJob.started_at, VideoJob.id)
        ))

    def count_by_project_id(self, project_id: str) -> int:
        return self.db_session.scalar(
            select(func.count(VideoJob.id))
            .join(Scene, VideoJob.scene_id == Scene.id)
            .where(Scene.project_id == project_id)
        ) or 0

    def total_cost_for_project(self, project_id: str) -> float:
        total = self.db_session.scalar(
            select(func.coalesce(func.sum(VideoJob.cost), 0.0))
            .join(Scene, VideoJob.scene_id == Scene.id)
            .where(Scene.project_id == project_id)
        )
        return float(total or 0.0)
