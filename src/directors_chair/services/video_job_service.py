"""
Video Job Service - records of generation requests sent to external providers.

The store never talks to a provider; it records the provider's job id, the
status the host reports back, and the result. completed_at is written exactly
once, when a job first reaches a terminal status.
"""

from typing import Optional, Dict, Any, List

from directors_chair.config.config import settings
from directors_chair.logger import logger
from directors_chair.database.database_manager import DatabaseManager
from directors_chair.database.errors import ConstraintViolationError
from directors_chair.database.models import Scene, SceneStatus, VideoJob, VideoJobStatus
from directors_chair.database.repository import SceneRepository, VideoJobRepository
from directors_chair.database.schemas import VideoJobCreate, VideoJobUpdate, validate_input
from directors_chair.utils.common_models import utc_now

# Scene status mirrored from a job status when syncing
_SCENE_STATUS_FOR_JOB = {
    VideoJobStatus.QUEUED: SceneStatus.GENERATING,
    VideoJobStatus.PENDING: SceneStatus.GENERATING,
    VideoJobStatus.GENERATING: SceneStatus.GENERATING,
    VideoJobStatus.COMPLETED: SceneStatus.COMPLETED,
    VideoJobStatus.FAILED: SceneStatus.FAILED,
    VideoJobStatus.CANCELLED: SceneStatus.PENDING,
}


def parse_job_status(status: Any) -> VideoJobStatus:
    try:
        return VideoJobStatus(status)
    except ValueError as e:
        raise ConstraintViolationError(f"Invalid video job status: {status!r}", field="status") from e


def estimate_cost(provider: str, duration: float) -> float:
    """Estimated USD cost of `duration` seconds of video from `provider`"""
    rates = settings.VideoProviders.RATES.model_dump()
    rate = rates.get((provider or "").lower(), settings.VideoProviders.DEFAULT_RATE)
    return round(rate * max(duration, 0), 4)


class VideoJobService:

    def __init__(self, db_manager: DatabaseManager):
        self.db_manager = db_manager

    def create_job(self, job_data: Dict[str, Any], sync_scene: bool = True) -> Dict[str, Any]:
        """
        Record a submitted provider job. A job created already terminal is stamped
        completed at its start time. When a status is given explicitly and sync_scene
        is set, the owning scene follows it as in update_job_status.
        """
        payload = validate_input(VideoJobCreate, job_data)
        row = payload.to_row()
        now = utc_now()
        row["started_at"] = now
        if payload.status is not None and payload.status.is_terminal:
            row["completed_at"] = now
        with self.db_manager.session_scope() as session:
            job = VideoJobRepository(session).create(**row)
            logger.info(f"[VIDEO_JOB_SERVICE] Recorded {job.provider} job {job.job_id} for scene {job.scene_id}")
            if sync_scene and payload.status is not None:
                self._sync_scene(SceneRepository(session).get_or_raise(job.scene_id), job, payload.status)
                session.flush()
            return job.to_dict()

    def get_job(self, job_id: str) -> Dict[str, Any]:
        with self.db_manager.session_scope() as session:
            return VideoJobRepository(session).get_or_raise(job_id).to_dict()

    def find_job(self, job_id: str) -> Optional[Dict[str, Any]]:
        with self.db_manager.session_scope() as session:
            job = VideoJobRepository(session).get_by_id(job_id)
            return job.to_dict() if job else None

    def list_jobs(self, scene_id: str) -> List[Dict[str, Any]]:
        with self.db_manager.session_scope() as session:
            return [j.to_dict() for j in VideoJobRepository(session).get_by_scene_id(scene_id)]

    def list_project_jobs(self, project_id: str) -> List[Dict[str, Any]]:
        with self.db_manager.session_scope() as session:
            return [j.to_dict() for j in VideoJobRepository(session).get_by_project_id(project_id)]

    def get_latest_job(self, scene_id: str) -> Optional[Dict[str, Any]]:
        with self.db_manager.session_scope() as session:
            job = VideoJobRepository(session).get_latest_for_scene(scene_id)
            return job.to_dict() if job else None

    def update_job(self, job_id: str, updates: Dict[str, Any]) -> Dict[str, Any]:
        """Update provider/job_id/video_url/cost. Use update_job_status for status changes."""
        payload = validate_input(VideoJobUpdate, updates)
        with self.db_manager.session_scope() as session:
            return VideoJobRepository(session).update(job_id, **payload.to_row()).to_dict()

    def update_job_status(
        self,
        job_id: str,
        status: Any,
        video_url: Optional[str] = None,
        cost: Optional[float] = None,
        error: Optional[str] = None,
        sync_scene: bool = True,
    ) -> Dict[str, Any]:
        """
        Move a job to `status`. A terminal job cannot move again; reporting the
        same terminal status twice is a no-op. With sync_scene the owning scene's
        status (and video_url on success) follows in the same transaction.
        """
        new_status = parse_job_status(status)
        if cost is not None and cost < 0:
            raise ConstraintViolationError("cost must be >= 0", field="cost")

        with self.db_manager.session_scope() as session:
            job: VideoJob = VideoJobRepository(session).get_or_raise(job_id)

            if job.is_terminal:
                if VideoJobStatus(job.status) == new_status:
                    logger.debug(f"[VIDEO_JOB_SERVICE] Job {job_id} already {new_status.value}")
                    return job.to_dict()
                raise ConstraintViolationError(
                    f"Job {job_id} is already {job.status} and cannot become {new_status.value}",
                    field="status",
                )

            job.status = new_status.value
            if video_url is not None:
                job.video_url = video_url
            if cost is not None:
                job.cost = cost
            if new_status.is_terminal:
                job.completed_at = max(utc_now(), job.started_at) if job.started_at else utc_now()

            if error:
                logger.warning(f"[VIDEO_JOB_SERVICE] Job {job_id} ({job.provider}) reported error: {error}")
            logger.info(f"[VIDEO_JOB_SERVICE] Job {job_id} -> {new_status.value}")

            if sync_scene:
                self._sync_scene(SceneRepository(session).get_or_raise(job.scene_id), job, new_status)

            session.flush()
            return job.to_dict()

    def _sync_scene(self, scene: Scene, job: VideoJob, job_status: VideoJobStatus):
        scene_status = _SCENE_STATUS_FOR_JOB[job_status]
        scene.status = scene_status.value
        if job_status == VideoJobStatus.COMPLETED and job.video_url:
            scene.video_url = job.video_url
        logger.debug(f"[VIDEO_JOB_SERVICE] Scene {scene.id} -> {scene_status.value} (job {job.id})")

    def delete_job(self, job_id: str) -> None:
        with self.db_manager.session_scope() as session:
            VideoJobRepository(session).delete(job_id)
