from directors_chair.database.models.base import Base
from directors_chair.database.models.status import SceneStatus, VideoJobStatus, TERMINAL_JOB_STATUSES
from directors_chair.database.models.project import Project
from directors_chair.database.models.character import Character
from directors_chair.database.models.scene import Scene
from directors_chair.database.models.video_job import VideoJob
from directors_chair.database.models.setting import Setting

__all__ = [
    "Base",
    "Project",
    "Character",
    "Scene",
    "VideoJob",
    "Setting",
    "SceneStatus",
    "VideoJobStatus",
    "TERMINAL_JOB_STATUSES",
]
