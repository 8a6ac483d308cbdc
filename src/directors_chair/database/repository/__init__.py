from directors_chair.database.repository.base_repository import BaseRepository
from directors_chair.database.repository.project_repository import ProjectRepository
from directors_chair.database.repository.character_repository import CharacterRepository
from directors_chair.database.repository.scene_repository import SceneRepository
from directors_chair.database.repository.video_job_repository import VideoJobRepository
from directors_chair.database.repository.setting_repository import SettingRepository

__all__ = [
    "BaseRepository",
    "ProjectRepository",
    "CharacterRepository",
    "SceneRepository",
    "VideoJobRepository",
    "SettingRepository",
]
