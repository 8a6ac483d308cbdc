from directors_chair.services.project_service import ProjectService
from directors_chair.services.character_service import CharacterService
from directors_chair.services.scene_service import SceneService
from directors_chair.services.video_job_service import VideoJobService, estimate_cost
from directors_chair.services.settings_service import SettingsService

__all__ = [
    "ProjectService",
    "CharacterService",
    "SceneService",
    "VideoJobService",
    "SettingsService",
    "estimate_cost",
]
