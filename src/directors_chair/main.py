"""
Host-facing entry point.

The desktop shell calls startup() once per run, hands the returned
ProjectStore to its command handlers, and calls shutdown() on exit.
"""

from pathlib import Path
from typing import Optional, Union

from directors_chair.logger import logger
from directors_chair.database.database_manager import DatabaseManager, open_store
from directors_chair.services import (
    CharacterService,
    ProjectService,
    SceneService,
    SettingsService,
    VideoJobService,
)
from directors_chair.utils import path_utils


class ProjectStore:
    """Explicit store handle: one manager, one service per collection"""

    def __init__(self, db_manager: DatabaseManager):
        self.db_manager = db_manager
        self.projects = ProjectService(db_manager)
        self.characters = CharacterService(db_manager)
        self.scenes = SceneService(db_manager)
        self.video_jobs = VideoJobService(db_manager)
        self.settings = SettingsService(db_manager)

    @property
    def is_available(self) -> bool:
        return self.db_manager.is_available

    @property
    def db_path(self) -> Path:
        return self.db_manager.db_path

    def health_check(self) -> dict:
        return self.db_manager.health_check()

    def close(self):
        self.db_manager.close()

    def __enter__(self) -> "ProjectStore":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


def startup(db_path: Optional[Union[str, Path]] = None) -> ProjectStore:
    """Open the store. Never raises: on failure the store is returned unavailable."""
    store = ProjectStore(open_store(db_path))
    if not store.is_available:
        logger.warning("[MAIN] Continuing without persistence")
    return store


def shutdown(store: ProjectStore):
    store.close()
    logger.info("[MAIN] Project store shut down")


def get_app_data_dir() -> str:
    """Command: absolute path of the directory containing the database file"""
    return path_utils.get_app_data_dir()
