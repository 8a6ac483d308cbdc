import os
from pathlib import Path

import platformdirs

from directors_chair.config.config import settings


def _user_data_root() -> Path:
    """Platform user-data root, honoring the data dir override env var"""
    override = os.getenv(settings.App.DATA_DIR_ENV_VAR)
    if override:
        return Path(override).expanduser()
    try:
        return Path(platformdirs.user_data_dir(appauthor=False, roaming=True))
    except Exception:
        return Path(settings.App.FALLBACK_DATA_DIR)


def app_data_path() -> Path:
    """Directory holding the database file, created if absent"""
    app_dir = _user_data_root() / settings.App.NAME
    try:
        app_dir.mkdir(parents=True, exist_ok=True)
    except OSError:
        # Reported when the store fails to open the database file
        pass
    return app_dir


def get_db_path() -> Path:
    return app_data_path() / settings.App.DB_FILENAME


def get_app_data_dir() -> str:
    """
    Absolute path of the directory containing the database file.
    Never raises: falls back to the configured default directory.
    """
    try:
        return str(app_data_path().resolve())
    except Exception:
        return str((Path(settings.App.FALLBACK_DATA_DIR) / settings.App.NAME).absolute())
