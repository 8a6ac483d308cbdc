import sys
import os
from dotenv import load_dotenv

from directors_chair.config.config import settings
from loguru import logger

load_dotenv()

class SingletonLogger():
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance.setup_logger()
        return cls._instance

    def setup_logger(self):
        # Configure Loguru
        logger.remove()  # Remove default handler

        log_level = os.getenv('LOG_LEVEL') or 'INFO'
        logger.add(sink=sys.stdout, level=log_level)

        if settings.Logging.FILE_ENABLED:
            from directors_chair.utils.path_utils import app_data_path
            logger.add(
                sink=str(app_data_path() / settings.Logging.FILE_NAME),
                level=log_level,
                rotation=settings.Logging.ROTATION,
                retention=settings.Logging.RETENTION,
                enqueue=True,
            )

    def get_logger(self):
        return logger

logger = SingletonLogger().get_logger()
