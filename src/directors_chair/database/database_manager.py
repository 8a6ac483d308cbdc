import re
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Optional, Any, Dict, Iterator, Union

from sqlalchemy import create_engine, Engine, event, text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker, Session

from directors_chair.logger import logger
from directors_chair.config.config import settings
from directors_chair.database.errors import (
    ConstraintViolationError,
    StoreInitializationError,
    StoreUnavailableError,
)
from directors_chair.database.models import Base
from directors_chair.utils.path_utils import get_db_path

_NOT_NULL_PATTERN = re.compile(r"NOT NULL constraint failed: (\w+)\.(\w+)")


def _enable_foreign_keys(dbapi_connection, connection_record):
    """SQLite ships with foreign key enforcement off; turn it on for every new connection"""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _constraint_error(error: IntegrityError) -> ConstraintViolationError:
    message = str(error.orig) if error.orig is not None else str(error)
    match = _NOT_NULL_PATTERN.search(message)
    if match:
        table, column = match.groups()
        return ConstraintViolationError(f"{table}.{column} is required", field=column)
    if "FOREIGN KEY constraint failed" in message:
        return ConstraintViolationError("Referenced parent record does not exist")
    if "UNIQUE constraint failed" in message:
        return ConstraintViolationError(f"Duplicate identifier: {message}")
    return ConstraintViolationError(message)


class DatabaseManager:
    """Owns the SQLite engine backing the project store and serializes every unit of work"""

    def __init__(self, db_path: Optional[Union[str, Path]] = None):
        self.db_path = Path(db_path) if db_path else get_db_path()
        self.provider = settings.Database.PROVIDER
        self._engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None
        self._lock = threading.RLock()
        self._closed = False

    @property
    def is_available(self) -> bool:
        return self._engine is not None and not self._closed

    def initialize(self):
        """
        Open (or create) the database file and make sure every table and index exists.
        Safe to call on every startup; existing rows are never touched.
        """
        if not settings.FeatureFlags.ENABLE_DATABASE:
            logger.warning("[DATABASE_MANAGER] Database disabled via feature flag")
            return

        with self._lock:
            if self.is_available:
                self.initialize_schema()
                return

            try:
                logger.info(f"[DATABASE_MANAGER] Initializing {self.provider} database at {self.db_path}")
                self.db_path.parent.mkdir(parents=True, exist_ok=True)

                engine = create_engine(
                    f"sqlite:///{self.db_path}",
                    echo=settings.Database.ECHO,
                    connect_args={
                        "check_same_thread": False,
                        "timeout": settings.Database.BUSY_TIMEOUT_SECONDS,
                    },
                )
                event.listen(engine, "connect", _enable_foreign_keys)
                self._engine = engine

                with engine.connect() as conn:
                    enabled = conn.execute(text("PRAGMA foreign_keys")).scalar()
                    if enabled != 1:
                        raise StoreInitializationError("SQLite foreign key enforcement could not be enabled")

                self._session_factory = sessionmaker(
                    bind=engine,
                    autocommit=False,
                    autoflush=False,
                    expire_on_commit=False,
                )
                self._closed = False
                self.initialize_schema()
                logger.info("[DATABASE_MANAGER] Database initialized successfully")

            except StoreInitializationError:
                self._reset()
                raise
            except Exception as e:
                logger.exception(f"[DATABASE_MANAGER] Failed to initialize database: {e}")
                self._reset()
                raise StoreInitializationError(f"Failed to initialize database at {self.db_path}: {e}") from e

    def initialize_schema(self):
        """Create tables and indexes that are not already present"""
        engine = self.get_engine()
        try:
            Base.metadata.create_all(bind=engine, checkfirst=True)
            logger.debug(f"[DATABASE_MANAGER] Schema ensured: {sorted(Base.metadata.tables)}")
        except SQLAlchemyError as e:
            logger.exception(f"[DATABASE_MANAGER] Failed to create schema: {e}")
            raise StoreInitializationError(f"Failed to create schema: {e}") from e

    def _reset(self):
        if self._engine is not None:
            self._engine.dispose()
        self._engine = None
        self._session_factory = None

    def get_engine(self) -> Engine:
        if not self.is_available:
            raise StoreUnavailableError(f"Project store is not available ({self.db_path})")
        return self._engine

    def get_session(self) -> Session:
        """Get a raw session; prefer session_scope, which handles commit, rollback and locking"""
        if not self.is_available or self._session_factory is None:
            raise StoreUnavailableError(f"Project store is not available ({self.db_path})")
        return self._session_factory()

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """
        One atomic unit of work. Commits on success, rolls back on any error.
        Holds the store-wide lock for its whole duration so no caller can observe
        a half-applied write.
        """
        with self._lock:
            session = self.get_session()
            try:
                yield session
                session.commit()
            except IntegrityError as e:
                session.rollback()
                error = _constraint_error(e)
                logger.warning(f"[DATABASE_MANAGER] Constraint violation, rolled back: {error}")
                raise error from e
            except Exception:
                session.rollback()
                raise
            finally:
                session.close()

    def health_check(self) -> Dict[str, Any]:
        """Perform health check on the store; never raises"""
        health_status = {
            "provider": self.provider,
            "path": str(self.db_path),
            "database_enabled": settings.FeatureFlags.ENABLE_DATABASE,
            "status": "unknown",
        }

        if not self.is_available:
            health_status["status"] = "unavailable"
            health_status["message"] = "Store closed or not initialized"
            return health_status

        try:
            with self.session_scope() as session:
                session.execute(text("SELECT 1"))
                foreign_keys = session.execute(text("PRAGMA foreign_keys")).scalar()
            health_status["status"] = "healthy"
            health_status["foreign_keys"] = bool(foreign_keys)
            health_status["message"] = "SQLite connection successful"
        except Exception as e:
            health_status["status"] = "error"
            health_status["message"] = str(e)
            logger.exception(f"[DATABASE_MANAGER] Health check failed: {e}")

        return health_status

    def close(self):
        """Close database connections; later operations raise StoreUnavailableError"""
        with self._lock:
            if self._engine is not None:
                self._engine.dispose()
                logger.info("[DATABASE_MANAGER] SQLite connections closed")
            self._engine = None
            self._session_factory = None
            self._closed = True


def open_store(db_path: Optional[Union[str, Path]] = None) -> DatabaseManager:
    """
    Startup helper. Initialization failure is logged rather than raised: the
    returned manager is then unavailable and every operation on it raises
    StoreUnavailableError, so the host keeps running without persistence.
    """
    manager = DatabaseManager(db_path)
    try:
        manager.initialize()
        if manager.is_available:
            logger.info(f"[DATABASE] Database initialized at: {manager.db_path}")
    except StoreInitializationError as e:
        logger.error(f"[DATABASE] Failed to initialize database: {e}")
    return manager
