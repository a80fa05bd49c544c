# foodregistry/database/__init__.py
# Initializes SQLAlchemy components: Engine, SessionLocal, Base metadata.
# Logger and errors are imported locally so Alembic can import Base without the app stack.

import threading
from typing import Optional, Generator
from contextlib import contextmanager
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.exc import SQLAlchemyError

from .base import Base

_sqla_engine: Optional[Engine] = None
_SessionLocalFactory: Optional[sessionmaker] = None
_engine_lock = threading.Lock()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores FOREIGN KEY clauses unless asked per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def init_sqlalchemy(database_uri: str, pool_size: int = 10, max_overflow: int = 20,
                    seed_sample_data: bool = False) -> Engine:
    """
    Initializes the SQLAlchemy engine, session factory, and database schema.
    Should be called once during application startup.
    """
    from foodregistry.utils.logger import logger
    from foodregistry.api.errors import DatabaseError, ConfigurationError

    global _sqla_engine, _SessionLocalFactory
    with _engine_lock:
        if _sqla_engine and _SessionLocalFactory:
            logger.warning("SQLAlchemy engine and session factory already initialized.")
            return _sqla_engine

        if not database_uri:
            raise ConfigurationError("Database URI is missing in configuration.")

        logger.info("Initializing SQLAlchemy engine and session factory...")
        engine = None
        try:
            is_sqlite = make_url(database_uri).get_backend_name() == 'sqlite'
            engine_kwargs = {"echo": False, "pool_pre_ping": True}
            if not is_sqlite:
                engine_kwargs.update(pool_size=pool_size, max_overflow=max_overflow, pool_recycle=3600)
            engine = create_engine(database_uri, **engine_kwargs)
            if is_sqlite:
                event.listen(engine, "connect", _enable_sqlite_foreign_keys)

            try:
                with engine.connect():
                    logger.info("Database connection successful.")
            except SQLAlchemyError as conn_err:
                logger.critical(f"Database connection failed: {conn_err}", exc_info=True)
                raise DatabaseError(f"Failed to connect to the database: {conn_err}") from conn_err

            _SessionLocalFactory = sessionmaker(
                autocommit=False, autoflush=False, bind=engine, expire_on_commit=False
            )
            logger.info("SQLAlchemy session factory (SessionLocal) created.")

            from .schema_manager import SchemaManager
            try:
                SchemaManager(engine).initialize_schema(seed_sample_data=seed_sample_data)
            except Exception as schema_err:
                logger.critical(f"Database schema initialization failed: {schema_err}", exc_info=True)
                raise DatabaseError(f"Schema initialization failed: {schema_err}") from schema_err

            _sqla_engine = engine
            logger.info("SQLAlchemy initialization complete.")
            return _sqla_engine

        except (DatabaseError, ConfigurationError):
            _SessionLocalFactory = None
            if engine is not None:
                engine.dispose()
            raise
        except SQLAlchemyError as e:
            _SessionLocalFactory = None
            if engine is not None:
                engine.dispose()
            logger.critical(f"SQLAlchemy engine/session factory initialization failed: {e}", exc_info=True)
            raise DatabaseError(f"SQLAlchemy initialization failed: {e}") from e


@contextmanager
def get_db_session() -> Generator[Session, None, None]:
    """
    Context manager yielding a database session.
    Commits on success, rolls back on error, always closes.
    """
    from foodregistry.utils.logger import logger
    from foodregistry.api.errors import DatabaseError

    if not _SessionLocalFactory:
        raise RuntimeError("Database session factory has not been initialized.")

    db: Optional[Session] = None
    try:
        db = _SessionLocalFactory()
        yield db
        db.commit()
    except SQLAlchemyError as sql_ex:
        logger.error(f"Database error occurred in session: {sql_ex}", exc_info=True)
        if db:
            db.rollback()
        raise DatabaseError(f"Database operation failed: {sql_ex}") from sql_ex
    except Exception:
        if db:
            db.rollback()
            logger.debug("Database session rolled back due to exception.")
        raise
    finally:
        if db:
            db.close()


def dispose_sqlalchemy_engine():
    """Closes all connections in the engine's pool. Call during application shutdown."""
    from foodregistry.utils.logger import logger

    global _sqla_engine, _SessionLocalFactory
    with _engine_lock:
        if _sqla_engine:
            logger.info("Disposing SQLAlchemy engine connection pool...")
            try:
                _sqla_engine.dispose()
            except SQLAlchemyError as e:
                logger.error(f"Error disposing SQLAlchemy engine pool: {e}", exc_info=True)
            finally:
                _sqla_engine = None
                _SessionLocalFactory = None
        else:
            logger.debug("SQLAlchemy engine shutdown called, but engine already disposed or not initialized.")


__all__ = [
    "init_sqlalchemy",
    "get_db_session",
    "dispose_sqlalchemy_engine",
    "Base",
]
