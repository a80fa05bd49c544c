# foodregistry/database/base_repository.py
# Base class for ORM repositories.

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from foodregistry.utils.logger import logger

class BaseRepository:
    """
    Base class for data repositories using SQLAlchemy ORM Sessions.

    Repositories never raise to their callers: failures are logged and a
    sentinel (None, False or an empty list) comes back. Methods receive the
    session, the caller owns its scope.
    """

    def __init__(self, engine: Engine):
        if not isinstance(engine, Engine):
            raise TypeError("engine must be an instance of sqlalchemy.engine.Engine")
        self.engine = engine
        self.log_prefix = f"[{self.__class__.__name__}]"
        logger.debug(f"{self.__class__.__name__} initialized with SQLAlchemy engine: {engine.url.database}")

    def _rollback_quietly(self, db: Session):
        try:
            db.rollback()
        except Exception as e:
            logger.error(f"{self.log_prefix} rollback failed: {e}", exc_info=True)
