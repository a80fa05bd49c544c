import logging
import os
import sys
from concurrent_log_handler import ConcurrentRotatingFileHandler
from typing import Optional

# --- Settings ---
LOG_DIRECTORY = os.environ.get(
    'LOG_DIRECTORY',
    os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))), "logs"),
)
LOG_FILENAME_BASE = "foodregistry.log"
LOG_LEVEL_DEFAULT = "DEBUG"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d | %(funcName)s] - %(message)s'
LOG_MAX_BYTES = 10 * 1024 * 1024  # 10 MB
LOG_BACKUP_COUNT = 10


def _resolve_level(level_str: Optional[str]) -> int:
    if level_str is None:
        try:
            from foodregistry.config import config  # late import, config may not be loadable yet
            level_str = config.LOG_LEVEL
        except ImportError:
            level_str = LOG_LEVEL_DEFAULT

    numeric_level = getattr(logging, level_str.upper(), None)
    if not isinstance(numeric_level, int):
        print(f"Warning: invalid log level '{level_str}'. Falling back to DEBUG.", file=sys.stderr)
        numeric_level = logging.DEBUG
    return numeric_level


class Logger:
    """Owns the application logger: console plus a process-safe rotating file."""
    _instance = None

    def __new__(cls, *args, **kwargs):
        if cls._instance is None:
            cls._instance = super(Logger, cls).__new__(cls)
            cls._instance._logger = None
        return cls._instance

    def __init__(self, name: str = "FoodRegistry", log_level: Optional[str] = None):
        if self._logger is not None:
            # Already built, only the level can change
            if log_level is not None:
                self._logger.setLevel(_resolve_level(log_level))
            return

        self._logger = logging.getLogger(name)
        self._logger.setLevel(_resolve_level(log_level))

        if not self._logger.handlers:
            formatter = logging.Formatter(LOG_FORMAT)

            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setFormatter(formatter)
            self._logger.addHandler(console_handler)

            try:
                os.makedirs(LOG_DIRECTORY, exist_ok=True)
                file_handler = ConcurrentRotatingFileHandler(
                    filename=os.path.join(LOG_DIRECTORY, LOG_FILENAME_BASE),
                    mode='a',
                    maxBytes=LOG_MAX_BYTES,
                    backupCount=LOG_BACKUP_COUNT,
                    encoding='utf-8',
                )
                file_handler.setFormatter(formatter)
                self._logger.addHandler(file_handler)
            except Exception as e:
                print(f"Could not set up file logging in {LOG_DIRECTORY}: {e}", file=sys.stderr)

    def get_logger(self) -> logging.Logger:
        """Returns the configured logger."""
        if not self._logger:
            raise RuntimeError("Logger has not been initialized.")
        return self._logger

# Global logger instance
logger_instance = Logger()
logger = logger_instance.get_logger()

def configure_logger(level: str):
    """Changes the level of the global logger."""
    Logger(log_level=level)
