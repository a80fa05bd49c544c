# foodregistry/config/settings.py
# Loads environment variables and defines the application configuration.

from dataclasses import dataclass, field
from typing import Optional, List
from dotenv import load_dotenv
import os
import logging
import sys
from urllib.parse import quote_plus

# Determine the project root directory dynamically
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
dotenv_path = os.path.join(PROJECT_ROOT, '.env')
load_dotenv(dotenv_path=dotenv_path)


def _env_bool(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip().lower() in ('1', 'true', 'yes', 'on')


@dataclass
class Config:
    """
    Application configuration loaded from environment variables.
    Provides type hints and default values.
    """
    # Flask Settings
    SECRET_KEY: str = field(default_factory=lambda: os.environ.get('SECRET_KEY', 'default_secret_key_change_me_in_env'))
    APP_HOST: str = field(default_factory=lambda: os.environ.get('APP_HOST', '0.0.0.0'))
    APP_PORT: int = field(default_factory=lambda: int(os.environ.get('APP_PORT', 5199)))
    APP_DEBUG: bool = field(default_factory=lambda: _env_bool('APP_DEBUG', 'True'))
    LOG_LEVEL: str = field(default_factory=lambda: os.environ.get('LOG_LEVEL', 'DEBUG').upper())
    CORS_ORIGINS: List[str] = field(default_factory=lambda: [
        o.strip() for o in os.environ.get('CORS_ORIGINS', '*').split(',') if o.strip()
    ])

    # --- Database Settings ---
    DB_TYPE: str = field(default_factory=lambda: os.environ.get('DB_TYPE', 'SQLITE').upper())

    # PostgreSQL Specific Settings (read from .env)
    POSTGRES_HOST: str = field(default_factory=lambda: os.environ.get('POSTGRES_HOST', 'localhost'))
    POSTGRES_PORT: int = field(default_factory=lambda: int(os.environ.get('POSTGRES_PORT', 5432)))
    POSTGRES_USER: str = field(default_factory=lambda: os.environ.get('POSTGRES_USER', ''))
    POSTGRES_PASSWORD: str = field(default_factory=lambda: os.environ.get('POSTGRES_PASSWORD', ''))
    POSTGRES_DB: str = field(default_factory=lambda: os.environ.get('POSTGRES_DB', ''))

    # SQLite file, relative paths resolve against the project root
    DATABASE_PATH: str = field(default_factory=lambda: os.environ.get('DATABASE_PATH', 'data/foodregistry.db'))

    DB_POOL_SIZE: int = field(default_factory=lambda: int(os.environ.get('DB_POOL_SIZE', 10)))
    DB_MAX_OVERFLOW: int = field(default_factory=lambda: int(os.environ.get('DB_MAX_OVERFLOW', 20)))

    # --- SQLAlchemy Database URL ---
    # DATABASE_URL wins; otherwise built from DB_TYPE and the specific settings
    SQLALCHEMY_DATABASE_URI: Optional[str] = field(default_factory=lambda: os.environ.get('DATABASE_URL') or None)

    # Startup behaviour
    SEED_SAMPLE_DATA: bool = field(default_factory=lambda: _env_bool('SEED_SAMPLE_DATA', 'False'))
    RESOURCE_MONITOR_INTERVAL: int = field(default_factory=lambda: int(os.environ.get('RESOURCE_MONITOR_INTERVAL', 300)))

    # Client side (product list page)
    API_BASE_URL: str = field(default_factory=lambda: os.environ.get('API_BASE_URL', 'http://localhost:5199'))
    REQUEST_TIMEOUT: int = field(default_factory=lambda: int(os.environ.get('REQUEST_TIMEOUT', 30)))
    PREFERENCES_PATH: str = field(default_factory=lambda: os.environ.get(
        'PREFERENCES_PATH', os.path.join(os.path.expanduser('~'), '.foodregistry', 'preferences.json')
    ))

    def __post_init__(self):
        # Validate log level
        valid_levels = list(logging._nameToLevel.keys())
        if self.LOG_LEVEL not in valid_levels:
            print(f"Warning: Invalid LOG_LEVEL '{self.LOG_LEVEL}'. Valid levels: {valid_levels}. Defaulting to DEBUG.", file=sys.stderr)
            self.LOG_LEVEL = 'DEBUG'

        if self.SQLALCHEMY_DATABASE_URI:
            return

        # --- Build SQLAlchemy Database URI ---
        if self.DB_TYPE == 'POSTGRES':
            if not all([self.POSTGRES_HOST, self.POSTGRES_USER, self.POSTGRES_PASSWORD, self.POSTGRES_DB]):
                print("Warning: Missing PostgreSQL connection details in environment variables. Database connection will likely fail.", file=sys.stderr)
                self.SQLALCHEMY_DATABASE_URI = None
            else:
                encoded_password = quote_plus(self.POSTGRES_PASSWORD)
                self.SQLALCHEMY_DATABASE_URI = f"postgresql+psycopg://{self.POSTGRES_USER}:{encoded_password}@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        elif self.DB_TYPE == 'SQLITE':
            if self.DATABASE_PATH:
                abs_path = self.DATABASE_PATH if os.path.isabs(self.DATABASE_PATH) else os.path.join(PROJECT_ROOT, self.DATABASE_PATH)
                os.makedirs(os.path.dirname(abs_path), exist_ok=True)
                self.SQLALCHEMY_DATABASE_URI = f"sqlite:///{abs_path}"
            else:
                print("Warning: DB_TYPE is SQLITE but DATABASE_PATH is not set.", file=sys.stderr)
                self.SQLALCHEMY_DATABASE_URI = None
        else:
            print(f"Warning: Unsupported DB_TYPE '{self.DB_TYPE}'. No database URI configured.", file=sys.stderr)
            self.SQLALCHEMY_DATABASE_URI = None

    def masked_database_uri(self) -> str:
        """Database URI with the password replaced, safe for logs."""
        db_uri_log = str(self.SQLALCHEMY_DATABASE_URI)
        if self.POSTGRES_PASSWORD:
            db_uri_log = db_uri_log.replace(quote_plus(self.POSTGRES_PASSWORD), '********')
        return db_uri_log


# Singleton instance, created by load_config
_config_instance: Optional[Config] = None

def load_config() -> Config:
    """Loads or returns the singleton Config instance."""
    global _config_instance
    if _config_instance is None:
        _config_instance = Config()
        print("--- Configuration Loaded ---")
        print(f"  APP_HOST: {_config_instance.APP_HOST}")
        print(f"  APP_PORT: {_config_instance.APP_PORT}")
        print(f"  APP_DEBUG: {_config_instance.APP_DEBUG}")
        print(f"  LOG_LEVEL: {_config_instance.LOG_LEVEL}")
        print(f"  DB_TYPE: {_config_instance.DB_TYPE}")
        print(f"  SQLALCHEMY_DATABASE_URI: {_config_instance.masked_database_uri()}")
        print(f"  API_BASE_URL: {_config_instance.API_BASE_URL}")
        print("--------------------------")
    return _config_instance

# Expose the singleton instance directly
config = load_config()
