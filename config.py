import json
import os
from pydantic_settings import BaseSettings
from pydantic import model_validator, field_validator
from typing import Any, Optional

BASE_DIR = os.path.abspath(os.path.dirname(__file__))
DEFAULT_DB_URI = f'sqlite:///{os.path.join(BASE_DIR, "upstream.db")}'


class Config(BaseSettings):
    # Security configuration
    SECRET_KEY: str = 'dev'
    # Required in the X-Admin-Token header of /admin requests when set
    ADMIN_API_TOKEN: Optional[str] = None

    # Database
    DATABASE_URL: str = DEFAULT_DB_URI
    SQLALCHEMY_DATABASE_URI: Optional[str] = None
    SQLALCHEMY_TRACK_MODIFICATIONS: bool = False

    @model_validator(mode='after')
    def set_database_config(self) -> 'Config':
        """Set SQLALCHEMY_DATABASE_URI from DATABASE_URL"""
        self.SQLALCHEMY_DATABASE_URI = self.DATABASE_URL
        return self

    # Public base URL of this installation, sent to the licensing server
    # and used to build admin links in notices.
    SITE_URL: str = 'http://localhost:5000'

    # Licensing server (Easy Digital Downloads store)
    LICENSE_API_URL: str = 'https://upstreamplugin.com'
    LICENSE_REQUEST_TIMEOUT: int = 30  # seconds
    LICENSE_VERIFY_SSL: bool = True
    LICENSE_CHECK_PERIOD_DAYS: int = 15
    LICENSE_REGISTRATION_PAGE: str = 'admin/extensions'

    # License checker job
    ENABLE_LICENSE_SCHEDULER: bool = True
    LICENSE_CHECK_INTERVAL_HOURS: int = 24  # daily

    # Every add-on the licensing server knows about, in check order.
    # Each entry: {"slug": "...", "edd_id": "...", "name": "..."}
    ADDON_CATALOG: list = []

    @field_validator('ADDON_CATALOG', mode='before')
    def _parse_addon_catalog(cls, v):
        """Allow ADDON_CATALOG to be given in .env as a JSON array."""
        if v is None or v == '':
            return []
        if isinstance(v, str):
            v = json.loads(v)
        return v

    # Internationalization
    LANGUAGES: list = ['en', 'pl']
    BABEL_DEFAULT_LOCALE: str = 'en'
    BABEL_DEFAULT_TIMEZONE: str = 'UTC'
    BABEL_TRANSLATION_DIRECTORIES: str = os.path.join(BASE_DIR, 'translations')

    # Application environment: development | staging | production
    APP_ENV: str = os.getenv('FLASK_ENV', 'development')
    LOG_LEVEL: str = 'INFO'

    class Config:
        env_file = '.env'
        env_file_encoding = 'utf-8'
        case_sensitive = False
        extra = 'ignore'  # Ignore extra fields from .env
