# bookdb/core/config.py
from typing import Optional

from pydantic_settings import BaseSettings

from settings import DatabaseConfig, FormDefaults

class Settings(BaseSettings):
    DATABASE_URL: str = DatabaseConfig.DATABASE_URL

    # Form processor defaults, overridable per form and per field
    FORM_LABEL_COLUMN: str = FormDefaults.LABEL_COLUMN
    FORM_ACTIVE_COLUMN: Optional[str] = FormDefaults.ACTIVE_COLUMN
    FORM_UNIQUE_MESSAGE: str = FormDefaults.UNIQUE_MESSAGE
    FORM_REQUIRED_MESSAGE: str = FormDefaults.REQUIRED_MESSAGE
    FORM_ERROR_MESSAGE: str = FormDefaults.FORM_ERROR_MESSAGE

    class Config:
        extra = "allow"  # ✅ allow additional fields from .env
        env_file = ".env"

settings = Settings()
