"""
Environment configuration for the hostel income ledger.
Uses Pydantic's settings management to handle environment variables
with proper type validation and default values.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import List, Optional, Union

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file if it exists
env_path = Path('.') / '.env'
load_dotenv(dotenv_path=env_path)


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        populate_by_name=True,
        extra="ignore",
    )

    # Application configuration
    APP_NAME: str = Field(default="Hostel Income Ledger", alias="PROJECT_NAME")
    API_VERSION: str = Field(default="v1", alias="PROJECT_VERSION")
    API_V1_STR: str = "/api/v1"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"
    CORS_ORIGINS: List[str] = Field(default=["*"], alias="BACKEND_CORS_ORIGINS")

    # Hostel backend
    HOSTEL_API_URL: str = Field(default="http://localhost:4000", alias="NEXT_PUBLIC_API")
    HOSTEL_API_TIMEOUT_SECONDS: float = 10.0
    FLOOR_FETCH_CONCURRENCY: int = Field(default=1, ge=1, le=16)

    # Owner used when a request does not name one
    DEFAULT_OWNER_ID: Optional[str] = None

    # Reporting
    CURRENCY: str = "INR"

    # Monitoring and logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = "logs"

    @field_validator('CORS_ORIGINS', mode='before')
    @classmethod
    def parse_cors_origins(cls, v: Union[str, List[str]]) -> List[str]:
        """Parse CORS_ORIGINS from string to list"""
        if isinstance(v, str):
            # Handle JSON string format from .env
            if v.startswith('[') and v.endswith(']'):
                try:
                    return json.loads(v)
                except json.JSONDecodeError:
                    pass
            return [origin.strip() for origin in v.split(",")]
        return v

    @field_validator('HOSTEL_API_URL')
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Backend root must not end with '/' (paths are appended)"""
        return v.rstrip("/")

    @field_validator('DEFAULT_OWNER_ID', 'LOG_DIR', mode='before')
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def is_development(self) -> bool:
        """Check if running in development environment"""
        return self.ENVIRONMENT == "development"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
