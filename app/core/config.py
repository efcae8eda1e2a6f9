from pydantic_settings import BaseSettings
from pydantic import field_validator
from typing import List, Union

class Settings(BaseSettings):
    # Database Configuration - PostgreSQL in production, SQLite file for local runs
    DATABASE_URL: str = "sqlite:///./family_hub.db"

    # CORS Configuration - must be set via environment variable
    ALLOWED_ORIGINS: Union[List[str], str] = []

    # Session cookie settings
    SESSION_COOKIE_NAME: str = "family_hub_sid"
    SESSION_MAX_AGE_SECONDS: int = 60 * 60 * 24 * 7  # 1 week of inactivity
    SESSION_COOKIE_SECURE: bool = False  # Set to True in production with HTTPS

    # Password hashing cost factor
    BCRYPT_ROUNDS: int = 12

    # External API Keys
    OPENAI_API_KEY: str = ""
    OPENAI_MODEL: str = "gpt-4o-mini"
    OPENAI_TIMEOUT_SECONDS: float = 60.0

    # Rate Limiting Configuration
    RATE_LIMIT_ENABLED: bool = True

    # Default rate limits (requests per minute)
    DEFAULT_RATE_LIMIT: str = "100/minute"

    # Critical endpoint rate limits (more restrictive)
    AUTH_RATE_LIMIT: str = "10/minute"
    AI_RATE_LIMIT: str = "5/minute"

    # Standard endpoint rate limits
    WRITE_RATE_LIMIT: str = "60/minute"
    USER_RATE_LIMIT: str = "20/minute"

    # Request size limits (in bytes)
    MAX_REQUEST_SIZE: int = 1 * 1024 * 1024  # 1MB

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"
    SECURITY_LOG_LEVEL: str = "INFO"
    LOG_SECURITY_EVENTS: bool = True

    @field_validator('ALLOWED_ORIGINS', mode='before')
    @classmethod
    def parse_cors_origins(cls, v):
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(',') if origin.strip()]
        return v

    class Config:
        env_file = ".env"
        extra = "ignore"  # Ignore extra environment variables

settings = Settings()
