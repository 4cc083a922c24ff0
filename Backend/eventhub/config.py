from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings

DEFAULT_SERVER_PORT = 3000
DEFAULT_MIN_PASSWORD_LENGTH = 8
DEFAULT_MIN_EVENT_RATING = 0
DEFAULT_MAX_EVENT_RATING = 10


def _number_or(default: float, value, cast=int):
    """Coerce an environment value, falling back to a default when it is not numeric."""
    if value is None or value == "":
        return default
    try:
        return cast(value)
    except (TypeError, ValueError):
        return default


class Settings(BaseSettings):
    PORT: int = DEFAULT_SERVER_PORT
    PASSWORD_MIN_LENGTH: int = DEFAULT_MIN_PASSWORD_LENGTH
    EVENT_MIN_RATING: float = DEFAULT_MIN_EVENT_RATING
    EVENT_MAX_RATING: float = DEFAULT_MAX_EVENT_RATING

    # Database (no safe default for credentials)
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_USER: str = ""
    DB_PASSWORD: str = ""
    DB_DATABASE: str = ""
    DATABASE_URL: str = ""  # Overrides the DB_* fields when set

    JWT_SECRET: str
    JWT_ALGORITHM: str = "HS256"

    CORS_ORIGINS: str = "http://localhost:3000"

    # Observability
    SENTRY_DSN: str = ""
    LOG_LEVEL: str = "INFO"

    ENVIRONMENT: str = "development"

    model_config = {"env_file": ".env", "extra": "ignore", "frozen": True}

    @field_validator("PORT", mode="before")
    @classmethod
    def _port(cls, value):
        return _number_or(DEFAULT_SERVER_PORT, value)

    @field_validator("PASSWORD_MIN_LENGTH", mode="before")
    @classmethod
    def _password_length(cls, value):
        return _number_or(DEFAULT_MIN_PASSWORD_LENGTH, value)

    @field_validator("EVENT_MIN_RATING", mode="before")
    @classmethod
    def _min_rating(cls, value):
        return _number_or(DEFAULT_MIN_EVENT_RATING, value, cast=float)

    @field_validator("EVENT_MAX_RATING", mode="before")
    @classmethod
    def _max_rating(cls, value):
        return _number_or(DEFAULT_MAX_EVENT_RATING, value, cast=float)

    @field_validator("JWT_SECRET")
    @classmethod
    def _secret_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("JWT_SECRET must not be empty")
        return value

    @model_validator(mode="after")
    def _database_configured(self):
        if not self.DATABASE_URL and not (self.DB_USER and self.DB_PASSWORD and self.DB_DATABASE):
            raise ValueError(
                "DB_USER, DB_PASSWORD and DB_DATABASE are required unless DATABASE_URL is set"
            )
        return self

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+asyncpg://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_DATABASE}"
        )


@lru_cache
def get_settings() -> Settings:
    """Build the process-wide settings once; later calls return the same frozen object."""
    return Settings()
