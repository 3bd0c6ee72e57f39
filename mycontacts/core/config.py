# mycontacts/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Required env vars (.env):
      - DATABASE_URL (SQLAlchemy URL, e.g. postgresql+psycopg://... or sqlite:///...)
      - JWT_SECRET (HS256 signing secret for access tokens)

    Optional:
      - CORS_ALLOWED_ORIGINS (comma separated, "*" allows every origin)
      - HOST / PORT for the uvicorn entrypoint
    """

    PROJECT_NAME: str = "MyContacts API"
    API_PREFIX: str = ""

    # DB config
    DATABASE_URL: str

    # JWT signing (backend-side)
    JWT_SECRET: str
    JWT_ALG: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # bcrypt work factor
    BCRYPT_ROUNDS: int = 10

    CORS_ALLOWED_ORIGINS: str = "*"

    HOST: str = "0.0.0.0"
    PORT: int = 3080

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def cors_origins(self) -> list[str]:
        """Parsed CORS whitelist; ["*"] means allow all."""
        raw = self.CORS_ALLOWED_ORIGINS.strip()
        if raw == "*" or not raw:
            return ["*"]
        return [o.strip() for o in raw.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
