"""Application settings.

Values are read once from the environment (and a local ``.env`` file) and
frozen for the lifetime of the process.
"""

import os
from functools import lru_cache
from typing import List

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:3001",
    "http://localhost:3002",
    "http://localhost:3003",
]


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    jwt_secret: str
    database_url: str = "sqlite:///./tasktracker.db"
    environment: str = "development"
    env_name: str = "Unknown"
    cors_origins: List[str] = DEFAULT_CORS_ORIGINS
    host: str = "0.0.0.0"
    port: int = 5000
    log_level: str = "INFO"
    sql_echo: bool = False

    @property
    def is_development(self) -> bool:
        return self.environment == "development"


def _split_origins(value: str) -> List[str]:
    return [origin.strip() for origin in value.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Load settings from the environment."""
    load_dotenv()

    jwt_secret = os.getenv("JWT_SECRET")
    if not jwt_secret:
        raise ValueError("JWT_SECRET environment variable is not set.")

    cors_origins = os.getenv("CORS_ORIGINS")

    return Settings(
        jwt_secret=jwt_secret,
        database_url=os.getenv("DATABASE_URL", "sqlite:///./tasktracker.db"),
        environment=os.getenv("APP_ENV", "development"),
        env_name=os.getenv("ENV_NAME", "Unknown"),
        cors_origins=_split_origins(cors_origins) if cors_origins else DEFAULT_CORS_ORIGINS,
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "5000")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        sql_echo=os.getenv("SQL_ECHO", "").lower() in ("1", "true", "yes"),
    )
