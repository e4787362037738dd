"""Runtime settings, read once from the environment at startup."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

DEV_JWT_SECRET = "dev-secret-change-me"
DEVELOPMENT = "development"


class ConfigurationError(Exception):
    """Settings that must not be used to start the service."""


@dataclass(frozen=True)
class Settings:
    data_dir: Path = Path("data")
    jwt_secret: str = DEV_JWT_SECRET
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60
    host: str = "127.0.0.1"
    port: int = 3000
    log_level: str = "INFO"
    cors_origins: tuple[str, ...] = field(default=("*",))
    webhook_secret: str | None = None
    environment: str = DEVELOPMENT

    def __post_init__(self) -> None:
        if self.environment != DEVELOPMENT and self.jwt_secret == DEV_JWT_SECRET:
            raise ConfigurationError(
                f"JWT_SECRET must be set when MARKETPLACE_ENV is {self.environment!r}"
            )

    @staticmethod
    def from_env(env_file: str | None = None) -> Settings:
        """Build settings from ``MARKETPLACE_*`` and friends.

        A ``.env`` file is loaded first; variables already set in the
        process environment win over it.  Outside development
        (``MARKETPLACE_ENV``) a real ``JWT_SECRET`` is required and
        ConfigurationError is raised without one.
        """
        load_dotenv(env_file)
        origins = os.getenv("CORS_ORIGINS", "*")
        return Settings(
            data_dir=Path(os.getenv("MARKETPLACE_DATA_DIR", "data")),
            jwt_secret=os.getenv("JWT_SECRET") or DEV_JWT_SECRET,
            jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
            access_token_expire_minutes=int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60")),
            host=os.getenv("HOST", "127.0.0.1"),
            port=int(os.getenv("PORT", "3000")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            cors_origins=tuple(o.strip() for o in origins.split(",") if o.strip()),
            webhook_secret=os.getenv("WEBHOOK_SECRET") or None,
            environment=(os.getenv("MARKETPLACE_ENV") or DEVELOPMENT).strip().lower(),
        )
