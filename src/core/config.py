import os
import re
from pathlib import Path
from typing import Optional

import toml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Bot(BaseSettings):
    """The bot settings."""

    NAME: str = "Warden"
    TOKEN: str
    ENVIRONMENT: str = "development"

    @field_validator("TOKEN")
    @classmethod
    def check_token_format(cls, v: str) -> str:
        """Validate discord tokens format."""
        pattern = re.compile(r".{26}\..{6}\..{38}")
        assert pattern.fullmatch(v), f"Discord token must follow >> {pattern.pattern} << pattern."
        return v

    model_config = SettingsConfigDict(env_file=".env", env_prefix="BOT_", extra="ignore")


class Database(BaseSettings):
    """The database settings."""

    HOST: str = "localhost"
    PORT: int = 3306
    DATABASE: str = "warden"
    USER: str = "warden"
    PASSWORD: str = ""
    CHARSET: str = "utf8mb4"
    POOL_SIZE: int = 5

    def assemble_db_connection(self) -> str:
        connection_string = (
            f"mariadb+asyncmy://{self.USER}:{self.PASSWORD}@{self.HOST}:{self.PORT}/"
            f"{self.DATABASE}?charset="
            f"{self.CHARSET}"
        )
        return connection_string

    model_config = SettingsConfigDict(env_file=".env", env_prefix="MYSQL_", extra="ignore")


class Global(BaseSettings):
    """The app settings."""

    bot: Optional[Bot] = None
    database: Optional[Database] = None

    guild_ids: list[int]

    SENTRY_DSN: str | None = None
    LOG_LEVEL: str | int = "INFO"
    DEBUG: bool = False

    # Prometheus exporter is disabled when set to 0.
    METRICS_PORT: int = 0

    ROOT: Optional[Path] = None

    VERSION: str | None = Field(default=None, validate_default=True)

    @field_validator("VERSION")
    @classmethod
    def get_project_version(cls, v: Optional[str]) -> Optional[str]:
        def _get_from_pyproject() -> Optional[str]:
            try:
                with open("pyproject.toml", "r") as f:
                    config = toml.load(f)
            except FileNotFoundError:
                return None
            return config.get("project", {}).get("version")

        if not v:
            return _get_from_pyproject()
        return v

    @field_validator("guild_ids")
    @classmethod
    def check_ids_format(cls, v: list[int]) -> list[int]:
        """Validate discord ids format."""
        for discord_id in v:
            assert len(str(discord_id)) > 17, "Discord ids must have a length of 19."
        return v

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


def load_settings(env_file: str | None = None) -> Global:
    global_settings = Global(_env_file=env_file)
    global_settings.bot = Bot(_env_file=env_file)
    global_settings.database = Database(_env_file=env_file)
    return global_settings


settings = load_settings(
    os.environ.get("ENV_PATH") if os.environ.get("BOT_ENVIRONMENT") else ".test.env"
)
