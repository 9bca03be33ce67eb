from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings(BaseSettings):
    APP_NAME: str = "Ledgerbook Backend"
    ENV: str = "dev"

    # apps/backend/db.sqlite3 as an absolute path so the CWD does not matter
    _default_db_path = Path(__file__).resolve().parents[2] / "db.sqlite3"
    DATABASE_URL: str = f"sqlite:///{_default_db_path}"

    CORS_ORIGINS: list[str] = ["*"]

    # bcrypt accepts cost factors 4..31
    BCRYPT_ROUNDS: int = Field(12, ge=4, le=31)
    RESET_TOKEN_TTL_MINUTES: int = Field(10, gt=0)
    RESET_TOKEN_BYTES: int = Field(32, ge=16)
    # No mail transport yet; dev builds hand the token back in the response
    EXPOSE_RESET_TOKEN: bool = False

    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    model_config = SettingsConfigDict(env_file=(".env",), env_prefix="LEDGER_", case_sensitive=False)

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def _known_level(cls, v):
        level = str(v).strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}")
        return level


settings = Settings()
