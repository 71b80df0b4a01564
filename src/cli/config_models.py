"""Pydantic configuration models for moodlog."""

import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def default_home() -> Path:
    return Path(os.environ.get("MOODLOG_HOME", "~/moodlog"))


class PathsConfig(BaseModel):
    """File paths configuration."""

    db_path: Path = Field(default_factory=lambda: default_home() / "moodlog.db")
    log_file: Optional[Path] = None

    @model_validator(mode="after")
    def expand_paths(self):
        """Expand ~ in all paths."""
        self.db_path = self.db_path.expanduser()
        if self.log_file:
            self.log_file = self.log_file.expanduser()
        return self


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    json_mode: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        v_upper = v.upper()
        if v_upper not in VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}. Must be one of {VALID_LOG_LEVELS}")
        return v_upper


class ExternalConfig(BaseModel):
    """Third-party sentiment / quotes services. Unset keys disable them."""

    sentiment_api_url: str = "https://api.sentimentanalysis.com/analyze"
    sentiment_api_key: Optional[str] = None
    quotes_api_url: str = "https://api.quotegarden.com/api/v3/quotes"
    quotes_api_key: Optional[str] = None
    timeout: float = 5.0

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"timeout must be positive, got {v}")
        return v


class WebConfig(BaseModel):
    """HTTP API settings."""

    host: str = "127.0.0.1"
    port: int = 8000
    frontend_origin: str = "http://localhost:3000"


class CLIConfig(BaseModel):
    """Local CLI settings."""

    user_id: str = "local"


class AppConfig(BaseModel):
    """Main configuration model."""

    paths: PathsConfig = Field(default_factory=PathsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    external: ExternalConfig = Field(default_factory=ExternalConfig)
    web: WebConfig = Field(default_factory=WebConfig)
    cli: CLIConfig = Field(default_factory=CLIConfig)

    @model_validator(mode="after")
    def expand_env_vars(self):
        """Expand ${VAR} patterns in API keys; env vars fill keys left unset."""
        for attr, env_var in (
            ("sentiment_api_key", "SENTIMENT_API_KEY"),
            ("quotes_api_key", "QUOTES_API_KEY"),
        ):
            key = getattr(self.external, attr)
            if key and key.startswith("${") and key.endswith("}"):
                key = os.getenv(key[2:-1], "")
            if not key:
                key = os.getenv(env_var) or None
            setattr(self.external, attr, key)
        origin = os.getenv("FRONTEND_ORIGIN")
        if origin:
            self.web.frontend_origin = origin
        return self

    @classmethod
    def from_dict(cls, data: dict) -> "AppConfig":
        return cls.model_validate(data)

    def to_dict(self) -> dict:
        return self.model_dump(mode="python")
