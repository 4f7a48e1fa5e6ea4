"""Configuration for Escape Room."""

import os
from dataclasses import dataclass
from pathlib import Path


def _flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes")


@dataclass
class Config:
    """Application configuration."""

    database_url: str = "sqlite:///./escape_room.db"
    log_level: str = "WARNING"
    log_file: Path | None = None
    json_logs: bool = False
    redact_secrets: bool = True
    openai_api_key: str | None = None
    model: str = "gpt-3.5-turbo"
    narration: bool = True
    narration_timeout: float = 10.0
    generation_timeout: float = 120.0

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        log_file = os.getenv("ESCAPE_ROOM_LOG_FILE")

        return cls(
            database_url=os.getenv("ESCAPE_ROOM_DATABASE_URL", cls.database_url),
            log_level=os.getenv("ESCAPE_ROOM_LOG_LEVEL", cls.log_level),
            log_file=Path(log_file) if log_file else None,
            json_logs=_flag("ESCAPE_ROOM_JSON_LOGS", False),
            redact_secrets=_flag("ESCAPE_ROOM_REDACT_SECRETS", True),
            openai_api_key=os.getenv("OPENAI_API_KEY") or None,
            model=os.getenv("ESCAPE_ROOM_MODEL", cls.model),
            narration=_flag("ESCAPE_ROOM_NARRATION", True),
            narration_timeout=float(
                os.getenv("ESCAPE_ROOM_NARRATION_TIMEOUT", str(cls.narration_timeout))
            ),
            generation_timeout=float(
                os.getenv(
                    "ESCAPE_ROOM_GENERATION_TIMEOUT", str(cls.generation_timeout)
                )
            ),
        )

    @property
    def llm_enabled(self) -> bool:
        return bool(self.openai_api_key)
