"""Application configuration (non-secret settings)."""

import os

from pydantic import BaseModel, Field


class AppConfig(BaseModel):
    """HTTP and logging settings for the API process."""

    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000"],
        description="Browser origins allowed to call the API",
    )
    log_level: str = Field(
        default="INFO",
        pattern=r"^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
    )
    host: str = "0.0.0.0"
    port: int = Field(default=3002, ge=1, le=65535)

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Build config from TASKMANAGER_* environment variables, defaulting the rest."""
        values: dict = {}
        origins = os.getenv("TASKMANAGER_CORS_ORIGINS")
        if origins:
            values["cors_origins"] = [o.strip() for o in origins.split(",") if o.strip()]
        log_level = os.getenv("TASKMANAGER_LOG_LEVEL")
        if log_level:
            values["log_level"] = log_level.upper()
        port = os.getenv("TASKMANAGER_PORT")
        if port:
            values["port"] = int(port)
        return cls(**values)
