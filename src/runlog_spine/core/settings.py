"""Application settings with Pydantic."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Run log retrieval configuration.

    Every field can be set through a ``RUNLOG_*`` environment variable or a
    ``.env`` file. ``ecs_log_driver_options`` mirrors the ``awslogs`` driver
    options handed to ECS task definitions, so the same values that tell the
    log-shipping agent where to write tell this service where to read.
    """

    model_config = SettingsConfigDict(
        env_prefix="RUNLOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # Mode ("test" skips creating AWS clients)
    mode: str = "dev"

    # Backend variant
    logs_client: str = "ecs-cloudwatch"

    # AWS
    aws_default_region: str = ""
    aws_max_attempts: int = 5
    aws_connect_timeout: float = 5.0
    aws_read_timeout: float = 30.0

    # ECS / CloudWatch logs
    ecs_log_namespace: str = ""
    ecs_log_driver_options: dict[str, str] = Field(default_factory=dict)
    ecs_log_retention_days: int = 0

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"  # json or console


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
