"""Configuration management."""

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Library settings pulled from environment variables."""

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    log_format: str = Field(
        default="plain", description="Logging format (plain or json)"
    )

    # Triangulation
    check_invariants: bool = Field(
        default=False,
        description="Run mesh consistency checks after every triangulation",
    )

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        env_prefix = "DELAUNATOR_"
        extra = "ignore"


settings = Settings()
