"""Configuration for the verification CLI."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Verifier settings loaded from EKS_VERIFY_* environment variables."""

    project_root: str | None = Field(
        default=None,
        description="Template repository to verify (discovered from the working directory if unset)",
    )
    log_level: str = Field(default="INFO", description="Logging level")
    max_examples: int = Field(
        default=100, ge=1, description="Upper bound on cases per randomized property"
    )
    output_format: str = Field(default="text", description="Report format: text or json")

    class Config:
        env_prefix = "EKS_VERIFY_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
