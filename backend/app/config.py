"""Application configuration via Pydantic Settings.

Loads from .env file and environment variables.
All settings are validated at startup.
"""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """VerseGraph application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Neo4j ---
    neo4j_uri: str = "bolt://localhost:7687"
    neo4j_user: str = "neo4j"
    neo4j_password: str = "versegraph"

    # --- Redis ---
    redis_url: str = "redis://:versegraph@localhost:6379"

    # --- Authentication ---
    api_key: str = ""  # empty = dev mode (no auth)
    admin_api_key: str = ""  # empty = dev mode

    # --- Graph generation ---
    graph_notes_limit: int = 100  # notes read per full-graph run
    note_description_chars: int = 200

    # --- App ---
    cors_origins: list[str] = Field(default=["http://localhost:3000"])
    log_level: str = "INFO"
    log_format: str = "json"

    # --- Task Queue (arq) ---
    arq_max_jobs: int = 10
    arq_job_timeout: int = 600
    arq_keep_result: int = 3600

    # --- Derived ---
    debug: bool = False

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: str | list[str]) -> list[str]:
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",")]
        return v


settings = Settings()
