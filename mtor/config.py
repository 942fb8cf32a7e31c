"""
Application settings.

Values come from the environment (MTOR_ prefix) or a local .env file.
"""
from typing import List, Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "MTOR Evolution API"
    version: str = "1.0.0"

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None

    # Persistence: "memory" keeps everything in-process, "json" writes one
    # document per collection under storage_dir
    storage_backend: Literal["memory", "json"] = "memory"
    storage_dir: str = "data"

    # Pagination
    default_page_size: int = 10
    max_page_size: int = 1000

    # Load demo clients/assessments/exams/protocols into empty collections
    seed_demo_data: bool = True

    report_output_dir: str = "reports"
    cors_origins: List[str] = ["*"]

    model_config = SettingsConfigDict(
        env_prefix="MTOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
