"""
Configuration
=============
Settings for a migration run, read from the environment and an optional
.env file. The resulting object is passed explicitly to the engine and its
components.
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class MigrationConfig(BaseSettings):
    """Configuration for the migration engine."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Notion access
    notion_key: str = Field(alias="NOTION_KEY")
    notion_version: str = Field(default="2022-06-28", alias="NOTION_VERSION")
    api_base_url: str = Field(
        default="https://api.notion.com",
        alias="NOTION_API_BASE_URL",
    )
    request_timeout: float = Field(default=30.0, gt=0, alias="REQUEST_TIMEOUT")

    # Source and destination
    source_page_id: str = Field(alias="NOTION_SOURCE_PAGE_ID")
    dest_database_id: str = Field(alias="NOTION_DEST_DATABASE_ID")
    page_size: int = Field(ge=1, le=100, alias="PAGE_SIZE")

    # Row values
    image_link_message: str = Field(alias="IMAGE_LINK_MESSAGE")
    time_in_seconds: int = Field(ge=0, alias="TIME_IN_SECONDS")
    question_type: str = Field(default="Multiple Choice", alias="QUESTION_TYPE")
    correct_option_color: str = Field(
        default="green_background",
        alias="CORRECT_OPTION_COLOR",
    )

    # Processing
    max_workers: int = Field(default=4, ge=1, alias="MAX_WORKERS")
    dry_run: bool = Field(default=False, alias="DRY_RUN")

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_file: Optional[str] = Field(default=None, alias="LOG_FILE")


def load_config(env_file: Optional[str] = ".env", **overrides) -> MigrationConfig:
    """
    Load configuration from the environment and `env_file`, then apply
    overrides. Overrides set to None are ignored so CLI options can be
    passed straight through.
    """
    updates = {k: v for k, v in overrides.items() if v is not None}
    return MigrationConfig(_env_file=env_file, **updates)
