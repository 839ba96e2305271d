"""Configuration management using Pydantic Settings."""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine defaults from environment variables (``PINMATCH_`` prefix)."""

    model_config = SettingsConfigDict(
        env_prefix="PINMATCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # Fingerprint similarity
    fingerprint_dimension: Optional[int] = Field(
        default=None,
        gt=0,
        description="Expected fingerprint length for this deployment (unchecked if unset)",
    )
    similarity_threshold: float = Field(
        default=0.8,
        ge=0.0,
        le=1.0,
        description="Minimum cosine similarity for related-photo recommendations",
    )
    similarity_limit: int = Field(
        default=10,
        ge=0,
        description="Maximum number of similar items returned per query",
    )
    duplicate_threshold: float = Field(
        default=0.95,
        ge=0.0,
        le=1.0,
        description="Minimum cosine similarity for two photos to count as duplicates",
    )

    # Text search
    fuzzy_threshold: float = Field(
        default=0.6,
        ge=0.0,
        le=1.0,
        description="Minimum normalized edit similarity for a fuzzy text match",
    )
    recency_decay_days: float = Field(
        default=30.0,
        gt=0.0,
        description="Days over which the search recency bonus decays to zero",
    )

    # Stacking
    stack_time_window_seconds: float = Field(
        default=600.0,
        ge=0.0,
        description="Maximum gap between consecutive photos in one time stack",
    )
    stack_max_size: Optional[int] = Field(
        default=None,
        gt=0,
        description="Maximum photos per time stack (unbounded if unset)",
    )
    similarity_stack_threshold: float = Field(
        default=0.95,
        ge=0.0,
        le=1.0,
        description="Similarity a photo must exceed to join its seed's stack",
    )
    similarity_stack_window: int = Field(
        default=5,
        ge=0,
        description="How many following photos are compared against a stack seed",
    )

    # Embedding backfill
    backfill_chunk_size: int = Field(
        default=10,
        gt=0,
        description="Items processed between backfill checkpoints",
    )
    backfill_max_attempts: int = Field(
        default=3,
        gt=0,
        description="Attempts per item before a fingerprint computation is given up",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Log level for structlog output",
    )
    json_logs: bool = Field(
        default=False,
        description="Render logs as JSON instead of console key-value pairs",
    )
