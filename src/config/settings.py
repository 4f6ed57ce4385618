# src/config/settings.py — v1
"""Typed configuration loaded from the environment via pydantic-settings.

Single source of truth for all deployment-specific settings. The serverless
runtime supplies these as environment variables; a local ``.env`` file is
honoured for CLI runs.

The search and relocation options also accept the camelCase names used by
existing function configurations (``elasticsearchEndpoint`` or
``searchEndpoint``, ``indexName``, ``deleteOriginals``).
"""

from __future__ import annotations

from typing import Literal

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when configuration is missing or internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from environment / .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Search index ===
    elasticsearch_endpoint: str = Field(
        default="",
        validation_alias=AliasChoices(
            "elasticsearch_endpoint", "elasticsearchEndpoint", "searchEndpoint",
        ),
    )
    region: str = "us-east-1"
    index_name: str = Field(
        default="", validation_alias=AliasChoices("index_name", "indexName"),
    )
    search_max_results: int = 1000
    search_service: Literal["es", "aoss"] = "es"
    search_timeout_s: float = 10.0
    search_scheme: Literal["https", "http"] = "https"

    # === Object store ===
    s3_endpoint_url: str = ""

    # === Relocation ===
    # Parsed as a real boolean: "false"/"0"/"no"/"off" disable cleanup.
    delete_originals: bool = Field(
        default=False,
        validation_alias=AliasChoices("delete_originals", "deleteOriginals"),
    )

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "json"

    # --- Validators ---

    @field_validator("search_max_results")
    @classmethod
    def validate_max_results(cls, v: int) -> int:  # noqa: N805
        """The search index caps a single page at 10000 hits."""
        if not 1 <= v <= 10_000:
            raise ValueError("search_max_results must be between 1 and 10000")
        return v

    @field_validator("search_timeout_s")
    @classmethod
    def validate_timeout(cls, v: float) -> float:  # noqa: N805
        if v <= 0:
            raise ValueError("search_timeout_s must be > 0")
        return v

    # --- Helpers ---

    @property
    def search_base_url(self) -> str:
        """Endpoint as a URL, adding the scheme when only a host is configured."""
        endpoint = self.elasticsearch_endpoint.strip().rstrip("/")
        if not endpoint:
            return ""
        if "://" in endpoint:
            return endpoint
        return f"{self.search_scheme}://{endpoint}"

    def require_search(self) -> None:
        """Check the options the processor cannot run without.

        Raises:
            ConfigurationError: If the search endpoint or index is unset.
        """
        errors: list[str] = []
        if not self.elasticsearch_endpoint.strip():
            errors.append("ELASTICSEARCH_ENDPOINT (or elasticsearchEndpoint) must be set")
        if not self.index_name.strip():
            errors.append("INDEX_NAME (or indexName) must be set")
        if errors:
            raise ConfigurationError("; ".join(errors))


def load_settings(**overrides: object) -> Settings:
    """Load settings from the environment with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or local runs).

    Returns:
        Validated Settings instance.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
