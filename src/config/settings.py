# src/config/settings.py - v2
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for engine defaults and logging setup.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from graphclust.core.models import HierarchicalOptions, LabelPropagationOptions
from graphclust.logging.handlers import parse_size


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Label propagation ===
    lp_max_iterations: int = 100
    lp_random_seed: int = 42
    lp_mode: Literal["sync", "async", "semi"] = "sync"

    # === Hierarchical clustering ===
    hierarchical_linkage: Literal["single", "complete", "average", "ward"] = "single"
    hierarchical_max_nodes: int = 2000

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "text"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 30

    # --- Validators ---

    @field_validator("lp_max_iterations")
    @classmethod
    def validate_max_iterations(cls, v: int) -> int:  # noqa: N805
        if not 1 <= v <= 500:
            raise ValueError("lp_max_iterations must be between 1 and 500")
        return v

    @field_validator("hierarchical_max_nodes")
    @classmethod
    def validate_max_nodes(cls, v: int) -> int:  # noqa: N805
        if v < 1:
            raise ValueError("hierarchical_max_nodes must be >= 1")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        if self.log_file is not None:
            try:
                parse_size(self.log_rotation)
            except ValueError:
                errors.append(
                    f"LOG_ROTATION {self.log_rotation!r} is not a size like '10MB'"
                )
            if self.log_retention < 0:
                errors.append("LOG_RETENTION must be >= 0")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self

    # --- Helpers ---

    def label_propagation_options(self) -> LabelPropagationOptions:
        return LabelPropagationOptions(
            max_iterations=self.lp_max_iterations,
            random_seed=self.lp_random_seed,
        )

    def hierarchical_options(self) -> HierarchicalOptions:
        return HierarchicalOptions(linkage=self.hierarchical_linkage)


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
