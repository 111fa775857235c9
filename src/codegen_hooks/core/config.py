"""Global configuration for codegen-hooks.

This module provides centralized configuration management with support for
environment variables and sensible defaults.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class HooksConfig(BaseSettings):
    """Hook engine configuration settings.

    Values can be overridden via environment variables with CODEGEN_HOOKS_ prefix.
    Example: CODEGEN_HOOKS_MAX_WORKERS=4 overrides max_workers.
    """

    # Registry
    duplicate_policy: Literal["error", "replace"] = Field(
        default="error",
        description="What to do when two visitors claim the same annotation target",
    )

    # Annotation extraction
    warn_on_key_collision: bool = Field(
        default=True,
        description="Report map-payload keys overwritten by a later annotation",
    )

    # Traversal
    max_workers: int = Field(
        default=1,
        ge=1,
        le=64,
        description="Worker threads for top-level declarations (1 = sequential)",
    )

    # Backends
    default_backend: str = Field(
        default="rust",
        description="Contribution family used when none is requested",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Log level used by the CLI",
    )

    model_config = {
        "env_prefix": "CODEGEN_HOOKS_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


@lru_cache
def get_config() -> HooksConfig:
    """Get cached configuration instance.

    Returns:
        HooksConfig singleton instance.
    """
    return HooksConfig()


def reload_config() -> HooksConfig:
    """Reload configuration (clears cache).

    Returns:
        Fresh HooksConfig instance.
    """
    get_config.cache_clear()
    return get_config()
