"""Application configuration loader.

Loads settings from data/config/app_config_v1.yaml (or the file named by
ACADEMY_CONFIG_FILE) with built-in defaults when the file is missing.

Usage:
    from academy.config.app_config import load_app_config

    config = load_app_config()
    threshold = config.grading.pass_threshold
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog
import yaml

logger = structlog.get_logger(__name__)

# Config file path (relative to project root)
CONFIG_FILE = Path("data/config/app_config_v1.yaml")
CONFIG_ENV_VAR = "ACADEMY_CONFIG_FILE"


@dataclass
class GradingConfig:
    """Exam result classification."""

    pass_threshold: float = 0.6


@dataclass
class RegistrationConfig:
    """Student registration limits."""

    min_age: int = 1
    max_age: int = 100


@dataclass
class AppConfig:
    """Application-wide configuration."""

    grading: GradingConfig = field(default_factory=GradingConfig)
    registration: RegistrationConfig = field(default_factory=RegistrationConfig)
    seed_file: str = "data/config/seed_v1.yaml"
    log_level: str = "WARNING"


# Module-level cache
_cached_config: AppConfig | None = None


def _get_defaults() -> dict[str, Any]:
    """Get default configuration values."""
    return {
        "grading": {"pass_threshold": 0.6},
        "registration": {"min_age": 1, "max_age": 100},
        "seed_file": "data/config/seed_v1.yaml",
        "log_level": "WARNING",
    }


def _parse_config(data: dict[str, Any]) -> AppConfig:
    """Parse configuration dictionary into AppConfig object."""
    defaults = _get_defaults()

    grading_data = data.get("grading") or {}
    grading = GradingConfig(
        pass_threshold=float(
            grading_data.get("pass_threshold", defaults["grading"]["pass_threshold"])
        ),
    )

    registration_data = data.get("registration") or {}
    registration = RegistrationConfig(
        min_age=int(registration_data.get("min_age", defaults["registration"]["min_age"])),
        max_age=int(registration_data.get("max_age", defaults["registration"]["max_age"])),
    )

    return AppConfig(
        grading=grading,
        registration=registration,
        seed_file=data.get("seed_file", defaults["seed_file"]),
        log_level=str(data.get("log_level", defaults["log_level"])).upper(),
    )


def get_config_path() -> Path:
    """Config file path, honouring ACADEMY_CONFIG_FILE."""
    override = os.environ.get(CONFIG_ENV_VAR)
    return Path(override) if override else CONFIG_FILE


def load_app_config(force_reload: bool = False) -> AppConfig:
    """Load application config, falling back to defaults.

    Args:
        force_reload: If True, ignore cached config and reload from file.

    Returns:
        AppConfig object with all settings.
    """
    global _cached_config

    if _cached_config is not None and not force_reload:
        return _cached_config

    config_path = get_config_path()
    data: dict[str, Any]

    if config_path.exists():
        logger.debug("loading_app_config", source=str(config_path))
        data = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    else:
        logger.info("using_default_config", missing=str(config_path))
        data = _get_defaults()

    _cached_config = _parse_config(data)
    return _cached_config


def clear_config_cache() -> None:
    """Clear the configuration cache.

    Useful for testing or when config is modified at runtime.
    """
    global _cached_config
    _cached_config = None
