"""Configuration package for the academy console."""

from academy.config.app_config import (
    AppConfig,
    GradingConfig,
    RegistrationConfig,
    clear_config_cache,
    load_app_config,
)
from academy.config.seed import (
    SeedData,
    build_academy,
    default_seed,
    load_seed,
)

__all__ = [
    "AppConfig",
    "GradingConfig",
    "RegistrationConfig",
    "clear_config_cache",
    "load_app_config",
    "SeedData",
    "build_academy",
    "default_seed",
    "load_seed",
]
