"""Configuration module for langid_tables."""

from langid_tables.config.generator_config import (
    GeneratorConfig,
    GeneratorConfigError,
    load_generator_config,
)

__all__ = [
    "GeneratorConfig",
    "GeneratorConfigError",
    "load_generator_config",
]
