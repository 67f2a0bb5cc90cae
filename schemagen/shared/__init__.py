"""Shared utilities for schemagen."""

from .config import (
    GeneratorConfig,
    PoolSettings,
    add_connection_arguments,
    load_config,
    resolve_config,
    split_schemas,
)
from .naming import (
    tab_name,
    to_pascal_case,
    to_snake_case,
)
from .errors import (
    GeneratorError,
    ConfigError,
    CatalogError,
    OutputError,
    FormatError,
)

__all__ = [
    # Configuration
    "GeneratorConfig",
    "PoolSettings",
    "add_connection_arguments",
    "load_config",
    "resolve_config",
    "split_schemas",
    # Naming utilities
    "tab_name",
    "to_pascal_case",
    "to_snake_case",
    # Errors
    "GeneratorError",
    "ConfigError",
    "CatalogError",
    "OutputError",
    "FormatError",
]
