"""Centralized configuration management for typeprops.

Provides unified access to all configuration via the `get_environment()` function.

Example:
    >>> from typeprops.config import EnvVar, get_environment
    >>>
    >>> prop = get_environment(EnvVar.TYPEPROPS_VALIDATOR_PROPERTY)  # "propTypes"
    >>> depth = get_environment(EnvVar.TYPEPROPS_MAX_DEPTH, override=4)

Environment Variable Categories:
    transform: Property names, validator namespace and nesting limit
    build: Production build switch
    logging: Command line log level
"""

from .lib import (
    EnvConfig,
    EnvVar,
    get_environment,
    get_environment_info,
    is_production,
    list_environment_variables,
)

__all__ = [
    # Core types
    "EnvConfig",
    "EnvVar",
    # Main interface
    "get_environment",
    "get_environment_info",
    "is_production",
    # Introspection
    "list_environment_variables",
]
