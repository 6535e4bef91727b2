"""
Validation and error handling for the kubecharter package.

This module provides the error taxonomy shared by every component together
with the small set of value validators used by the configuration layer.
"""

from .exceptions import (
    ArtifactWriteError,
    ClusterConnectionError,
    ConfigError,
    EmptyHistoryError,
    ErrorSeverity,
    KubeCharterError,
    PreconditionError,
    SamplingError,
    ValidationError,
    handle_cli_error,
    handle_config_error,
    handle_error,
    handle_file_error,
)
from .validators import (
    validate_bool,
    validate_enum_choice,
    validate_group_names,
    validate_positive_integer,
    validate_string,
)

__all__ = [
    # Errors
    "ArtifactWriteError",
    "ClusterConnectionError",
    "ConfigError",
    "EmptyHistoryError",
    "ErrorSeverity",
    "KubeCharterError",
    "PreconditionError",
    "SamplingError",
    "ValidationError",
    # Handlers
    "handle_cli_error",
    "handle_config_error",
    "handle_error",
    "handle_file_error",
    # Validators
    "validate_bool",
    "validate_enum_choice",
    "validate_group_names",
    "validate_positive_integer",
    "validate_string",
]
