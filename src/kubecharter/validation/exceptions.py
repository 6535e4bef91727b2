"""
Exception hierarchy and error handling helpers.

Every failure kind in kubecharter is fatal: there is no retry or
partial-degradation path. The classes below tell callers (and the CLI) which
kind of fatal error occurred.
"""

import logging
import sys
from enum import Enum
from typing import Any, Optional, Union

logger = logging.getLogger(__name__)


class ErrorSeverity(Enum):
    """Severity levels for error handling."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class KubeCharterError(Exception):
    """Base class for all errors raised by kubecharter."""

    default_severity = ErrorSeverity.CRITICAL

    def __init__(self, message: str, severity: Optional[ErrorSeverity] = None):
        super().__init__(message)
        self.severity = severity or self.default_severity


class ValidationError(KubeCharterError):
    """
    Exception raised when validation of a single value fails.

    Carries the offending field name and value so that configuration errors
    can point at the exact setting.
    """

    default_severity = ErrorSeverity.ERROR

    def __init__(self, message: str, field_name: Optional[str] = None,
                 value: Any = None, severity: Optional[ErrorSeverity] = None):
        super().__init__(message, severity=severity)
        self.field_name = field_name
        self.value = value


class ConfigError(ValidationError):
    """Malformed or missing configuration. Fatal at startup."""

    default_severity = ErrorSeverity.CRITICAL


class ClusterConnectionError(KubeCharterError):
    """Cluster access could not be established, or the inventory query failed."""


class SamplingError(KubeCharterError):
    """The metrics query failed mid-loop. Never retried."""


class PreconditionError(KubeCharterError):
    """An internal invariant was violated by a caller."""


class EmptyHistoryError(PreconditionError):
    """Statistics were requested for a history with no points."""


class ArtifactWriteError(KubeCharterError):
    """The HTML report or the snapshot could not be written."""


def handle_error(
    error: Exception,
    context: str,
    severity: Union[ErrorSeverity, str] = ErrorSeverity.ERROR,
    reraise: bool = True,
    logger: Optional[logging.Logger] = None
) -> None:
    """
    Handle errors with consistent logging and optional re-raising.

    Args:
        error: The exception that occurred
        context: Context description of where the error occurred
        severity: Severity level for logging
        reraise: Whether to re-raise the exception after logging
        logger: Logger instance to use (defaults to module logger)
    """
    effective_logger = logger or globals()['logger']

    error_msg = f"Error in {context}: {error}"

    if isinstance(severity, str):
        severity_str = severity.lower()
    else:
        severity_str = severity.value

    if severity_str == "debug":
        effective_logger.debug(error_msg, exc_info=True)
    elif severity_str == "info":
        effective_logger.info(error_msg)
    elif severity_str == "warning":
        effective_logger.warning(error_msg)
    elif severity_str == "error":
        effective_logger.error(error_msg)
    elif severity_str == "critical":
        effective_logger.critical(error_msg, exc_info=True)

    if reraise:
        raise error


def handle_config_error(error: Exception, context: str, **kwargs) -> None:
    """Handle configuration-related errors."""
    handle_error(error, f"config {context}", **kwargs)


def handle_file_error(error: Exception, context: str, **kwargs) -> None:
    """Handle file-related errors."""
    handle_error(error, f"file {context}", **kwargs)


def handle_cli_error(error: Exception, context: str, **kwargs) -> None:
    """Log an error at the CLI boundary and terminate the process."""
    exit_code = kwargs.pop('exit_code', 1)
    severity = kwargs.pop('severity', getattr(error, 'severity', ErrorSeverity.ERROR))
    handle_error(error, f"CLI {context}", severity=severity, reraise=False, **kwargs)
    sys.exit(exit_code)
