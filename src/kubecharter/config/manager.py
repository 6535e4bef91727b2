"""
Configuration management and singleton pattern.

This module provides the main configuration loading interface, caching the
validated configuration so that it is read from disk only once per process.
"""

import logging
from pathlib import Path
from typing import Optional

from ..models.config import ChartConfig
from ..validation import ConfigError, ErrorSeverity, handle_config_error
from .loader import load_main_config
from .validators import validate_chart_config

logger = logging.getLogger(__name__)

# --- Global Singleton for Configuration ---

_CONFIG: Optional[ChartConfig] = None

# Default location of config.toml, relative to the repository root.
# The CLI overrides it with --config.
_CONFIG_FILE_PATH = Path(__file__).parent.parent.parent.parent / "conf" / "config.toml"


def set_config_path(config_path: Path) -> None:
    """
    Set a custom configuration file path.

    Clears any cached configuration so the next get_config() call reads the
    new file.
    """
    global _CONFIG_FILE_PATH, _CONFIG
    _CONFIG_FILE_PATH = Path(config_path)
    _CONFIG = None
    logger.info(f"Configuration path set to: {config_path}")


def clear_config_cache() -> None:
    """Clear the cached configuration, forcing a reload on next access."""
    global _CONFIG
    _CONFIG = None
    logger.debug("Configuration cache cleared")


def _load_config(config_path: Path) -> ChartConfig:
    """
    Load and validate the configuration file.

    Raises:
        ConfigError: If the file is missing, malformed, or invalid
    """
    try:
        charter_data = load_main_config(config_path)
        chart_config = validate_chart_config(charter_data)
    except ConfigError as e:
        handle_config_error(
            error=e,
            context="loading configuration",
            severity=ErrorSeverity.ERROR,
            reraise=True,
            logger=logger
        )
        raise

    scope = chart_config.namespace or "all namespaces"
    logger.info(
        f"Successfully loaded configuration: {len(chart_config.groups)} groups, "
        f"interval {chart_config.interval_seconds}s, scope: {scope}"
    )
    return chart_config


def get_config() -> ChartConfig:
    """
    Get the application configuration, loading it on first access.

    Raises:
        ConfigError: If the configuration cannot be loaded
    """
    global _CONFIG
    if _CONFIG is None:
        _CONFIG = _load_config(_CONFIG_FILE_PATH)
    return _CONFIG


def is_config_loaded() -> bool:
    return _CONFIG is not None


def get_config_info() -> dict:
    """Get information about the current configuration state."""
    return {
        "config_loaded": is_config_loaded(),
        "config_path": str(_CONFIG_FILE_PATH),
        "groups_count": len(_CONFIG.groups) if _CONFIG else 0,
    }
