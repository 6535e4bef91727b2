"""
Configuration validation utilities.

This module turns the raw `[charter]` table into a validated ChartConfig.
Every problem is reported as a ConfigError naming the offending key.
"""

import logging
from typing import Any, Dict

from ..models.config import ChartConfig, ClusterConfig
from ..validation import (
    ConfigError,
    ValidationError,
    validate_bool,
    validate_enum_choice,
    validate_group_names,
    validate_positive_integer,
    validate_string,
)

logger = logging.getLogger(__name__)

REPORT_LAYOUTS = ["split", "combined"]
SNAPSHOT_FORMATS = ["json", "parquet"]

_REQUIRED_KEYS = (
    "interval_seconds",
    "groups",
    "html_output_path",
    "snapshot_output_path",
)


def _subtable(charter_data: Dict[str, Any], name: str) -> Dict[str, Any]:
    """Return the optional `[charter.<name>]` table, empty when absent."""
    table = charter_data.get(name, {})
    if not isinstance(table, dict):
        raise ConfigError(
            f"charter.{name} must be a table ([charter.{name}]), got {table!r}",
            field_name=f"charter.{name}",
            value=table,
        )
    return table


def validate_cluster_config(cluster_data: Dict[str, Any]) -> ClusterConfig:
    """
    Validate the `[charter.cluster]` table.

    A timeout of 0 (the default) disables the timeout.
    """
    timeout = validate_positive_integer(
        cluster_data.get("request_timeout_seconds", 0),
        min_value=0,
        max_value=3600,
        field_name="charter.cluster.request_timeout_seconds",
    )
    return ClusterConfig(
        kubeconfig=validate_string(
            cluster_data.get("kubeconfig", ""), field_name="charter.cluster.kubeconfig"
        ),
        context=validate_string(
            cluster_data.get("context", ""), field_name="charter.cluster.context"
        ),
        in_cluster=validate_bool(
            cluster_data.get("in_cluster", False), field_name="charter.cluster.in_cluster"
        ),
        group_label=validate_string(
            cluster_data.get("group_label", "app.kubernetes.io/name"),
            field_name="charter.cluster.group_label",
            allow_empty=False,
        ),
        request_timeout_seconds=timeout or None,
    )


def validate_chart_config(charter_data: Dict[str, Any]) -> ChartConfig:
    """
    Validate and create a ChartConfig from raw configuration data.

    Args:
        charter_data: Raw `[charter]` table from TOML

    Returns:
        Validated ChartConfig instance

    Raises:
        ConfigError: If validation fails
    """
    missing = [key for key in _REQUIRED_KEYS if key not in charter_data]
    if missing:
        raise ConfigError(
            f"Missing required setting(s) in [charter]: {', '.join(missing)}",
            field_name=missing[0],
        )

    report_settings = _subtable(charter_data, "report")
    snapshot_settings = _subtable(charter_data, "snapshot")
    cluster_settings = _subtable(charter_data, "cluster")

    try:
        namespace = validate_string(
            charter_data.get("namespace", ""), field_name="charter.namespace"
        ).strip()

        interval_seconds = validate_positive_integer(
            charter_data["interval_seconds"],
            min_value=1,
            max_value=86400,
            field_name="charter.interval_seconds",
        )

        groups = validate_group_names(charter_data["groups"], field_name="charter.groups")

        max_ticks = validate_positive_integer(
            charter_data.get("max_ticks", -1),
            min_value=None,
            field_name="charter.max_ticks",
        )

        html_output_path = validate_string(
            charter_data["html_output_path"],
            field_name="charter.html_output_path",
            allow_empty=False,
        )
        snapshot_output_path = validate_string(
            charter_data["snapshot_output_path"],
            field_name="charter.snapshot_output_path",
            allow_empty=False,
        )
        if html_output_path == snapshot_output_path:
            raise ValidationError(
                "charter.html_output_path and charter.snapshot_output_path must differ",
                field_name="charter.snapshot_output_path",
                value=snapshot_output_path,
            )

        report_layout = validate_enum_choice(
            report_settings.get("layout", "split"),
            choices=REPORT_LAYOUTS,
            field_name="charter.report.layout",
        )
        snapshot_format = validate_enum_choice(
            snapshot_settings.get("format", "json"),
            choices=SNAPSHOT_FORMATS,
            field_name="charter.snapshot.format",
            case_sensitive=False,
        )

        cluster = validate_cluster_config(cluster_settings)

    except ConfigError:
        raise
    except ValidationError as e:
        raise ConfigError(str(e), field_name=e.field_name, value=e.value) from e

    if max_ticks == 0:
        logger.warning("charter.max_ticks is 0: the run will stop before the first tick")

    return ChartConfig(
        namespace=namespace,
        interval_seconds=interval_seconds,
        groups=groups,
        max_ticks=max_ticks,
        html_output_path=html_output_path,
        snapshot_output_path=snapshot_output_path,
        report_layout=report_layout,
        snapshot_format=snapshot_format,
        cluster=cluster,
    )
