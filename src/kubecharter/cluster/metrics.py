"""
Per-tick usage readings from the metrics.k8s.io API.
"""

import logging
from typing import Any, Dict, List, Optional

import kubernetes

from ..models.series import RawReading
from ..validation import SamplingError
from .quantity import parse_cpu_quantity, parse_memory_quantity

logger = logging.getLogger(__name__)

METRICS_GROUP = "metrics.k8s.io"
METRICS_VERSION = "v1beta1"
METRICS_PLURAL = "pods"


class MetricsSource:
    """
    Lists current container usage for every pod in scope.

    The call is blocking and is never retried. Without a request timeout an
    unresponsive API server blocks the caller indefinitely.
    """

    def __init__(
        self,
        api_client: kubernetes.client.ApiClient,
        namespace: str = "",
        request_timeout: Optional[int] = None,
    ):
        self.api = kubernetes.client.CustomObjectsApi(api_client)
        self.namespace = namespace
        self.request_timeout = request_timeout

    def fetch(self) -> List[RawReading]:
        """
        Query the metrics API once.

        Raises:
            SamplingError: On any API or transport failure
        """
        kwargs = {}
        if self.request_timeout:
            kwargs["_request_timeout"] = self.request_timeout

        try:
            if self.namespace:
                response = self.api.list_namespaced_custom_object(
                    METRICS_GROUP, METRICS_VERSION, self.namespace, METRICS_PLURAL, **kwargs
                )
            else:
                response = self.api.list_cluster_custom_object(
                    METRICS_GROUP, METRICS_VERSION, METRICS_PLURAL, **kwargs
                )
        except Exception as e:
            raise SamplingError(f"Pod metrics query failed: {e}") from e

        return parse_pod_metrics(response)


def parse_pod_metrics(response: Dict[str, Any]) -> List[RawReading]:
    """
    Flatten a PodMetricsList into one reading per container.

    Raises:
        SamplingError: If the payload does not have the expected shape
    """
    readings = []
    try:
        for item in response.get("items", []):
            metadata = item["metadata"]
            entity_name = f"{metadata.get('namespace', '')}/{metadata['name']}"
            for container in item.get("containers", []):
                usage = container.get("usage", {})
                readings.append(
                    RawReading(
                        entity_name=entity_name,
                        group=container["name"],
                        cpu_m=parse_cpu_quantity(usage.get("cpu", "0")),
                        mem_mi=parse_memory_quantity(usage.get("memory", "0")),
                    )
                )
    except (KeyError, TypeError, ValueError) as e:
        raise SamplingError(f"Malformed pod metrics payload: {e!r}") from e

    logger.debug(f"Parsed {len(readings)} container readings")
    return readings
