"""
Declared resource requests per group, resolved once at startup.
"""

import logging
from typing import Dict, Iterable, Optional

import kubernetes

from ..models.series import BaselineEntry
from ..validation import ClusterConnectionError
from .quantity import parse_cpu_quantity, parse_memory_quantity

logger = logging.getLogger(__name__)


def get_container_requests(container) -> Dict[str, int]:
    data = {}
    if container.resources and container.resources.requests:
        requests = container.resources.requests
        data["cpu_request_m"] = parse_cpu_quantity(requests.get("cpu")) or 0
        data["mem_request_mi"] = parse_memory_quantity(requests.get("memory")) or 0
    return data


class BaselineTable:
    """
    Maps group names to the requests declared by their Deployment template.

    A Deployment belongs to a group when its ``group_label`` label equals the
    group name. Only the first container of the pod template is read.
    """

    def __init__(
        self,
        api_client: kubernetes.client.ApiClient,
        namespace: str = "",
        group_label: str = "app.kubernetes.io/name",
        request_timeout: Optional[int] = None,
    ):
        self.api = kubernetes.client.AppsV1Api(api_client)
        self.namespace = namespace
        self.group_label = group_label
        self.request_timeout = request_timeout

    def _list_deployments(self):
        kwargs = {}
        if self.request_timeout:
            kwargs["_request_timeout"] = self.request_timeout
        if self.namespace:
            return self.api.list_namespaced_deployment(self.namespace, **kwargs)
        return self.api.list_deployment_for_all_namespaces(**kwargs)

    def resolve(self, group_names: Iterable[str]) -> Dict[str, BaselineEntry]:
        """
        Query the Deployment inventory once.

        Groups without a Deployment, or whose template declares no request at
        all, get no entry. Their charts are rendered in absolute units only.

        Raises:
            ClusterConnectionError: If the inventory cannot be listed
        """
        wanted = set(group_names)
        try:
            deployments = self._list_deployments()
        except Exception as e:
            raise ClusterConnectionError(f"Cannot list deployments: {e}") from e

        baselines: Dict[str, BaselineEntry] = {}
        for dpy in deployments.items:
            labels = dpy.metadata.labels or {}
            group = labels.get(self.group_label)
            if group not in wanted:
                continue
            if group in baselines:
                logger.warning(
                    f"Group '{group}' matches more than one deployment, "
                    f"ignoring {dpy.metadata.namespace}/{dpy.metadata.name}"
                )
                continue

            containers = dpy.spec.template.spec.containers or []
            requests = get_container_requests(containers[0]) if containers else {}
            if not any(requests.values()):
                continue
            baselines[group] = BaselineEntry(**requests)
            logger.info(
                f"Baseline for '{group}': CPU {baselines[group].cpu_request_m}m, "
                f"MEM {baselines[group].mem_request_mi}Mi"
            )

        for group in sorted(wanted - baselines.keys()):
            logger.warning(
                f"No resource requests found for group '{group}'; "
                "percentages will be omitted for it"
            )
        return baselines
