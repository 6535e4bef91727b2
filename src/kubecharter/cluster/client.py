"""
Cluster connection setup.
"""

import logging

import kubernetes

from ..models.config import ClusterConfig
from ..validation import ClusterConnectionError

logger = logging.getLogger(__name__)


def connect(cluster_config: ClusterConfig) -> kubernetes.client.ApiClient:
    """
    Build an API client from in-cluster credentials or a kubeconfig file.

    Raises:
        ClusterConnectionError: If no usable credentials are found
    """
    try:
        if cluster_config.in_cluster:
            logger.info("Using in-cluster service account credentials")
            kubernetes.config.load_incluster_config()
            return kubernetes.client.ApiClient()

        config_file = cluster_config.kubeconfig or None
        context = cluster_config.context or None
        logger.info(
            f"Using kubeconfig {config_file or '(default location)'}"
            f", context {context or '(current)'}"
        )
        return kubernetes.config.new_client_from_config(config_file=config_file, context=context)
    except (kubernetes.config.ConfigException, OSError) as e:
        raise ClusterConnectionError(f"Cannot configure cluster access: {e}") from e
