"""
Kubernetes API client wrapper.

Provides a read-only interface to pods with support for both in-cluster
(service account) and local (kubeconfig) authentication.
"""

import logging
from functools import cached_property
from typing import Any

from kubernetes import client, config
from kubernetes.client.exceptions import ApiException
from kubernetes.config.config_exception import ConfigException

from kube_pod_mcp.config import Settings, get_settings

logger = logging.getLogger(__name__)


class K8sClientError(Exception):
    """Base exception for Kubernetes client errors."""

    pass


class K8sNotFoundError(K8sClientError):
    """Resource not found in the cluster."""

    pass


class K8sClient:
    """
    Kubernetes API client wrapper.

    Resolves credentials once at construction: in-cluster service account
    credentials are tried first, then the configured kubeconfig file.

    Args:
        settings: Optional settings override. Uses default settings if not provided.

    Example:
        ```python
        client = K8sClient()

        # Get specific pod
        pod = client.get_pod(namespace="default", name="my-pod")

        # List pods across all namespaces
        pods = client.list_pods(label_selector="app=nginx")
        ```
    """

    def __init__(self, settings: Settings | None = None):
        self._settings = settings or get_settings()
        self._api_client = self._load_config()

    def _load_config(self) -> client.ApiClient:
        """Load Kubernetes configuration."""
        try:
            config.load_incluster_config()
            logger.info("Loaded in-cluster Kubernetes configuration")
            return client.ApiClient()
        except ConfigException as e:
            logger.debug("In-cluster configuration unavailable: %s", e)

        kubeconfig = self._settings.resolved_kubeconfig_path()
        try:
            config.load_kube_config(
                config_file=kubeconfig,
                context=self._settings.kubernetes_context,
            )
        except Exception as e:
            raise K8sClientError(f"Failed to load Kubernetes config: {e}") from e
        logger.info("Loaded Kubernetes configuration from %s", kubeconfig)
        return client.ApiClient()

    @cached_property
    def core_v1(self) -> client.CoreV1Api:
        """Core V1 API client."""
        return client.CoreV1Api(self._api_client)

    # =========================================================================
    # Pod Methods
    # =========================================================================

    def get_pod(self, namespace: str, name: str) -> client.V1Pod:
        """
        Get a specific pod.

        Args:
            namespace: Pod namespace.
            name: Pod name.

        Returns:
            V1Pod object.

        Raises:
            K8sNotFoundError: If pod doesn't exist.
            K8sClientError: If the API call fails.
        """
        try:
            return self.core_v1.read_namespaced_pod(name=name, namespace=namespace)
        except ApiException as e:
            if e.status == 404:
                raise K8sNotFoundError(
                    f"Pod '{name}' not found in namespace '{namespace}'"
                ) from e
            raise K8sClientError(f"Failed to get pod: {e.reason}") from e

    def list_pods(self, label_selector: str) -> list[client.V1Pod]:
        """
        List pods across all namespaces.

        Args:
            label_selector: Label selector (e.g., "app=nginx"). Syntax is
                validated by the API server.

        Returns:
            List of V1Pod objects in the order the API server returned them.

        Raises:
            K8sClientError: If the API call fails.
        """
        try:
            result = self.core_v1.list_pod_for_all_namespaces(
                label_selector=label_selector,
            )
            return result.items
        except ApiException as e:
            raise K8sClientError(f"Failed to list pods: {e.reason}") from e

    # =========================================================================
    # Helper Methods
    # =========================================================================

    def to_dict(self, obj: Any) -> Any:
        """Convert an API model into its JSON-ready wire representation."""
        return self._api_client.sanitize_for_serialization(obj)
