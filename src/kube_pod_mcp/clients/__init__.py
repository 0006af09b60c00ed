"""Clients package - API client wrapper for Kubernetes."""

from kube_pod_mcp.clients.kubernetes import K8sClient, K8sClientError, K8sNotFoundError

__all__ = ["K8sClient", "K8sClientError", "K8sNotFoundError"]
