"""
Shared pytest fixtures for kube-pod-mcp tests.

This module provides:
- make_pod: builds kubernetes V1Pod objects with noisy metadata attached
- FakeK8sClient: in-memory stand-in for K8sClient that records its calls
"""

from typing import Any, Dict, List, Optional

import pytest
from kubernetes import client

from kube_pod_mcp.clients.kubernetes import K8sNotFoundError
from kube_pod_mcp.config import Settings, get_settings

LAST_APPLIED = "kubectl.kubernetes.io/last-applied-configuration"
PSP = "kubernetes.io/psp"


def make_pod(
    name: str,
    namespace: str = "default",
    labels: Optional[Dict[str, str]] = None,
    annotations: Optional[Dict[str, str]] = None,
) -> client.V1Pod:
    """Build a pod the way the API server returns it, managed fields included."""
    if annotations is None:
        annotations = {
            LAST_APPLIED: '{"apiVersion":"v1","kind":"Pod"}',
            PSP: "eks.privileged",
            "team": "payments",
        }
    return client.V1Pod(
        api_version="v1",
        kind="Pod",
        metadata=client.V1ObjectMeta(
            name=name,
            namespace=namespace,
            labels=labels or {"app": "nginx"},
            annotations=annotations,
            managed_fields=[
                client.V1ManagedFieldsEntry(
                    manager="kubectl-client-side-apply",
                    operation="Update",
                    api_version="v1",
                )
            ],
        ),
        spec=client.V1PodSpec(
            containers=[client.V1Container(name="nginx", image="nginx:1.27")],
            node_name="node-a",
        ),
        status=client.V1PodStatus(phase="Running", pod_ip="10.0.0.12"),
    )


class FakeK8sClient:
    """In-memory K8sClient replacement with call recording."""

    def __init__(self, pods: Optional[List[client.V1Pod]] = None, error: Optional[Exception] = None):
        self.pods = pods or []
        self.error = error
        self.calls: List[tuple] = []
        self._api_client = client.ApiClient()

    def get_pod(self, namespace: str, name: str) -> client.V1Pod:
        self.calls.append(("get_pod", namespace, name))
        if self.error:
            raise self.error
        for pod in self.pods:
            if pod.metadata.name == name and pod.metadata.namespace == namespace:
                return pod
        raise K8sNotFoundError(f"Pod '{name}' not found in namespace '{namespace}'")

    def list_pods(self, label_selector: str) -> List[client.V1Pod]:
        self.calls.append(("list_pods", label_selector))
        if self.error:
            raise self.error
        wanted = dict(part.split("=", 1) for part in label_selector.split(","))
        return [
            pod
            for pod in self.pods
            if all((pod.metadata.labels or {}).get(k) == v for k, v in wanted.items())
        ]

    def to_dict(self, obj: Any) -> Any:
        return self._api_client.sanitize_for_serialization(obj)


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(kubeconfig_path=str(tmp_path / "kubeconfig"))


@pytest.fixture
def nginx_pods() -> List[client.V1Pod]:
    return [
        make_pod("nginx-0", namespace="web"),
        make_pod("nginx-1", namespace="default"),
        make_pod("nginx-2", namespace="staging"),
        make_pod("redis-0", labels={"app": "redis"}),
    ]


@pytest.fixture
def fake_k8s(nginx_pods) -> FakeK8sClient:
    return FakeK8sClient(pods=nginx_pods)
