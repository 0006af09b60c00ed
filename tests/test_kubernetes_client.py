import os
from unittest.mock import MagicMock, patch

import pytest
from kubernetes.client.exceptions import ApiException
from kubernetes.config.config_exception import ConfigException

from kube_pod_mcp.clients.kubernetes import K8sClient, K8sClientError, K8sNotFoundError
from kube_pod_mcp.config import Settings

from conftest import make_pod


@pytest.fixture
def kube_config():
    with patch("kube_pod_mcp.clients.kubernetes.config") as mock_config:
        yield mock_config


@pytest.fixture
def k8s(kube_config, settings):
    kube_config.load_incluster_config.side_effect = ConfigException("not in cluster")
    k8s = K8sClient(settings)
    k8s.core_v1 = MagicMock()
    return k8s


# =============================================================================
# Credential resolution
# =============================================================================


def test_prefers_in_cluster_credentials(kube_config, settings):
    K8sClient(settings)

    kube_config.load_incluster_config.assert_called_once_with()
    kube_config.load_kube_config.assert_not_called()


def test_falls_back_to_kubeconfig(kube_config, settings):
    kube_config.load_incluster_config.side_effect = ConfigException("not in cluster")

    K8sClient(settings)

    kube_config.load_kube_config.assert_called_once_with(
        config_file=settings.kubeconfig_path,
        context=None,
    )


def test_falls_back_to_home_kubeconfig(kube_config, monkeypatch):
    monkeypatch.delenv("KUBECONFIG", raising=False)
    monkeypatch.delenv("KUBE_POD_MCP_KUBECONFIG_PATH", raising=False)
    kube_config.load_incluster_config.side_effect = ConfigException("not in cluster")

    K8sClient(Settings(_env_file=None, kubernetes_context="kind-dev"))

    kube_config.load_kube_config.assert_called_once_with(
        config_file=os.path.expanduser("~/.kube/config"),
        context="kind-dev",
    )


def test_no_credentials_raises(kube_config, settings):
    kube_config.load_incluster_config.side_effect = ConfigException("not in cluster")
    kube_config.load_kube_config.side_effect = ConfigException("Invalid kube-config file")

    with pytest.raises(K8sClientError, match="Failed to load Kubernetes config"):
        K8sClient(settings)


# =============================================================================
# Pod Methods
# =============================================================================


def test_get_pod(k8s):
    pod = make_pod("web-0", namespace="shop")
    k8s.core_v1.read_namespaced_pod.return_value = pod

    assert k8s.get_pod("shop", "web-0") is pod
    k8s.core_v1.read_namespaced_pod.assert_called_once_with(name="web-0", namespace="shop")


def test_get_pod_not_found(k8s):
    k8s.core_v1.read_namespaced_pod.side_effect = ApiException(status=404, reason="Not Found")

    with pytest.raises(K8sNotFoundError, match="Pod 'web-0' not found in namespace 'shop'"):
        k8s.get_pod("shop", "web-0")


def test_get_pod_forbidden(k8s):
    k8s.core_v1.read_namespaced_pod.side_effect = ApiException(status=403, reason="Forbidden")

    with pytest.raises(K8sClientError, match="Failed to get pod: Forbidden") as exc_info:
        k8s.get_pod("shop", "web-0")
    assert not isinstance(exc_info.value, K8sNotFoundError)


def test_list_pods_across_namespaces(k8s):
    pods = [make_pod("web-0"), make_pod("web-1", namespace="shop")]
    k8s.core_v1.list_pod_for_all_namespaces.return_value = MagicMock(items=pods)

    assert k8s.list_pods(label_selector="app=nginx") == pods
    k8s.core_v1.list_pod_for_all_namespaces.assert_called_once_with(label_selector="app=nginx")


def test_list_pods_error(k8s):
    k8s.core_v1.list_pod_for_all_namespaces.side_effect = ApiException(
        status=400, reason="Bad Request"
    )

    with pytest.raises(K8sClientError, match="Failed to list pods: Bad Request"):
        k8s.list_pods(label_selector="app in (nginx")


def test_to_dict_uses_wire_field_names(k8s):
    document = k8s.to_dict(make_pod("web-0"))

    assert document["apiVersion"] == "v1"
    assert document["metadata"]["managedFields"][0]["manager"] == "kubectl-client-side-apply"
    assert document["status"]["podIP"] == "10.0.0.12"
