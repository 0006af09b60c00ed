from unittest.mock import MagicMock, patch

import pytest

from kube_pod_mcp.__main__ import main
from kube_pod_mcp.clients.kubernetes import K8sClientError
from kube_pod_mcp.observability import TransportMetricsMiddleware


@pytest.fixture(autouse=True)
def no_logging_setup():
    with patch("kube_pod_mcp.__main__.configure_logging"):
        yield


def test_credential_failure_exits_non_zero():
    with patch(
        "kube_pod_mcp.__main__.K8sClient",
        side_effect=K8sClientError("Failed to load Kubernetes config: no config"),
    ), patch("kube_pod_mcp.__main__.uvicorn.run") as run:
        with pytest.raises(SystemExit) as exc_info:
            main([])

    assert exc_info.value.code == 1
    run.assert_not_called()


def test_serves_instrumented_app():
    with patch("kube_pod_mcp.__main__.K8sClient", return_value=MagicMock()) as k8s_cls, patch(
        "kube_pod_mcp.__main__.uvicorn.run"
    ) as run:
        main(["--host", "127.0.0.1", "--port", "9001", "--kubeconfig", "/tmp/kc"])

    settings = k8s_cls.call_args.args[0]
    assert settings.kubeconfig_path == "/tmp/kc"

    app = run.call_args.args[0]
    assert isinstance(app, TransportMetricsMiddleware)
    assert run.call_args.kwargs["host"] == "127.0.0.1"
    assert run.call_args.kwargs["port"] == 9001
    assert run.call_args.kwargs["log_config"]["version"] == 1
