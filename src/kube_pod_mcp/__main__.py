"""
Kubernetes pod MCP server - entry point.

Composition root: loads settings, resolves cluster credentials, builds the
metrics registry and the MCP server, then serves them with uvicorn.
"""

import argparse
import logging
import sys

import uvicorn

from kube_pod_mcp.clients.kubernetes import K8sClient, K8sClientError
from kube_pod_mcp.config import Settings, get_settings
from kube_pod_mcp.logging_config import configure_logging, get_logging_config
from kube_pod_mcp.observability import METRICS_PATH, TransportMetrics
from kube_pod_mcp.server import create_app, create_server

logger = logging.getLogger("kube_pod_mcp")


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        "kube-pod-mcp",
        description="Serve read-only Kubernetes pod queries as MCP tools over SSE",
    )
    parser.add_argument("--host", help="Address to bind (default: 0.0.0.0)")
    parser.add_argument("--port", type=int, help="Port to bind (default: 8080)")
    parser.add_argument("--log-level", help="Log level (default: INFO)")
    parser.add_argument(
        "--kubeconfig",
        help="Kubeconfig used when in-cluster credentials are unavailable",
    )
    return parser.parse_args(argv)


def build_settings(args: argparse.Namespace) -> Settings:
    """Apply command line overrides on top of the environment settings."""
    overrides = {
        "host": args.host,
        "port": args.port,
        "log_level": args.log_level,
        "kubeconfig_path": args.kubeconfig,
    }
    return get_settings().model_copy(
        update={k: v for k, v in overrides.items() if v is not None}
    )


def main(argv: list[str] | None = None) -> None:
    settings = build_settings(_parse_args(argv))
    configure_logging(settings.log_level)

    try:
        k8s = K8sClient(settings)
    except K8sClientError as e:
        logger.critical("Cannot start: %s", e)
        sys.exit(1)

    metrics = TransportMetrics()
    server = create_server(k8s, settings)
    app = create_app(server, metrics, settings)

    addr = f"{settings.host}:{settings.port}"
    logger.info("Starting %s on %s", settings.server_name, addr)
    logger.info("SSE endpoint: %s%s", addr, settings.sse_path)
    logger.info("Message endpoint: %s%s", addr, settings.message_path)
    logger.info("Metrics endpoint: %s%s", addr, METRICS_PATH)
    logger.info("Root endpoint (MCP): %s/", addr)

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_config=get_logging_config(settings.log_level),
    )


if __name__ == "__main__":
    main()
