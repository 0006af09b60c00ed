"""
Prometheus metrics for the MCP transport.

TransportMetrics holds a dedicated registry built once at startup;
TransportMetricsMiddleware wraps the SSE transport app, counts every
inbound call per endpoint, tracks open event streams, and serves the
registry on /metrics.
"""

import logging

from prometheus_client import CollectorRegistry, Counter, Gauge, make_asgi_app
from starlette.types import ASGIApp, Receive, Scope, Send

logger = logging.getLogger(__name__)

METRICS_PATH = "/metrics"
ROOT_PATH = "/"


class TransportMetrics:
    """
    Connection and request metrics for the transport endpoints.

    Args:
        registry: Registry to register the metrics in. A fresh one is
            created when omitted, so separate instances never collide.
    """

    def __init__(self, registry: CollectorRegistry | None = None):
        self.registry = registry or CollectorRegistry()

        self.active_connections = Gauge(
            "mcp_active_connections",
            "Number of active MCP connections",
            registry=self.registry,
        )
        self.requests_total = Counter(
            "mcp_requests",
            "Total number of MCP requests",
            ["endpoint"],
            registry=self.registry,
        )

    def count_request(self, endpoint: str) -> None:
        self.requests_total.labels(endpoint=endpoint).inc()

    def requests(self, endpoint: str) -> float:
        """Current value of the request counter for an endpoint."""
        value = self.registry.get_sample_value(
            "mcp_requests_total", {"endpoint": endpoint}
        )
        return value or 0.0

    def connections(self) -> float:
        """Current value of the active connection gauge."""
        return self.registry.get_sample_value("mcp_active_connections") or 0.0


class TransportMetricsMiddleware:
    """
    ASGI middleware instrumenting the MCP SSE transport.

    - ``sse_path``: counted as "sse", holds a connection for the stream's life.
    - ``message_path``: counted as "message"; the path without its trailing
      slash is served as ``message_path``.
    - ``GET /``: counted as "root" and served as the SSE stream, for clients
      that connect to the server root.
    - ``/metrics``: Prometheus exposition of the registry.

    Args:
        app: The FastMCP SSE application.
        metrics: Metrics to update.
        sse_path: Path of the SSE endpoint inside ``app``.
        message_path: Path of the message endpoint inside ``app``.
    """

    def __init__(
        self,
        app: ASGIApp,
        metrics: TransportMetrics,
        sse_path: str = "/sse",
        message_path: str = "/message/",
    ):
        self.app = app
        self.metrics = metrics
        self.sse_path = sse_path
        self.message_path = message_path.rstrip("/")
        self.metrics_app = make_asgi_app(registry=metrics.registry)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        path = scope["path"]

        if path == METRICS_PATH:
            await self.metrics_app(scope, receive, send)
        elif path == self.sse_path:
            await self._stream("sse", scope, receive, send)
        elif path == ROOT_PATH and scope["method"] == "GET":
            await self._stream("root", _with_path(scope, self.sse_path), receive, send)
        elif path == self.message_path:
            # Served directly so the mount's redirect is not counted twice.
            self.metrics.count_request("message")
            await self.app(_with_path(scope, self.message_path + "/"), receive, send)
        elif path.startswith(self.message_path + "/"):
            self.metrics.count_request("message")
            await self.app(scope, receive, send)
        else:
            await self.app(scope, receive, send)

    async def _stream(
        self, endpoint: str, scope: Scope, receive: Receive, send: Send
    ) -> None:
        self.metrics.count_request(endpoint)
        with self.metrics.active_connections.track_inprogress():
            logger.debug("SSE connection opened via %s", endpoint)
            try:
                await self.app(scope, receive, send)
            finally:
                logger.debug("SSE connection closed via %s", endpoint)


def _with_path(scope: Scope, path: str) -> Scope:
    scope = dict(scope)
    scope["path"] = path
    scope["raw_path"] = path.encode()
    return scope
