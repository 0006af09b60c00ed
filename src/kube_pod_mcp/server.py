"""
MCP server wiring.

Registers the pod query tools on a FastMCP instance and builds the
instrumented SSE application served over HTTP.
"""

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Annotated, Any

import anyio
from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError
from mcp.types import ContentBlock, TextContent, ToolAnnotations
from pydantic import Field
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.types import ASGIApp

from kube_pod_mcp.clients.kubernetes import K8sClient
from kube_pod_mcp.config import Settings, get_settings
from kube_pod_mcp.models.queries import DEFAULT_NAMESPACE
from kube_pod_mcp.models.responses import ToolResponse
from kube_pod_mcp.observability import TransportMetrics, TransportMetricsMiddleware
from kube_pod_mcp.tools.pods import get_pod_details, get_pods_by_label

logger = logging.getLogger(__name__)

READ_ONLY = ToolAnnotations(readOnlyHint=True, idempotentHint=True)

PodHandler = Callable[[Mapping[str, Any] | None, K8sClient], ToolResponse]


def _render(response: ToolResponse) -> str:
    # FastMCP reports a raised ToolError as an isError tool result.
    if response.is_error:
        raise ToolError(response.error)
    return response.result


class PodQueryServer(FastMCP):
    """
    FastMCP server whose pod tools receive the caller's arguments untouched.

    FastMCP validates arguments against the tool signature and drops keys
    it does not know. The pod handlers decode the mapping themselves, so
    calls to a registered handler bypass that step and reach the query
    models with every key the client sent.
    """

    def __init__(self, k8s: K8sClient, settings: Settings):
        super().__init__(
            settings.server_name,
            host=settings.host,
            port=settings.port,
            sse_path=settings.sse_path,
            message_path=settings.message_path,
        )
        self.k8s = k8s
        self._pod_handlers: dict[str, PodHandler] = {}

    def add_pod_handler(self, name: str, handler: PodHandler) -> None:
        self._pod_handlers[name] = handler

    async def run_pod_handler(
        self, handler: PodHandler, arguments: Mapping[str, Any] | None
    ) -> str:
        response = await anyio.to_thread.run_sync(handler, arguments, self.k8s)
        return _render(response)

    async def call_tool(
        self, name: str, arguments: dict[str, Any]
    ) -> Sequence[ContentBlock] | dict[str, Any]:
        handler = self._pod_handlers.get(name)
        if handler is None:
            return await super().call_tool(name, arguments)
        logger.debug("Calling %s with arguments %s", name, sorted(arguments or {}))
        text = await self.run_pod_handler(handler, dict(arguments or {}))
        return [TextContent(type="text", text=text)]


def create_server(k8s: K8sClient, settings: Settings | None = None) -> PodQueryServer:
    """
    Create the MCP server with the pod query tools registered.

    The decorated functions define each tool's catalog entry; calls are
    routed to the handlers with the raw argument mapping.

    Args:
        k8s: Cluster client shared by all tool calls.
        settings: Optional settings override.

    Returns:
        Configured PodQueryServer instance.
    """
    settings = settings or get_settings()
    server = PodQueryServer(k8s, settings)

    @server.tool(
        name="get_pod_details",
        description="Get the details (spec, status) of a pod by name",
        annotations=READ_ONLY,
        structured_output=False,
    )
    async def get_pod_details_tool(
        podName: Annotated[str, Field(description="Pod name")],
        namespace: Annotated[
            str | None, Field(description="Namespace (default: default)")
        ] = DEFAULT_NAMESPACE,
    ) -> str:
        return await server.run_pod_handler(
            get_pod_details, {"podName": podName, "namespace": namespace}
        )

    server.add_pod_handler("get_pod_details", get_pod_details)

    @server.tool(
        name="get_pods_by_label",
        description="Get the pods in all namespaces that match a label selector",
        annotations=READ_ONLY,
        structured_output=False,
    )
    async def get_pods_by_label_tool(
        labelSelector: Annotated[
            str,
            Field(
                description=(
                    "Label selector (e.g. app=nginx or "
                    "app.kubernetes.io/instance=nginx)"
                )
            ),
        ],
    ) -> str:
        return await server.run_pod_handler(
            get_pods_by_label, {"labelSelector": labelSelector}
        )

    server.add_pod_handler("get_pods_by_label", get_pods_by_label)

    @server.custom_route("/health", methods=["GET"])
    async def health(request: Request) -> JSONResponse:
        return JSONResponse({"status": "ok"})

    return server


def create_app(
    server: FastMCP,
    metrics: TransportMetrics,
    settings: Settings | None = None,
) -> ASGIApp:
    """
    Build the HTTP application: the SSE transport wrapped with metrics.

    Args:
        server: MCP server from create_server().
        metrics: Metrics shared by all connections.
        settings: Optional settings override.

    Returns:
        ASGI application ready for uvicorn.
    """
    settings = settings or get_settings()
    return TransportMetricsMiddleware(
        server.sse_app(),
        metrics,
        sse_path=settings.sse_path,
        message_path=settings.message_path,
    )
