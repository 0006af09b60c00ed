"""Models package - Pydantic models for requests and responses."""

from kube_pod_mcp.models.queries import DEFAULT_NAMESPACE, PodDetailsQuery, PodLabelQuery
from kube_pod_mcp.models.responses import ToolResponse, ToolStatus

__all__ = [
    # Request models
    "PodDetailsQuery",
    "PodLabelQuery",
    "DEFAULT_NAMESPACE",
    # Response models
    "ToolResponse",
    "ToolStatus",
]
