"""
Kube Pod MCP - read-only Kubernetes pod queries over MCP

Exposes pod lookup by name and pod listing by label selector as MCP tools
served over SSE, with Prometheus connection and request metrics.
"""

from kube_pod_mcp.config import Settings
from kube_pod_mcp.models.responses import ToolResponse, ToolStatus

__version__ = "0.1.0"
__all__ = ["ToolResponse", "ToolStatus", "Settings"]
