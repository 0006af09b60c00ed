"""Tools package - Pod query tool implementations."""

from kube_pod_mcp.tools.pods import get_pod_details, get_pods_by_label
from kube_pod_mcp.tools.sanitize import sanitize_pod, sanitize_pods

__all__ = [
    # Query tools
    "get_pod_details",
    "get_pods_by_label",
    # Redaction
    "sanitize_pod",
    "sanitize_pods",
]
