"""
Pod Query Tools.

Tools for fetching a single pod by name and listing pods by label selector.
Both return the redacted pod documents as indented JSON text.
"""

import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from kube_pod_mcp.clients.kubernetes import K8sClient
from kube_pod_mcp.models.queries import PodDetailsQuery, PodLabelQuery
from kube_pod_mcp.models.responses import ToolResponse, add_execution_metadata
from kube_pod_mcp.tools.base import to_json, tool_handler
from kube_pod_mcp.tools.sanitize import sanitize_pod, sanitize_pods

logger = logging.getLogger(__name__)


@tool_handler
def get_pod_details(
    arguments: Mapping[str, Any] | None,
    k8s: K8sClient,
) -> ToolResponse:
    """
    Get the full document of a single pod.

    Args:
        arguments: Raw tool arguments. ``podName`` is required; ``namespace``
            defaults to "default".
        k8s: Cluster client used for the lookup.

    Returns:
        ToolResponse whose result is the redacted pod as JSON text.

    Example:
        ```python
        result = get_pod_details({"podName": "web-0", "namespace": "shop"}, k8s)
        ```
    """
    start_time = datetime.now()
    query = PodDetailsQuery.model_validate(arguments)
    logger.debug("Fetching pod %s/%s", query.namespace, query.pod_name)

    pod = k8s.get_pod(namespace=query.namespace, name=query.pod_name)
    document = sanitize_pod(k8s.to_dict(pod))

    return ToolResponse.success(
        result=to_json(document, "pod"),
        metadata=add_execution_metadata(
            {
                "namespace": query.namespace,
                "pod_name": query.pod_name,
            },
            start_time,
        ),
    )


@tool_handler
def get_pods_by_label(
    arguments: Mapping[str, Any] | None,
    k8s: K8sClient,
) -> ToolResponse:
    """
    List pods in all namespaces that match a label selector.

    The list either succeeds as a whole or fails as a whole; items keep the
    order returned by the API server.

    Args:
        arguments: Raw tool arguments. ``labelSelector`` is required.
        k8s: Cluster client used for the lookup.

    Returns:
        ToolResponse whose result is a JSON array of redacted pods.
    """
    start_time = datetime.now()
    query = PodLabelQuery.model_validate(arguments)
    logger.debug("Listing pods matching %r", query.label_selector)

    pods = k8s.list_pods(label_selector=query.label_selector)
    documents = sanitize_pods([k8s.to_dict(pod) for pod in pods])

    return ToolResponse.success(
        result=to_json(documents, "pod list"),
        metadata=add_execution_metadata(
            {
                "label_selector": query.label_selector,
                "count": len(documents),
            },
            start_time,
        ),
    )
