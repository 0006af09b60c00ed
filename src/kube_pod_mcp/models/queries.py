"""
Typed request models for the pod query tools.

Tool arguments arrive from the transport as untyped mappings; each tool
decodes them into one of these models before touching the cluster.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_NAMESPACE = "default"


class PodDetailsQuery(BaseModel):
    """Arguments of the get_pod_details tool."""

    model_config = ConfigDict(
        extra="forbid",
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    pod_name: str = Field(alias="podName", min_length=1, description="Pod name")
    namespace: str = Field(
        default=DEFAULT_NAMESPACE, description="Pod namespace (default: default)"
    )

    @field_validator("namespace", mode="before")
    @classmethod
    def _default_namespace(cls, value: Any) -> Any:
        # An empty namespace means the default one, not an invalid one.
        if value is None:
            return DEFAULT_NAMESPACE
        if isinstance(value, str) and not value.strip():
            return DEFAULT_NAMESPACE
        return value


class PodLabelQuery(BaseModel):
    """Arguments of the get_pods_by_label tool."""

    model_config = ConfigDict(
        extra="forbid",
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    label_selector: str = Field(
        alias="labelSelector",
        min_length=1,
        description="Label selector, e.g. app=nginx",
    )
