"""
Standard response models for all tools.

All tools return a ToolResponse with consistent structure; the MCP layer
renders it as either a JSON document or an error result.
"""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class ToolStatus(str, Enum):
    """
    Status of tool execution.

    Attributes:
        SUCCESS: Tool completed successfully with all data retrieved.
        ERROR: Tool failed to complete the requested operation.
    """

    SUCCESS = "success"
    ERROR = "error"


class ToolResponse(BaseModel):
    """
    Standardized response format for the pod query tools.

    A list query either succeeds as a whole or fails as a whole, so there
    is no partial status.

    Attributes:
        status: Execution status (success or error).
        result: The pod document or list of pod documents on success.
        error: Error message if status is ERROR, otherwise None.
        metadata: Execution metadata like timing, counts, and query details.

    Example:
        ```python
        {
            "status": "error",
            "result": null,
            "error": "Pod 'web-0' not found in namespace 'default'",
            "metadata": {
                "error_type": "NotFoundError",
                "execution_time_ms": 12,
                "timestamp": "2025-12-08T00:00:00"
            }
        }
        ```
    """

    status: ToolStatus = Field(description="Execution status: success or error")
    result: Any = Field(
        default=None, description="The actual data returned by the tool"
    )
    error: str | None = Field(
        default=None, description="Error message if status is error"
    )
    metadata: dict[str, Any] = Field(
        default_factory=dict,
        description="Execution metadata (timing, counts, query parameters)",
    )

    @property
    def is_error(self) -> bool:
        return self.status == ToolStatus.ERROR

    @classmethod
    def success(
        cls,
        result: Any,
        metadata: dict[str, Any] | None = None,
    ) -> "ToolResponse":
        """
        Create a successful response.

        Args:
            result: The data to return.
            metadata: Optional execution metadata.

        Returns:
            ToolResponse with SUCCESS status.
        """
        return cls(
            status=ToolStatus.SUCCESS,
            result=result,
            metadata=metadata or {},
        )

    @classmethod
    def error(
        cls,
        error_message: str,
        error_type: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> "ToolResponse":
        """
        Create an error response.

        Args:
            error_message: Human-readable error description.
            error_type: Optional error class name for categorization.
            metadata: Optional execution metadata.

        Returns:
            ToolResponse with ERROR status.
        """
        meta = metadata or {}
        if error_type:
            meta["error_type"] = error_type
        return cls(
            status=ToolStatus.ERROR,
            result=None,
            error=error_message,
            metadata=meta,
        )


def add_execution_metadata(
    metadata: dict[str, Any],
    start_time: datetime,
    **extra: Any,
) -> dict[str, Any]:
    """
    Add standard execution metadata to a response.

    Args:
        metadata: Existing metadata dict to extend.
        start_time: When the tool execution started.
        **extra: Additional metadata key-value pairs.

    Returns:
        Extended metadata dict with timing info.
    """
    end_time = datetime.now()
    execution_time_ms = int((end_time - start_time).total_seconds() * 1000)

    return {
        **metadata,
        "execution_time_ms": execution_time_ms,
        "timestamp": end_time.isoformat(),
        **extra,
    }
