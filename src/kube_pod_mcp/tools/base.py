"""
Base utilities for tool implementations.

Provides decorators and helpers for consistent tool behavior.
"""

import json
import logging
from datetime import datetime
from functools import wraps
from typing import Any, Callable, TypeVar

from pydantic import ValidationError

from kube_pod_mcp.clients.kubernetes import K8sClientError, K8sNotFoundError
from kube_pod_mcp.models.responses import ToolResponse, add_execution_metadata

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., ToolResponse])


class SerializationError(Exception):
    """A tool result could not be encoded as JSON."""

    pass


def tool_handler(func: F) -> F:
    """
    Decorator for tool functions that provides:
    - Automatic exception handling
    - Execution timing
    - Consistent error responses

    Args:
        func: Tool function to wrap.

    Returns:
        Wrapped function with error handling.
    """

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> ToolResponse:
        start_time = datetime.now()

        try:
            result = func(*args, **kwargs)

            # Add execution time to metadata if not already present
            if "execution_time_ms" not in result.metadata:
                result.metadata = add_execution_metadata(
                    result.metadata,
                    start_time,
                )
            logger.debug(
                "%s succeeded in %sms",
                func.__name__,
                result.metadata["execution_time_ms"],
            )
            return result

        except ValidationError as e:
            response = ToolResponse.error(
                error_message=format_validation_error(e),
                error_type="ValidationError",
                metadata=add_execution_metadata({}, start_time),
            )
        except K8sNotFoundError as e:
            response = ToolResponse.error(
                error_message=str(e),
                error_type="NotFoundError",
                metadata=add_execution_metadata({}, start_time),
            )
        except K8sClientError as e:
            response = ToolResponse.error(
                error_message=str(e),
                error_type="KubernetesError",
                metadata=add_execution_metadata({}, start_time),
            )
        except SerializationError as e:
            response = ToolResponse.error(
                error_message=str(e),
                error_type="SerializationError",
                metadata=add_execution_metadata({}, start_time),
            )
        except Exception as e:
            logger.exception("Unexpected error in %s", func.__name__)
            response = ToolResponse.error(
                error_message=f"Unexpected error: {e}",
                error_type=type(e).__name__,
                metadata=add_execution_metadata({}, start_time),
            )

        logger.warning("%s failed: %s", func.__name__, response.error)
        return response

    return wrapper  # type: ignore


def format_validation_error(error: ValidationError) -> str:
    """
    Turn a pydantic validation error into a short message for the caller.

    Missing and empty required fields read as "<field> is required".
    """
    messages = []
    for detail in error.errors():
        field = ".".join(str(part) for part in detail["loc"]) or "arguments"
        if detail["type"] in ("missing", "string_too_short"):
            messages.append(f"{field} is required")
        elif detail["type"] == "extra_forbidden":
            messages.append(f"Unknown argument: {field}")
        else:
            messages.append(f"{field}: {detail['msg']}")
    return "; ".join(messages)


def to_json(document: Any, what: str) -> str:
    """
    Encode a result document as indented JSON.

    Raises:
        SerializationError: If the document is not JSON-encodable.
    """
    try:
        return json.dumps(document, indent=2)
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Failed to serialize {what}") from e
