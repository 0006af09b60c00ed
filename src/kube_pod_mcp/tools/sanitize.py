"""
Pod document redaction.

Strips noisy and sensitive fields from pod documents before they leave the
process. Operates on the JSON-ready wire representation (camelCase keys).
"""

from collections.abc import MutableMapping
from typing import Any

REDACTED_ANNOTATIONS = (
    "kubectl.kubernetes.io/last-applied-configuration",
    "kubernetes.io/psp",
)


def sanitize_pod(record: Any) -> Any:
    """
    Redact a pod document in place.

    Removes ``metadata.managedFields`` and the annotations listed in
    REDACTED_ANNOTATIONS. Missing or null substructures are left alone, so
    this never raises and applying it twice changes nothing.

    Args:
        record: Pod document as returned by ``ApiClient.sanitize_for_serialization``.

    Returns:
        The same record, redacted.
    """
    if not isinstance(record, MutableMapping):
        return record

    metadata = record.get("metadata")
    if not isinstance(metadata, MutableMapping):
        return record

    metadata.pop("managedFields", None)

    annotations = metadata.get("annotations")
    if isinstance(annotations, MutableMapping):
        for key in REDACTED_ANNOTATIONS:
            annotations.pop(key, None)

    return record


def sanitize_pods(records: list[Any]) -> list[Any]:
    """Redact every pod document of a list in place, keeping its order."""
    for record in records:
        sanitize_pod(record)
    return records
