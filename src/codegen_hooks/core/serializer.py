"""Schema loading and result serialization.

This module loads schema JSON (as produced by the external schema parser)
into the node models, and turns annotation results into plain dictionaries
for the CLI and for emitters that work on JSON.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from codegen_hooks.core.models import Schema
from codegen_hooks.core.results import AnnotationResult

if TYPE_CHECKING:
    from codegen_hooks.services.traversal_service import GenerationReport


class SerializationError(Exception):
    """Error during serialization or deserialization."""

    def __init__(self, message: str, details: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


def _validation_details(error: ValidationError) -> str:
    error_details = []
    for err in error.errors():
        loc = ".".join(str(x) for x in err["loc"])
        error_details.append(f"{loc}: {err['msg']}")
    return "; ".join(error_details)


def load_schema(json_str: str) -> Schema:
    """Deserialize a JSON string to a Schema.

    Args:
        json_str: JSON string representation of a schema.

    Returns:
        The deserialized Schema.

    Raises:
        SerializationError: If deserialization fails with detailed error info.
    """
    try:
        data = json.loads(json_str)
        return Schema.model_validate(data)
    except json.JSONDecodeError as e:
        raise SerializationError(
            message="Invalid JSON format",
            details=f"Line {e.lineno}, column {e.colno}: {e.msg}",
        ) from e
    except ValidationError as e:
        raise SerializationError(
            message="Schema validation failed",
            details=_validation_details(e),
        ) from e


def load_schema_file(path: Path) -> Schema:
    """Read and deserialize a schema JSON file."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise SerializationError(message=f"Cannot read schema file {path}", details=str(e)) from e
    return load_schema(text)


def dump_schema(schema: Schema) -> str:
    """Serialize a Schema to a JSON string."""
    try:
        return json.dumps(schema.model_dump(mode="json"), indent=2, ensure_ascii=False)
    except Exception as e:
        raise SerializationError(
            message="Failed to serialize schema",
            details=str(e),
        ) from e


def _contribution_to_dict(contribution: Any | None) -> dict[str, Any] | None:
    if contribution is None:
        return None
    return contribution.model_dump(mode="json")


def result_to_dict(result: AnnotationResult) -> dict[str, Any]:
    """Convert an AnnotationResult to a dictionary.

    Args:
        result: The result to convert.

    Returns:
        Dictionary with the node identity, every contribution and diagnostics.
    """
    return {
        "node_kind": result.node_kind.value,
        "node_name": result.node_name,
        "backend": result.family.name,
        "action": result.action.value,
        "type": _contribution_to_dict(result.type_contrib),
        "fields": {
            name: _contribution_to_dict(c) for name, c in result.field_contribs.items()
        },
        "cases": {name: _contribution_to_dict(c) for name, c in result.case_contribs.items()},
        "function": _contribution_to_dict(result.function_contrib),
        "module": _contribution_to_dict(result.module_contrib),
        "diagnostics": [
            {
                "kind": d.kind.value,
                "target": d.target,
                "node": d.node,
                "message": d.message,
            }
            for d in result.diagnostics
        ],
    }


def report_to_dict(report: GenerationReport, include_empty: bool = False) -> dict[str, Any]:
    """Convert a GenerationReport to a dictionary.

    Args:
        report: Traversal report.
        include_empty: Keep results without contributions or diagnostics.
    """
    results = [
        result_to_dict(result)
        for result in report.results
        if include_empty or not result.is_empty() or result.diagnostics
    ]
    return {
        "package": report.package,
        "nodes_visited": report.nodes_visited,
        "hooks_invoked": report.hooks_invoked,
        "results": results,
    }
