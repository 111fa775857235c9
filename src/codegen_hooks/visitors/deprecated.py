"""Deprecation markers for functions, fields and cases.

Accepted payloads:
    #deprecated                         -> #[deprecated]
    #deprecated(use new-fn instead)     -> #[deprecated = "use new-fn instead"]
    #deprecated(since = "1.2", note = "...")
                                        -> #[deprecated(since = "1.2", note = "...")]
"""

from __future__ import annotations

import logging

from codegen_hooks.contributions.rust import (
    RustFieldContribution,
    RustFunctionContribution,
    RustVariantCaseContribution,
    escape_str,
)
from codegen_hooks.core.annotations import AnnotationPayload
from codegen_hooks.core.models import Case, Function, RecordField
from codegen_hooks.visitors.base import Visitor

logger = logging.getLogger(__name__)

_ALLOWED_KEYS = ("since", "note")


def deprecated_attribute(payload: AnnotationPayload) -> str | None:
    """Render the ``#[deprecated]`` attribute, or None if the payload is malformed."""
    notes = [value.strip() for value in payload.values if value.strip()]
    if payload.options:
        # A bare #deprecated next to a key/value form adds nothing
        unknown = set(payload.options) - set(_ALLOWED_KEYS)
        if unknown or notes:
            logger.debug(f"Ignoring malformed deprecated payload: {payload!r}")
            return None
        args = ", ".join(
            f'{key} = "{escape_str(payload.options[key])}"'
            for key in _ALLOWED_KEYS
            if key in payload.options
        )
        return f"#[deprecated({args})]"

    if not notes:
        return "#[deprecated]"
    return f'#[deprecated = "{escape_str(", ".join(notes))}"]'


class DeprecatedVisitor(Visitor):
    """Mark functions, fields and variant cases as deprecated."""

    reentrant = True

    @property
    def target(self) -> str:
        return "deprecated"

    def visit_function(
        self, payload: AnnotationPayload, function: Function
    ) -> RustFunctionContribution | None:
        attr = deprecated_attribute(payload)
        if attr is None:
            return None
        contrib = RustFunctionContribution()
        contrib.add_attribute(attr)
        return contrib

    def visit_field(
        self, payload: AnnotationPayload, field: RecordField, field_index: int
    ) -> RustFieldContribution | None:
        attr = deprecated_attribute(payload)
        if attr is None:
            return None
        contrib = RustFieldContribution()
        contrib.add_attribute(attr)
        return contrib

    def visit_variant_case(
        self, payload: AnnotationPayload, case: Case, case_index: int
    ) -> RustVariantCaseContribution | None:
        attr = deprecated_attribute(payload)
        if attr is None:
            return None
        contrib = RustVariantCaseContribution()
        contrib.add_attribute(attr)
        return contrib
