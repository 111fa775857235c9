"""Serde support driven by key/value annotations.

``#serde`` on a type derives ``Serialize``/``Deserialize``; container options
(``rename_all``, ``tag``, ``content``) become ``#[serde(...)]`` attributes.
On fields and cases, ``rename``, ``skip`` and ``default`` are understood.
Payloads with unknown keys or free text are treated as malformed and ignored.
"""

from __future__ import annotations

import logging

from codegen_hooks.contributions.rust import (
    RustFieldContribution,
    RustTypeContribution,
    RustVariantCaseContribution,
    escape_str,
)
from codegen_hooks.core.annotations import AnnotationPayload
from codegen_hooks.core.models import Case, EnumDef, RecordDef, RecordField, VariantDef
from codegen_hooks.visitors.base import Visitor

logger = logging.getLogger(__name__)

SERDE_DERIVES = ("serde::Serialize", "serde::Deserialize")

_CONTAINER_KEYS = {
    "record": ("rename_all",),
    "variant": ("rename_all", "tag", "content"),
    "enum": ("rename_all",),
}
_MEMBER_FLAGS = ("skip", "default")


def _serde_args(payload: AnnotationPayload, allowed: tuple[str, ...]) -> list[str] | None:
    """Render ``key = "value"`` arguments, or None if the payload is malformed."""
    if payload.values and any(value.strip() for value in payload.values):
        logger.debug(f"serde expects key/value options, got {payload.values!r}")
        return None
    unknown = set(payload.options) - set(allowed)
    if unknown:
        logger.debug(f"Unsupported serde options: {sorted(unknown)}")
        return None
    return [
        f'{key} = "{escape_str(payload.options[key])}"'
        for key in allowed
        if key in payload.options
    ]


def _member_args(payload: AnnotationPayload) -> list[str] | None:
    if _serde_args(payload, ("rename", *_MEMBER_FLAGS)) is None:
        return None

    rendered: list[str] = []
    for key in ("rename", *_MEMBER_FLAGS):
        if key not in payload.options:
            continue
        if key == "rename":
            rendered.append(f'rename = "{escape_str(payload.options[key])}"')
        elif payload.options[key].lower() == "true":
            rendered.append(key)
        elif payload.options[key].lower() != "false":
            logger.debug(f"serde {key} expects true/false, got {payload.options[key]!r}")
            return None
    return rendered


class SerdeVisitor(Visitor):
    reentrant = True

    @property
    def target(self) -> str:
        return "serde"

    def _container(self, kind: str, payload: AnnotationPayload) -> RustTypeContribution | None:
        args = _serde_args(payload, _CONTAINER_KEYS[kind])
        if args is None:
            return None
        contrib = RustTypeContribution()
        for derive in SERDE_DERIVES:
            contrib.add_derive(derive)
        if args:
            contrib.add_attribute(f"#[serde({', '.join(args)})]")
        return contrib

    def visit_record(
        self, payload: AnnotationPayload, record: RecordDef
    ) -> RustTypeContribution | None:
        return self._container("record", payload)

    def visit_variant(
        self, payload: AnnotationPayload, variant: VariantDef
    ) -> RustTypeContribution | None:
        return self._container("variant", payload)

    def visit_enum(self, payload: AnnotationPayload, enum: EnumDef) -> RustTypeContribution | None:
        return self._container("enum", payload)

    def visit_field(
        self, payload: AnnotationPayload, field: RecordField, field_index: int
    ) -> RustFieldContribution | None:
        args = _member_args(payload)
        if not args:
            return None
        contrib = RustFieldContribution()
        contrib.add_attribute(f"#[serde({', '.join(args)})]")
        return contrib

    def visit_variant_case(
        self, payload: AnnotationPayload, case: Case, case_index: int
    ) -> RustVariantCaseContribution | None:
        args = _member_args(payload)
        if not args:
            return None
        contrib = RustVariantCaseContribution()
        contrib.add_attribute(f"#[serde({', '.join(args)})]")
        return contrib
