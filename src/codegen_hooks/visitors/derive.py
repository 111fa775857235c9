"""Derive macros requested through ``#derive(...)`` annotations.

``#derive(Clone, Debug)`` on a record, variant, enum or flags type adds the
listed traits to the generated ``#[derive(...)]`` list, in annotation order.
"""

from __future__ import annotations

from codegen_hooks.contributions.rust import RustTypeContribution
from codegen_hooks.core.annotations import AnnotationPayload
from codegen_hooks.core.models import EnumDef, FlagsDef, RecordDef, VariantDef
from codegen_hooks.visitors.base import Visitor


def split_derives(payload: AnnotationPayload) -> list[str]:
    """Split every string payload on commas, dropping blanks."""
    derives: list[str] = []
    for value in payload.values:
        derives.extend(part.strip() for part in value.split(",") if part.strip())
    return derives


class DeriveVisitor(Visitor):
    """Add derive macros to type definitions."""

    reentrant = True

    @property
    def target(self) -> str:
        return "derive"

    def _contribution(self, payload: AnnotationPayload) -> RustTypeContribution | None:
        derives = split_derives(payload)
        if not derives:
            return None
        contrib = RustTypeContribution()
        for derive in derives:
            contrib.add_derive(derive)
        return contrib

    def visit_record(
        self, payload: AnnotationPayload, record: RecordDef
    ) -> RustTypeContribution | None:
        return self._contribution(payload)

    def visit_variant(
        self, payload: AnnotationPayload, variant: VariantDef
    ) -> RustTypeContribution | None:
        return self._contribution(payload)

    def visit_enum(self, payload: AnnotationPayload, enum: EnumDef) -> RustTypeContribution | None:
        return self._contribution(payload)

    def visit_flags(
        self, payload: AnnotationPayload, flags: FlagsDef
    ) -> RustTypeContribution | None:
        return self._contribution(payload)
