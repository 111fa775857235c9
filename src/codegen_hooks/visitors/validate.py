"""Precondition checks injected at the top of function bodies.

Each ``#validate(<expr>)`` occurrence becomes one ``assert!`` line, in
annotation order.
"""

from __future__ import annotations

from codegen_hooks.contributions.rust import RustFunctionContribution
from codegen_hooks.core.annotations import AnnotationPayload
from codegen_hooks.core.models import Function
from codegen_hooks.visitors.base import Visitor


class ValidateVisitor(Visitor):
    reentrant = True

    @property
    def target(self) -> str:
        return "validate"

    def visit_function(
        self, payload: AnnotationPayload, function: Function
    ) -> RustFunctionContribution | None:
        conditions = [value.strip() for value in payload.values if value.strip()]
        if not conditions:
            return None

        contrib = RustFunctionContribution()
        for condition in conditions:
            contrib.add_body_prefix(f'assert!({condition}, "Validation failed");')
        return contrib
