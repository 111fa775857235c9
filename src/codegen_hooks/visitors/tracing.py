"""Tracing instrumentation for generated functions.

``#trace`` instruments a function with ``#[tracing::instrument]`` and logs
function entry at the requested level (``debug`` when the payload is empty).
On an interface it adds the ``use tracing;`` import.
"""

from __future__ import annotations

from codegen_hooks.contributions.rust import RustFunctionContribution, RustModuleContribution
from codegen_hooks.core.annotations import AnnotationPayload
from codegen_hooks.core.models import Function, Interface
from codegen_hooks.visitors.base import Visitor

TRACING_LEVELS = frozenset({"trace", "debug", "info", "warn", "error"})


class TracingVisitor(Visitor):
    reentrant = True

    @property
    def target(self) -> str:
        return "trace"

    def visit_function(
        self, payload: AnnotationPayload, function: Function
    ) -> RustFunctionContribution | None:
        level = payload.text.strip() or "debug"
        if level not in TRACING_LEVELS:
            return None

        contrib = RustFunctionContribution()
        contrib.add_attribute("#[tracing::instrument]")
        contrib.add_body_prefix(f'tracing::{level}!("Entering function: {function.name}");')
        return contrib

    def visit_interface(
        self, payload: AnnotationPayload, interface: Interface
    ) -> RustModuleContribution | None:
        contrib = RustModuleContribution()
        contrib.add_use("use tracing;")
        return contrib
