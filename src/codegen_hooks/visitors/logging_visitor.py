"""Entry/exit logging for generated functions (``#log``)."""

from __future__ import annotations

from codegen_hooks.contributions.rust import RustFunctionContribution
from codegen_hooks.core.annotations import AnnotationPayload
from codegen_hooks.core.models import Function
from codegen_hooks.visitors.base import Visitor

RESULT_BINDING = "__wit_result"


class LoggingVisitor(Visitor):
    """Log every call on entry (with its parameters) and on exit (with its result)."""

    reentrant = True

    @property
    def target(self) -> str:
        return "log"

    def visit_function(
        self, payload: AnnotationPayload, function: Function
    ) -> RustFunctionContribution | None:
        contrib = RustFunctionContribution()
        contrib.add_body_prefix(f'println!("[ENTRY] {function.name}");')
        for param in function.params:
            contrib.add_body_prefix(
                f"println!(\"  param '{param.name}' = {{:?}}\", {param.name});"
            )

        if function.result is not None:
            contrib.add_body_suffix(
                f'println!("[EXIT] {function.name} => {{:?}}", {RESULT_BINDING});'
            )
        else:
            contrib.add_body_suffix(f'println!("[EXIT] {function.name}");')
        return contrib
