"""Version availability notes (``#since(1.4.0)``)."""

from __future__ import annotations

from codegen_hooks.contributions.rust import (
    RustFunctionContribution,
    RustModuleContribution,
    escape_str,
)
from codegen_hooks.core.annotations import AnnotationPayload
from codegen_hooks.core.models import Function, Interface, World
from codegen_hooks.visitors.base import Visitor


def _version(payload: AnnotationPayload) -> str | None:
    version = payload.get("version") or payload.text.strip()
    return version or None


class SinceVisitor(Visitor):
    reentrant = True

    @property
    def target(self) -> str:
        return "since"

    def visit_function(
        self, payload: AnnotationPayload, function: Function
    ) -> RustFunctionContribution | None:
        version = _version(payload)
        if version is None:
            return None
        contrib = RustFunctionContribution()
        contrib.add_attribute(f'#[doc = "Since version: {escape_str(version)}"]')
        return contrib

    def visit_interface(
        self, payload: AnnotationPayload, interface: Interface
    ) -> RustModuleContribution | None:
        version = _version(payload)
        if version is None:
            return None
        contrib = RustModuleContribution()
        contrib.add_code(f"// Interface available since version: {version}")
        return contrib

    def visit_world(
        self, payload: AnnotationPayload, world: World
    ) -> RustModuleContribution | None:
        version = _version(payload)
        if version is None:
            return None
        contrib = RustModuleContribution()
        contrib.add_code(f"// World available since version: {version}")
        return contrib
