"""Built-in visitors for the Python backend."""

from __future__ import annotations

from codegen_hooks.contributions.python import (
    PYTHON,
    PyFieldContribution,
    PyFunctionContribution,
    PyModuleContribution,
    PyTypeContribution,
)
from codegen_hooks.core.annotations import AnnotationPayload
from codegen_hooks.core.models import Function, Interface, RecordDef, RecordField
from codegen_hooks.visitors.base import Visitor

DATACLASS_FLAGS = ("frozen", "slots", "kw_only", "order")
FIELD_OPTIONS = ("default", "repr", "compare")


class PyDataclassVisitor(Visitor):
    """Turn records into dataclasses: ``#dataclass(frozen, slots)``."""

    family = PYTHON
    reentrant = True

    @property
    def target(self) -> str:
        return "dataclass"

    def visit_record(
        self, payload: AnnotationPayload, record: RecordDef
    ) -> PyTypeContribution | None:
        flags: list[str] = []
        for value in payload.values:
            flags.extend(part.strip() for part in value.split(",") if part.strip())
        if any(flag not in DATACLASS_FLAGS for flag in flags):
            return None

        contrib = PyTypeContribution()
        if flags:
            args = ", ".join(f"{flag}=True" for flag in flags)
            contrib.add_decorator(f"@dataclass({args})")
        else:
            contrib.add_decorator("@dataclass")
        return contrib

    def visit_field(
        self, payload: AnnotationPayload, field: RecordField, field_index: int
    ) -> PyFieldContribution | None:
        if not payload.options or set(payload.options) - set(FIELD_OPTIONS):
            return None
        contrib = PyFieldContribution()
        for key in FIELD_OPTIONS:
            if key in payload.options:
                contrib.add_metadata(f"{key}={payload.options[key]}")
        return contrib

    def visit_interface(
        self, payload: AnnotationPayload, interface: Interface
    ) -> PyModuleContribution | None:
        contrib = PyModuleContribution()
        contrib.add_import("from dataclasses import dataclass")
        return contrib


class PyTraceVisitor(Visitor):
    """Log function entry through the module logger: ``#trace(info)``."""

    family = PYTHON
    reentrant = True

    @property
    def target(self) -> str:
        return "trace"

    def visit_function(
        self, payload: AnnotationPayload, function: Function
    ) -> PyFunctionContribution | None:
        level = payload.text.strip() or "debug"
        if level not in ("debug", "info", "warning", "error"):
            return None
        contrib = PyFunctionContribution()
        contrib.add_prologue(f'logger.{level}("Entering function: {function.name}")')
        return contrib

    def visit_interface(
        self, payload: AnnotationPayload, interface: Interface
    ) -> PyModuleContribution | None:
        contrib = PyModuleContribution()
        contrib.add_import("import logging")
        contrib.add_code("logger = logging.getLogger(__name__)")
        return contrib
