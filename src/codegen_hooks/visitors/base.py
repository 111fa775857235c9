"""Base interface for annotation visitors."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, ClassVar

from codegen_hooks.contributions.base import ContributionFamily
from codegen_hooks.contributions.rust import RUST
from codegen_hooks.core.annotations import AnnotationPayload
from codegen_hooks.core.models import (
    Case,
    EnumDef,
    FlagsDef,
    Function,
    Interface,
    NodeKind,
    RecordDef,
    RecordField,
    ResourceDef,
    VariantDef,
    World,
)

HOOK_NAMES: dict[NodeKind, str] = {
    NodeKind.RECORD: "visit_record",
    NodeKind.VARIANT: "visit_variant",
    NodeKind.ENUM: "visit_enum",
    NodeKind.FLAGS: "visit_flags",
    NodeKind.RESOURCE: "visit_resource",
    NodeKind.FIELD: "visit_field",
    NodeKind.VARIANT_CASE: "visit_variant_case",
    NodeKind.FUNCTION: "visit_function",
    NodeKind.INTERFACE: "visit_interface",
    NodeKind.WORLD: "visit_world",
}


class Visitor(ABC):
    """Plugin invoked once per annotated schema node during traversal.

    Every hook returns ``None`` by default, so a visitor overrides only the
    node kinds it cares about. A hook's return value is its only channel of
    influence on the generated code; visitors may keep private state between
    calls but must not mutate the nodes they are given.

    Hooks that cannot interpret their payload return ``None`` instead of
    raising.

    Class attributes:
        family: Contribution family the hooks return instances of.
        reentrant: Whether hooks may run concurrently on several threads.
    """

    family: ClassVar[ContributionFamily] = RUST
    reentrant: ClassVar[bool] = False

    @property
    @abstractmethod
    def target(self) -> str:
        """Annotation target this visitor answers to (e.g. 'serde')."""

    def hook_for(self, kind: NodeKind) -> Callable[..., Any | None]:
        """Return the bound hook for a node kind."""
        return getattr(self, HOOK_NAMES[kind])

    # ==================== Type definition hooks ====================

    def visit_record(self, payload: AnnotationPayload, record: RecordDef) -> Any | None:
        return None

    def visit_variant(self, payload: AnnotationPayload, variant: VariantDef) -> Any | None:
        return None

    def visit_enum(self, payload: AnnotationPayload, enum: EnumDef) -> Any | None:
        return None

    def visit_flags(self, payload: AnnotationPayload, flags: FlagsDef) -> Any | None:
        return None

    def visit_resource(self, payload: AnnotationPayload, resource: ResourceDef) -> Any | None:
        return None

    # ==================== Member hooks ====================

    def visit_field(
        self, payload: AnnotationPayload, field: RecordField, field_index: int
    ) -> Any | None:
        return None

    def visit_variant_case(
        self, payload: AnnotationPayload, case: Case, case_index: int
    ) -> Any | None:
        return None

    # ==================== Function hooks ====================

    def visit_function(self, payload: AnnotationPayload, function: Function) -> Any | None:
        return None

    # ==================== Module hooks ====================

    def visit_interface(self, payload: AnnotationPayload, interface: Interface) -> Any | None:
        return None

    def visit_world(self, payload: AnnotationPayload, world: World) -> Any | None:
        return None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(target={self.target!r}, family={self.family.name!r})"
