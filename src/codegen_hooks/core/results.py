"""Per-node aggregation of visitor contributions.

An ``AnnotationResult`` collects every contribution produced for one schema
node across all matched visitors. It is created fresh for each node visit,
filled by the traversal service and consumed exactly once by the emitter.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from codegen_hooks.contributions.base import Action, ContributionFamily, ContributionKind
from codegen_hooks.core.errors import ResultConsumedError
from codegen_hooks.core.models import NodeKind


class DiagnosticKind(str, Enum):
    """Types of non-fatal problems recorded during traversal."""

    UNRESOLVED_TARGET = "unresolved_target"
    HOOK_FAILED = "hook_failed"
    UNEXPECTED_CONTRIBUTION = "unexpected_contribution"
    KEY_COLLISION = "key_collision"


@dataclass
class Diagnostic:
    """A single named diagnostic."""

    kind: DiagnosticKind
    target: str
    node: str
    message: str


@dataclass
class HookInvocation:
    """Record of one hook call made for a node."""

    target: str
    hook: str
    node: str
    index: int | None = None


@dataclass
class AnnotationResult:
    """All contributions produced for one node.

    Contributions of the same kind are concatenated in visitor-invocation
    order. Field and case contributions are keyed by member name.
    """

    family: ContributionFamily
    node_kind: NodeKind
    node_name: str
    type_contrib: Any | None = None
    field_contribs: dict[str, Any] = field(default_factory=dict)
    case_contribs: dict[str, Any] = field(default_factory=dict)
    function_contrib: Any | None = None
    module_contrib: Any | None = None
    action: Action = Action.CONTINUE
    diagnostics: list[Diagnostic] = field(default_factory=list)
    invocations: list[HookInvocation] = field(default_factory=list)
    _consumed: bool = field(default=False, repr=False, compare=False)

    @property
    def consumed(self) -> bool:
        return self._consumed

    def _check_open(self) -> None:
        if self._consumed:
            raise ResultConsumedError(
                f"Annotation result for {self.node_kind.value} '{self.node_name}' "
                "was already consumed"
            )

    @staticmethod
    def _combine(existing: Any | None, contribution: Any) -> Any:
        return contribution if existing is None else existing.merge(contribution)

    def merge(self, kind: ContributionKind, contribution: Any, key: str | None = None) -> None:
        """Merge a contribution into the slot for ``kind``.

        Args:
            kind: Contribution slot.
            contribution: Value returned by a visitor hook.
            key: Member name, required for field and case contributions.

        Raises:
            ResultConsumedError: If the emitter already consumed this result.
            ValueError: If ``key`` is missing for a field/case contribution.
        """
        self._check_open()
        if kind in (ContributionKind.FIELD, ContributionKind.VARIANT_CASE) and key is None:
            raise ValueError(f"A member name is required to merge a {kind.value} contribution")

        if kind == ContributionKind.TYPE:
            self.type_contrib = self._combine(self.type_contrib, contribution)
        elif kind == ContributionKind.FIELD:
            self.field_contribs[key] = self._combine(self.field_contribs.get(key), contribution)
        elif kind == ContributionKind.VARIANT_CASE:
            self.case_contribs[key] = self._combine(self.case_contribs.get(key), contribution)
        elif kind == ContributionKind.FUNCTION:
            self.function_contrib = self._combine(self.function_contrib, contribution)
        else:
            self.module_contrib = self._combine(self.module_contrib, contribution)

        # Any Skip wins over Continue
        if getattr(contribution, "action", Action.CONTINUE) == Action.SKIP:
            self.action = Action.SKIP

    def merge_type(self, contribution: Any) -> None:
        self.merge(ContributionKind.TYPE, contribution)

    def merge_field(self, name: str, contribution: Any) -> None:
        self.merge(ContributionKind.FIELD, contribution, key=name)

    def merge_case(self, name: str, contribution: Any) -> None:
        self.merge(ContributionKind.VARIANT_CASE, contribution, key=name)

    def merge_function(self, contribution: Any) -> None:
        self.merge(ContributionKind.FUNCTION, contribution)

    def merge_module(self, contribution: Any) -> None:
        self.merge(ContributionKind.MODULE, contribution)

    def _member_attribute(self, kind: ContributionKind, name: str, attr: str) -> None:
        contribution = self.family.new(kind)
        add_attribute = getattr(contribution, "add_attribute", None)
        if add_attribute is None:
            raise TypeError(
                f"{self.family.name} {kind.value} contributions do not support attributes"
            )
        add_attribute(attr)
        self.merge(kind, contribution, key=name)

    def add_field_attribute(self, name: str, attr: str) -> None:
        """Append an attribute to the named field's contribution."""
        self._member_attribute(ContributionKind.FIELD, name, attr)

    def add_case_attribute(self, name: str, attr: str) -> None:
        """Append an attribute to the named case's contribution."""
        self._member_attribute(ContributionKind.VARIANT_CASE, name, attr)

    def get_field(self, name: str) -> Any | None:
        return self.field_contribs.get(name)

    def get_case(self, name: str) -> Any | None:
        return self.case_contribs.get(name)

    def record_invocation(
        self, target: str, hook: str, node: str, index: int | None = None
    ) -> HookInvocation:
        """Note that a hook was called for this node or one of its members."""
        self._check_open()
        invocation = HookInvocation(target=target, hook=hook, node=node, index=index)
        self.invocations.append(invocation)
        return invocation

    def record(self, kind: DiagnosticKind, target: str, message: str) -> Diagnostic:
        """Record a diagnostic against this node."""
        self._check_open()
        diagnostic = Diagnostic(kind=kind, target=target, node=self.node_name, message=message)
        self.diagnostics.append(diagnostic)
        return diagnostic

    def is_empty(self) -> bool:
        """Check that no contribution carries any fragment and no Skip was requested."""
        contributions = [
            self.type_contrib,
            self.function_contrib,
            self.module_contrib,
            *self.field_contribs.values(),
            *self.case_contribs.values(),
        ]
        return self.action == Action.CONTINUE and all(
            c is None or c.is_empty() for c in contributions
        )

    def consume(self) -> AnnotationResult:
        """Hand the result to the emitter; allowed exactly once."""
        self._check_open()
        self._consumed = True
        return self
