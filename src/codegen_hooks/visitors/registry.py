"""Visitor registry and target dispatch."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from typing import Literal

from codegen_hooks.contributions import PYTHON, ContributionFamily, get_family
from codegen_hooks.contributions.rust import RUST
from codegen_hooks.core.errors import (
    DuplicateTargetError,
    FamilyMismatchError,
    RegistryFrozenError,
)
from codegen_hooks.visitors.base import Visitor
from codegen_hooks.visitors.deprecated import DeprecatedVisitor
from codegen_hooks.visitors.derive import DeriveVisitor
from codegen_hooks.visitors.logging_visitor import LoggingVisitor
from codegen_hooks.visitors.pydata import PyDataclassVisitor, PyTraceVisitor
from codegen_hooks.visitors.serde import SerdeVisitor
from codegen_hooks.visitors.since import SinceVisitor
from codegen_hooks.visitors.tracing import TracingVisitor
from codegen_hooks.visitors.validate import ValidateVisitor

logger = logging.getLogger(__name__)

DuplicatePolicy = Literal["error", "replace"]


class VisitorRegistry:
    """Target-keyed map holding at most one visitor per annotation target.

    A registry is built once per generation run, frozen when traversal
    starts and only read afterwards, so it can be shared across workers.
    """

    def __init__(
        self,
        family: ContributionFamily = RUST,
        duplicate_policy: DuplicatePolicy = "error",
    ) -> None:
        """Initialize an empty registry.

        Args:
            family: Contribution family every registered visitor must use.
            duplicate_policy: ``"error"`` raises on a second visitor for the
                same target; ``"replace"`` keeps the newest one and warns.
        """
        self._family = family
        self._duplicate_policy = duplicate_policy
        self._visitors: dict[str, Visitor] = {}
        self._frozen = False

    @property
    def family(self) -> ContributionFamily:
        return self._family

    @property
    def frozen(self) -> bool:
        return self._frozen

    def register(self, target: str, visitor: Visitor) -> None:
        """Register a visitor under an annotation target.

        Raises:
            RegistryFrozenError: If traversal already started.
            FamilyMismatchError: If the visitor targets another backend.
            DuplicateTargetError: If the target is taken and the policy is ``"error"``.
        """
        if self._frozen:
            raise RegistryFrozenError(target)
        if visitor.family is not self._family:
            raise FamilyMismatchError(target, self._family.name, visitor.family.name)

        previous = self._visitors.get(target)
        if previous is not None:
            if self._duplicate_policy == "error":
                raise DuplicateTargetError(target)
            logger.warning(
                f"Replacing visitor {previous!r} for annotation target '{target}' with {visitor!r}"
            )

        self._visitors[target] = visitor

    def add(self, visitor: Visitor) -> None:
        """Register a visitor under its own ``target``."""
        self.register(visitor.target, visitor)

    def freeze(self) -> None:
        """Make the registry read-only for the rest of the run."""
        self._frozen = True

    def dispatch(self, target: str) -> Visitor | None:
        """Find the visitor for a target.

        Returns:
            The registered visitor, or None (with a logged warning) when no
            visitor owns the target.
        """
        visitor = self._visitors.get(target)
        if visitor is None:
            logger.warning(f"No visitor registered for annotation target '{target}'")
        return visitor

    def targets(self) -> list[str]:
        """Registered targets in registration order."""
        return list(self._visitors)

    def visitors(self) -> list[Visitor]:
        return list(self._visitors.values())

    def __contains__(self, target: object) -> bool:
        return target in self._visitors

    def __len__(self) -> int:
        return len(self._visitors)

    def __iter__(self) -> Iterator[str]:
        return iter(self._visitors)


def get_default_visitors(backend: str = "rust") -> list[Visitor]:
    """Return built-in visitors shipped for a backend."""
    family = get_family(backend)
    if family is PYTHON:
        return [PyDataclassVisitor(), PyTraceVisitor()]
    return [
        DeriveVisitor(),
        DeprecatedVisitor(),
        TracingVisitor(),
        LoggingVisitor(),
        SinceVisitor(),
        ValidateVisitor(),
        SerdeVisitor(),
    ]


def build_registry(
    visitors: Iterable[Visitor],
    family: ContributionFamily | None = None,
    duplicate_policy: DuplicatePolicy = "error",
) -> VisitorRegistry:
    """Create a registry and register each visitor under its own target.

    The family defaults to the first visitor's family (or Rust when empty).
    """
    visitors = list(visitors)
    if family is None:
        family = visitors[0].family if visitors else RUST
    registry = VisitorRegistry(family=family, duplicate_policy=duplicate_policy)
    for visitor in visitors:
        registry.add(visitor)
    return registry
