"""Base types shared by every backend's contribution accumulators.

A contribution is an ordered accumulator of generated-code fragments that a
visitor returns for one schema node. Backends group their five accumulator
types into a ``ContributionFamily`` so that the visitor interface is written
once and reused for every backend.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol, TypeVar, runtime_checkable

from pydantic import BaseModel

from codegen_hooks.core.errors import InvalidFamilyError
from codegen_hooks.core.models import NodeKind


class Action(str, Enum):
    """What the emitter does with the default generated code for a node."""

    CONTINUE = "continue"  # default code plus contributions
    SKIP = "skip"  # contributions replace the default code


class ContributionKind(str, Enum):
    """The five contribution slots of a family."""

    TYPE = "type"
    FIELD = "field"
    VARIANT_CASE = "variant-case"
    FUNCTION = "function"
    MODULE = "module"

    @classmethod
    def for_node(cls, node_kind: NodeKind) -> ContributionKind:
        """Return the contribution slot filled by hooks for a node kind."""
        if node_kind.is_type_definition:
            return cls.TYPE
        if node_kind.is_module:
            return cls.MODULE
        if node_kind == NodeKind.FIELD:
            return cls.FIELD
        if node_kind == NodeKind.VARIANT_CASE:
            return cls.VARIANT_CASE
        return cls.FUNCTION


@runtime_checkable
class Contribution(Protocol):
    """Capabilities the engine relies on; no base class is required."""

    action: Action

    def is_empty(self) -> bool: ...

    def merge(self, other): ...


C = TypeVar("C", bound="ContributionBase")


class ContributionBase(BaseModel):
    """Pydantic base for list-only accumulators.

    Every field except ``action`` must be a ``list[str]``. Lists only ever
    grow, so once an ``add_*`` call happened the contribution stays
    non-empty.
    """

    action: Action = Action.CONTINUE

    @classmethod
    def list_fields(cls) -> list[str]:
        return [name for name in cls.model_fields if name != "action"]

    def skip_default(self) -> None:
        """Ask the emitter to drop the default generated code for this node."""
        self.action = Action.SKIP

    def is_empty(self) -> bool:
        """Check if this contribution has any fragments."""
        return all(not getattr(self, name) for name in self.list_fields())

    def merge(self: C, other: C) -> C:
        """Concatenate two contributions of the same type.

        Args:
            other: Contribution produced after this one.

        Returns:
            A new contribution with every list of ``self`` followed by the
            matching list of ``other``. SKIP wins over CONTINUE. When one
            side is a subclass of the other, the result has the base type.
        """
        if isinstance(other, type(self)):
            merged_type = type(self)
        elif isinstance(self, type(other)):
            merged_type = type(other)
        else:
            raise TypeError(
                f"Cannot merge {type(other).__name__} into {type(self).__name__}"
            )
        data = {
            name: [*getattr(self, name), *getattr(other, name)]
            for name in merged_type.list_fields()
        }
        action = Action.SKIP if Action.SKIP in (self.action, other.action) else Action.CONTINUE
        return merged_type(action=action, **data)


@dataclass(frozen=True)
class ContributionFamily:
    """Bundle of one backend's five contribution types."""

    name: str
    type_contribution: type
    field_contribution: type
    case_contribution: type
    function_contribution: type
    module_contribution: type

    def __post_init__(self) -> None:
        for kind in ContributionKind:
            contribution_type = self.type_for(kind)
            for capability in ("is_empty", "merge"):
                if not callable(getattr(contribution_type, capability, None)):
                    raise InvalidFamilyError(
                        f"Family '{self.name}': {contribution_type.__name__} "
                        f"has no '{capability}' method"
                    )

    def type_for(self, kind: ContributionKind) -> type:
        return {
            ContributionKind.TYPE: self.type_contribution,
            ContributionKind.FIELD: self.field_contribution,
            ContributionKind.VARIANT_CASE: self.case_contribution,
            ContributionKind.FUNCTION: self.function_contribution,
            ContributionKind.MODULE: self.module_contribution,
        }[kind]

    def new(self, kind: ContributionKind) -> Contribution:
        """Create an empty contribution for a slot."""
        return self.type_for(kind)()

    def accepts(self, kind: ContributionKind, value: object) -> bool:
        """Check that a hook's return value belongs to this family's slot."""
        return isinstance(value, self.type_for(kind))
