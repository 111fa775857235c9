"""Schema node models consumed by the hook engine.

These models mirror the parsed interface-description schema (records,
variants, enums, flags, resources, functions, interfaces and worlds) together
with the annotations attached to each node. The engine only reads them.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field


class NodeKind(str, Enum):
    """Kind of schema node, one hook per kind."""

    RECORD = "record"
    VARIANT = "variant"
    ENUM = "enum"
    FLAGS = "flags"
    RESOURCE = "resource"
    FIELD = "field"
    VARIANT_CASE = "variant-case"
    FUNCTION = "function"
    INTERFACE = "interface"
    WORLD = "world"

    @property
    def is_type_definition(self) -> bool:
        return self in TYPE_DEFINITION_KINDS

    @property
    def is_module(self) -> bool:
        return self in (NodeKind.INTERFACE, NodeKind.WORLD)


TYPE_DEFINITION_KINDS = frozenset(
    {
        NodeKind.RECORD,
        NodeKind.VARIANT,
        NodeKind.ENUM,
        NodeKind.FLAGS,
        NodeKind.RESOURCE,
    }
)


class Annotation(BaseModel):
    """A ``(target, payload)`` pair attached to one schema node.

    The payload is either a plain string (``#derive(Clone, Debug)``) or a
    key/value map (``#serde(rename = "userId")``).
    """

    target: str = Field(..., min_length=1, description="Visitor target this annotation is for")
    payload: str | dict[str, str] = Field(default="", description="Raw annotation payload")


class SchemaNode(BaseModel):
    """Base class for every annotated schema element."""

    name: str = Field(..., description="Declared name")
    docs: str | None = Field(None, description="Doc comment from the schema")
    annotations: list[Annotation] = Field(default_factory=list)

    @property
    def node_kind(self) -> NodeKind:
        """Node kind used to select the visitor hook."""
        return NodeKind(getattr(self, "kind"))


class RecordField(SchemaNode):
    """Named field of a record."""

    kind: Literal["field"] = "field"
    type_ref: str = Field(..., description="Referenced type name")


class Case(SchemaNode):
    """Case of a variant or enum; enum cases carry no payload type."""

    kind: Literal["variant-case"] = "variant-case"
    type_ref: str | None = Field(None, description="Payload type name, if any")


class Param(BaseModel):
    """Function parameter."""

    name: str
    type_ref: str


class Function(SchemaNode):
    """Freestanding function or resource method."""

    kind: Literal["function"] = "function"
    params: list[Param] = Field(default_factory=list)
    result: str | None = Field(None, description="Result type name, if any")


class TypeDefinition(SchemaNode):
    """Common shape of named type definitions."""

    type_id: int = Field(..., ge=0, description="Stable type identifier")


class RecordDef(TypeDefinition):
    kind: Literal["record"] = "record"
    fields: list[RecordField] = Field(default_factory=list)


class VariantDef(TypeDefinition):
    kind: Literal["variant"] = "variant"
    cases: list[Case] = Field(default_factory=list)


class EnumDef(TypeDefinition):
    kind: Literal["enum"] = "enum"
    cases: list[Case] = Field(default_factory=list)


class FlagsDef(TypeDefinition):
    kind: Literal["flags"] = "flags"
    flags: list[str] = Field(default_factory=list)


class ResourceDef(TypeDefinition):
    kind: Literal["resource"] = "resource"
    methods: list[Function] = Field(default_factory=list)


AnyTypeDefinition = Annotated[
    Union[RecordDef, VariantDef, EnumDef, FlagsDef, ResourceDef],
    Field(discriminator="kind"),
]


class Interface(SchemaNode):
    """Interface (module) grouping types and functions."""

    kind: Literal["interface"] = "interface"
    package: str | None = None
    types: list[AnyTypeDefinition] = Field(default_factory=list)
    functions: list[Function] = Field(default_factory=list)


class World(SchemaNode):
    """World: imported/exported interfaces plus its own declarations."""

    kind: Literal["world"] = "world"
    package: str | None = None
    imports: list[Interface] = Field(default_factory=list)
    exports: list[Interface] = Field(default_factory=list)
    types: list[AnyTypeDefinition] = Field(default_factory=list)
    functions: list[Function] = Field(default_factory=list)


class Schema(BaseModel):
    """Root of a parsed schema package."""

    version: str = "1.0"
    package: str = Field(..., description="Package name, e.g. 'example:app'")
    interfaces: list[Interface] = Field(default_factory=list)
    worlds: list[World] = Field(default_factory=list)
