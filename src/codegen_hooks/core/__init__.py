"""Core module containing schema models, annotation extraction and results."""

from codegen_hooks.core.annotations import (
    AnnotationPayload,
    combined_map_for,
    has,
    key_collisions,
    payload_for,
    targets,
    value_for,
    values_for,
)
from codegen_hooks.core.errors import (
    ConfigurationError,
    DuplicateTargetError,
    FamilyMismatchError,
    HookEngineError,
    InvalidFamilyError,
    RegistryFrozenError,
    ResultConsumedError,
    UnknownBackendError,
)
from codegen_hooks.core.models import (
    Annotation,
    Case,
    EnumDef,
    FlagsDef,
    Function,
    Interface,
    NodeKind,
    Param,
    RecordDef,
    RecordField,
    ResourceDef,
    Schema,
    SchemaNode,
    TypeDefinition,
    VariantDef,
    World,
)
from codegen_hooks.core.results import (
    AnnotationResult,
    Diagnostic,
    DiagnosticKind,
    HookInvocation,
)
from codegen_hooks.core.serializer import (
    SerializationError,
    dump_schema,
    load_schema,
    load_schema_file,
    report_to_dict,
    result_to_dict,
)

__all__ = [
    "Annotation",
    "AnnotationPayload",
    "AnnotationResult",
    "Case",
    "ConfigurationError",
    "Diagnostic",
    "DiagnosticKind",
    "DuplicateTargetError",
    "EnumDef",
    "FamilyMismatchError",
    "FlagsDef",
    "Function",
    "HookEngineError",
    "HookInvocation",
    "Interface",
    "InvalidFamilyError",
    "NodeKind",
    "Param",
    "RecordDef",
    "RecordField",
    "RegistryFrozenError",
    "ResourceDef",
    "ResultConsumedError",
    "Schema",
    "SchemaNode",
    "SerializationError",
    "TypeDefinition",
    "UnknownBackendError",
    "VariantDef",
    "World",
    "combined_map_for",
    "dump_schema",
    "has",
    "key_collisions",
    "load_schema",
    "load_schema_file",
    "payload_for",
    "report_to_dict",
    "result_to_dict",
    "targets",
    "value_for",
    "values_for",
]
