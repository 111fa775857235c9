"""codegen-hooks - annotation visitors for interface-description code generators.

Plugins ("visitors") answer to annotation targets on schema nodes and return
contributions (attributes, derives, doc comments, extra code, imports, body
instrumentation) that the code emitter splices into the generated source.
"""

# core must load before contributions: results depend on contribution types
from codegen_hooks.core import (
    Annotation,
    AnnotationPayload,
    AnnotationResult,
    ConfigurationError,
    Diagnostic,
    DiagnosticKind,
    DuplicateTargetError,
    NodeKind,
    Schema,
)
from codegen_hooks.contributions import (
    PYTHON,
    RUST,
    Action,
    ContributionFamily,
    ContributionKind,
    get_family,
)
from codegen_hooks.services import GenerationReport, TraversalService
from codegen_hooks.visitors import (
    Visitor,
    VisitorRegistry,
    build_registry,
    get_default_visitors,
)

__version__ = "0.1.0"

__all__ = [
    "Action",
    "Annotation",
    "AnnotationPayload",
    "AnnotationResult",
    "ConfigurationError",
    "ContributionFamily",
    "ContributionKind",
    "Diagnostic",
    "DiagnosticKind",
    "DuplicateTargetError",
    "GenerationReport",
    "NodeKind",
    "PYTHON",
    "RUST",
    "Schema",
    "TraversalService",
    "Visitor",
    "VisitorRegistry",
    "build_registry",
    "get_default_visitors",
    "get_family",
]
