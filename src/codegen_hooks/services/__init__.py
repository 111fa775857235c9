"""Business services for codegen-hooks."""

from codegen_hooks.services.traversal_service import GenerationReport, TraversalService

__all__ = [
    "GenerationReport",
    "TraversalService",
]
