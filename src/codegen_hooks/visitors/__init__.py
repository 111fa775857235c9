"""Annotation visitors and their registry.

Visitors are plugins that answer to one annotation target and return
contributions for the schema nodes carrying that target. The registry routes
each target found on a node to its single visitor.
"""

from codegen_hooks.visitors.base import HOOK_NAMES, Visitor
from codegen_hooks.visitors.registry import (
    VisitorRegistry,
    build_registry,
    get_default_visitors,
)

__all__ = [
    "HOOK_NAMES",
    "Visitor",
    "VisitorRegistry",
    "build_registry",
    "get_default_visitors",
]
