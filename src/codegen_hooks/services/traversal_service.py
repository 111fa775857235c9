"""Traversal service driving visitor hooks over a schema.

This module provides the TraversalService, which walks a schema depth-first
in declaration order, routes every annotation target found on a node to its
registered visitor, and merges the returned contributions into one
AnnotationResult per node.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Union

from codegen_hooks.contributions.base import ContributionKind
from codegen_hooks.core.annotations import key_collisions, payload_for, targets
from codegen_hooks.core.config import HooksConfig, get_config
from codegen_hooks.core.models import (
    EnumDef,
    Function,
    Interface,
    NodeKind,
    RecordDef,
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
)
from codegen_hooks.visitors.base import HOOK_NAMES
from codegen_hooks.visitors.registry import VisitorRegistry

logger = logging.getLogger(__name__)

Declaration = Union[TypeDefinition, Function]

_MEMBER_SLOTS = (ContributionKind.FIELD, ContributionKind.VARIANT_CASE)


@dataclass
class GenerationReport:
    """Result of a traversal: one AnnotationResult per visited node, in order."""

    package: str
    results: list[AnnotationResult] = field(default_factory=list)

    @property
    def diagnostics(self) -> list[Diagnostic]:
        """All diagnostics recorded during traversal."""
        return [d for result in self.results for d in result.diagnostics]

    @property
    def nodes_visited(self) -> int:
        return len(self.results)

    @property
    def hooks_invoked(self) -> int:
        return sum(len(result.invocations) for result in self.results)

    def lookup(self, kind: NodeKind, name: str) -> AnnotationResult | None:
        """Find the first result for a node kind and name."""
        for result in self.results:
            if result.node_kind == kind and result.node_name == name:
                return result
        return None


class TraversalService:
    """Service for running visitor hooks over schema nodes.

    The registry is frozen when the service is created; it is only read
    during traversal and may be shared by worker threads.
    """

    def __init__(
        self,
        registry: VisitorRegistry,
        config: HooksConfig | None = None,
        max_workers: int | None = None,
    ) -> None:
        """Initialize traversal service.

        Args:
            registry: Visitors for this generation run.
            config: Engine configuration (defaults to the global config).
            max_workers: Override for ``config.max_workers``.
        """
        self._registry = registry
        self._config = config or get_config()
        self._max_workers = max_workers or self._config.max_workers
        self._registry.freeze()

    @property
    def registry(self) -> VisitorRegistry:
        return self._registry

    @property
    def parallel(self) -> bool:
        """Whether top-level declarations are visited in a thread pool."""
        if self._max_workers <= 1:
            return False
        return all(visitor.reentrant for visitor in self._registry.visitors())

    def new_result(self, node: SchemaNode) -> AnnotationResult:
        return AnnotationResult(
            family=self._registry.family,
            node_kind=node.node_kind,
            node_name=node.name,
        )

    def process_node(
        self,
        node: SchemaNode,
        result: AnnotationResult,
        index: int | None = None,
    ) -> AnnotationResult:
        """Run every matching visitor hook for one node.

        Each distinct target on the node is dispatched once. Unknown targets,
        failing hooks and contributions of the wrong type are recorded as
        diagnostics on ``result``; they never stop the other targets.

        Args:
            node: Node whose annotations are processed.
            result: Aggregate receiving the contributions. Field and case
                contributions are keyed by the member's name.
            index: Position of a field or case within its parent.

        Returns:
            The updated result.
        """
        kind = node.node_kind
        slot = ContributionKind.for_node(kind)
        if slot in _MEMBER_SLOTS and index is None:
            raise ValueError(f"{kind.value} '{node.name}' needs its index within the parent")

        hook_name = HOOK_NAMES[kind]
        for target in targets(node.annotations):
            payload = payload_for(node.annotations, target)

            if self._config.warn_on_key_collision:
                for key in key_collisions(node.annotations, target):
                    message = (
                        f"Annotation key '{key}' for target '{target}' on {kind.value} "
                        f"'{node.name}' is set more than once; the last value wins"
                    )
                    logger.warning(message)
                    result.record(DiagnosticKind.KEY_COLLISION, target, message)

            visitor = self._registry.dispatch(target)
            if visitor is None:
                result.record(
                    DiagnosticKind.UNRESOLVED_TARGET,
                    target,
                    f"No visitor registered for annotation target '{target}'",
                )
                continue

            hook = visitor.hook_for(kind)
            args = (payload, node) if index is None else (payload, node, index)
            result.record_invocation(target, hook_name, node.name, index)
            logger.debug(f"Calling {hook_name} of {visitor!r} for '{node.name}'")

            try:
                contribution = hook(*args)
            except Exception as e:
                logger.warning(f"Visitor for '{target}' failed on {kind.value} '{node.name}': {e}")
                result.record(DiagnosticKind.HOOK_FAILED, target, f"{hook_name} raised: {e}")
                continue

            if contribution is None:
                continue

            if not self._registry.family.accepts(slot, contribution):
                result.record(
                    DiagnosticKind.UNEXPECTED_CONTRIBUTION,
                    target,
                    f"{hook_name} returned {type(contribution).__name__}, expected "
                    f"{self._registry.family.type_for(slot).__name__}",
                )
                continue

            key = node.name if slot in _MEMBER_SLOTS else None
            try:
                result.merge(slot, contribution, key=key)
            except (TypeError, ValueError) as e:
                logger.warning(f"Cannot merge contribution from '{target}' on '{node.name}': {e}")
                result.record(
                    DiagnosticKind.UNEXPECTED_CONTRIBUTION,
                    target,
                    f"{hook_name} returned a contribution that cannot be merged: {e}",
                )

        return result

    def visit_type_definition(self, type_def: TypeDefinition) -> AnnotationResult:
        """Visit a type definition and its fields or cases into one result."""
        result = self.process_node(type_def, self.new_result(type_def))

        if isinstance(type_def, RecordDef):
            for index, record_field in enumerate(type_def.fields):
                self.process_node(record_field, result, index=index)
        elif isinstance(type_def, (VariantDef, EnumDef)):
            for index, case in enumerate(type_def.cases):
                self.process_node(case, result, index=index)

        return result

    def visit_function(self, function: Function) -> AnnotationResult:
        return self.process_node(function, self.new_result(function))

    def _visit_declaration(self, declaration: Declaration) -> list[AnnotationResult]:
        if isinstance(declaration, Function):
            return [self.visit_function(declaration)]

        results = [self.visit_type_definition(declaration)]
        if isinstance(declaration, ResourceDef):
            results.extend(self.visit_function(method) for method in declaration.methods)
        return results

    def _visit_declarations(self, declarations: list[Declaration]) -> list[AnnotationResult]:
        """Visit top-level declarations, forking across workers when allowed."""
        if self.parallel and len(declarations) > 1:
            with ThreadPoolExecutor(max_workers=self._max_workers) as pool:
                batches = list(pool.map(self._visit_declaration, declarations))
        else:
            batches = [self._visit_declaration(declaration) for declaration in declarations]

        # Joined in declaration order whatever the completion order was
        return [result for batch in batches for result in batch]

    def visit_interface(self, interface: Interface) -> list[AnnotationResult]:
        """Visit an interface, then its types, then its functions."""
        module_result = self.process_node(interface, self.new_result(interface))
        declarations: list[Declaration] = [*interface.types, *interface.functions]
        return [module_result, *self._visit_declarations(declarations)]

    def visit_world(self, world: World) -> list[AnnotationResult]:
        """Visit a world, its own declarations, then its imported and exported interfaces."""
        results = [self.process_node(world, self.new_result(world))]
        results.extend(self._visit_declarations([*world.types, *world.functions]))
        for interface in [*world.imports, *world.exports]:
            results.extend(self.visit_interface(interface))
        return results

    def traverse(self, schema: Schema) -> GenerationReport:
        """Visit every node of a schema in declaration order.

        Args:
            schema: Parsed schema package.

        Returns:
            GenerationReport holding one AnnotationResult per node.
        """
        if self._max_workers > 1 and not self.parallel:
            logger.info("Visiting sequentially: not every registered visitor is reentrant")

        report = GenerationReport(package=schema.package)
        for interface in schema.interfaces:
            report.results.extend(self.visit_interface(interface))
        for world in schema.worlds:
            report.results.extend(self.visit_world(world))

        logger.debug(
            f"Visited {report.nodes_visited} nodes of '{schema.package}', "
            f"{report.hooks_invoked} hook calls, {len(report.diagnostics)} diagnostics"
        )
        return report
