"""Annotation extraction helpers.

Pure, read-only queries over a node's annotation list. A target may occur
several times on one node; string payloads are kept as an ordered list while
map payloads are folded into a single map in source order (later keys win).
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from pydantic import BaseModel, Field

from codegen_hooks.core.models import Annotation


class AnnotationPayload(BaseModel):
    """Everything a single target contributed to one node, as handed to a hook."""

    target: str = ""
    values: list[str] = Field(default_factory=list, description="String payloads in source order")
    options: dict[str, str] = Field(default_factory=dict, description="Folded map payloads")

    @classmethod
    def of(cls, *values: str, target: str = "", **options: str) -> AnnotationPayload:
        """Build a payload directly, mostly useful when calling hooks by hand."""
        return cls(target=target, values=list(values), options=dict(options))

    @property
    def text(self) -> str:
        """String payloads joined with ", " (the single value when there is one)."""
        return ", ".join(self.values)

    def get(self, key: str, default: str | None = None) -> str | None:
        return self.options.get(key, default)

    def is_empty(self) -> bool:
        return not any(value.strip() for value in self.values) and not self.options

    def __str__(self) -> str:
        return self.text


def has(annotations: Iterable[Annotation], target: str) -> bool:
    """Check whether any annotation exists for a target."""
    return any(annotation.target == target for annotation in annotations)


def targets(annotations: Iterable[Annotation]) -> list[str]:
    """Return the distinct targets present, in first-seen order."""
    seen: list[str] = []
    for annotation in annotations:
        if annotation.target not in seen:
            seen.append(annotation.target)
    return seen


def values_for(annotations: Iterable[Annotation], target: str) -> list[str]:
    """Collect string payloads for a target, preserving source order."""
    return [
        annotation.payload
        for annotation in annotations
        if annotation.target == target and isinstance(annotation.payload, str)
    ]


def combined_map_for(annotations: Iterable[Annotation], target: str) -> dict[str, str]:
    """Fold all map payloads for a target into one map.

    Occurrences are applied in source order, so a later occurrence overwrites
    an earlier one on key collision. Use ``key_collisions`` to find out which
    keys were overwritten.
    """
    combined: dict[str, str] = {}
    for annotation in annotations:
        if annotation.target == target and isinstance(annotation.payload, dict):
            combined.update(annotation.payload)
    return combined


def key_collisions(annotations: Iterable[Annotation], target: str) -> list[str]:
    """Return keys defined by more than one map payload for a target."""
    seen: set[str] = set()
    collisions: list[str] = []
    for annotation in annotations:
        if annotation.target != target or not isinstance(annotation.payload, dict):
            continue
        for key in annotation.payload:
            if key in seen and key not in collisions:
                collisions.append(key)
            seen.add(key)
    return collisions


def value_for(annotations: Iterable[Annotation], target: str, key: str) -> str | None:
    """Return the first value of ``key`` among a target's map payloads."""
    for annotation in annotations:
        if annotation.target == target and isinstance(annotation.payload, dict):
            if key in annotation.payload:
                return annotation.payload[key]
    return None


def payload_for(annotations: Sequence[Annotation], target: str) -> AnnotationPayload:
    """Build the hook payload for one target on one node."""
    return AnnotationPayload(
        target=target,
        values=values_for(annotations, target),
        options=combined_map_for(annotations, target),
    )
