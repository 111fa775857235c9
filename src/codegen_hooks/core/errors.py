"""Exception types raised by the hook engine.

Only setup-time configuration problems are raised as exceptions. Problems met
while visiting nodes are recorded as diagnostics instead (see
``codegen_hooks.core.results``).
"""

from __future__ import annotations


class HookEngineError(Exception):
    """Base class for all codegen-hooks errors."""


class ConfigurationError(HookEngineError):
    """Invalid engine setup detected before traversal starts."""


class DuplicateTargetError(ConfigurationError):
    """Two visitors claim the same annotation target."""

    def __init__(self, target: str) -> None:
        super().__init__(f"A visitor is already registered for annotation target '{target}'")
        self.target = target


class RegistryFrozenError(ConfigurationError):
    """The registry was modified after traversal started."""

    def __init__(self, target: str) -> None:
        super().__init__(
            f"Cannot register visitor for target '{target}': registry is frozen"
        )
        self.target = target


class FamilyMismatchError(ConfigurationError):
    """A visitor produces contributions for a different backend than the registry."""

    def __init__(self, target: str, expected: str, actual: str) -> None:
        super().__init__(
            f"Visitor for target '{target}' uses the '{actual}' contribution family, "
            f"registry expects '{expected}'"
        )
        self.target = target
        self.expected = expected
        self.actual = actual


class InvalidFamilyError(ConfigurationError):
    """A contribution family is missing a required capability."""


class UnknownBackendError(ConfigurationError):
    """No contribution family is known under the requested backend name."""

    def __init__(self, backend: str) -> None:
        super().__init__(f"Unknown backend '{backend}'")
        self.backend = backend


class ResultConsumedError(HookEngineError):
    """An annotation result was read or written after the emitter consumed it."""
