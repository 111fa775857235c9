"""Unit tests for the visitor registry."""

import logging

import pytest

from codegen_hooks.contributions import PYTHON, RUST
from codegen_hooks.core.errors import (
    DuplicateTargetError,
    FamilyMismatchError,
    RegistryFrozenError,
    UnknownBackendError,
)
from codegen_hooks.visitors import Visitor, VisitorRegistry, build_registry, get_default_visitors
from codegen_hooks.visitors.derive import DeriveVisitor
from codegen_hooks.visitors.pydata import PyDataclassVisitor


class NamedVisitor(Visitor):
    def __init__(self, name: str) -> None:
        self._name = name

    @property
    def target(self) -> str:
        return self._name


class TestRegister:
    def test_register_and_dispatch(self) -> None:
        registry = VisitorRegistry()
        visitor = NamedVisitor("serde")
        registry.register("serde", visitor)

        assert registry.dispatch("serde") is visitor
        assert "serde" in registry
        assert len(registry) == 1

    def test_add_uses_own_target(self) -> None:
        registry = VisitorRegistry()
        registry.add(DeriveVisitor())
        assert registry.targets() == ["derive"]

    def test_duplicate_target_fails(self) -> None:
        registry = VisitorRegistry()
        first = NamedVisitor("trace")
        registry.register("trace", first)

        with pytest.raises(DuplicateTargetError, match="trace"):
            registry.register("trace", NamedVisitor("trace"))
        assert registry.dispatch("trace") is first

    def test_duplicate_replace_policy(self, caplog: pytest.LogCaptureFixture) -> None:
        registry = VisitorRegistry(duplicate_policy="replace")
        registry.register("trace", NamedVisitor("trace"))
        replacement = NamedVisitor("trace")

        with caplog.at_level(logging.WARNING):
            registry.register("trace", replacement)

        assert registry.dispatch("trace") is replacement
        assert len(registry) == 1
        assert "Replacing visitor" in caplog.text

    def test_family_mismatch(self) -> None:
        registry = VisitorRegistry(family=RUST)
        with pytest.raises(FamilyMismatchError):
            registry.add(PyDataclassVisitor())

    def test_frozen_registry(self) -> None:
        registry = VisitorRegistry()
        registry.freeze()
        assert registry.frozen
        with pytest.raises(RegistryFrozenError):
            registry.add(NamedVisitor("log"))

    def test_registration_order(self) -> None:
        registry = VisitorRegistry()
        for name in ("b", "a", "c"):
            registry.add(NamedVisitor(name))
        assert registry.targets() == ["b", "a", "c"]
        assert list(registry) == ["b", "a", "c"]


class TestDispatch:
    def test_unknown_target(self, caplog: pytest.LogCaptureFixture) -> None:
        registry = VisitorRegistry()
        registry.add(NamedVisitor("serde"))

        with caplog.at_level(logging.WARNING):
            assert registry.dispatch("unknown_tool") is None

        assert "No visitor registered for annotation target 'unknown_tool'" in caplog.text

    def test_dispatch_is_exact(self) -> None:
        registry = VisitorRegistry()
        registry.add(NamedVisitor("trace"))
        assert registry.dispatch("Trace") is None
        assert registry.dispatch("trace ") is None


class TestDefaults:
    def test_rust_defaults_have_unique_targets(self) -> None:
        visitors = get_default_visitors("rust")
        targets = [visitor.target for visitor in visitors]
        assert len(targets) == len(set(targets))
        assert {"derive", "deprecated", "trace", "log", "since", "validate", "serde"} == set(
            targets
        )

    def test_python_defaults(self) -> None:
        visitors = get_default_visitors("python")
        assert all(visitor.family is PYTHON for visitor in visitors)
        assert [visitor.target for visitor in visitors] == ["dataclass", "trace"]

    def test_unknown_backend(self) -> None:
        with pytest.raises(UnknownBackendError):
            get_default_visitors("go")

    def test_build_registry_infers_family(self) -> None:
        assert build_registry(get_default_visitors("python")).family is PYTHON
        assert build_registry([]).family is RUST

    def test_build_registry_rejects_duplicates(self) -> None:
        with pytest.raises(DuplicateTargetError):
            build_registry([NamedVisitor("x"), NamedVisitor("x")])
