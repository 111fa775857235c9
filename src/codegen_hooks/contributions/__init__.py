"""Contribution accumulators and per-backend contribution families."""

from codegen_hooks.contributions.base import (
    Action,
    Contribution,
    ContributionBase,
    ContributionFamily,
    ContributionKind,
)
from codegen_hooks.contributions.python import (
    PYTHON,
    PyCaseContribution,
    PyFieldContribution,
    PyFunctionContribution,
    PyModuleContribution,
    PyTypeContribution,
)
from codegen_hooks.contributions.rust import (
    RUST,
    RustFieldContribution,
    RustFunctionContribution,
    RustModuleContribution,
    RustTypeContribution,
    RustVariantCaseContribution,
)
from codegen_hooks.core.errors import UnknownBackendError

FAMILIES: dict[str, ContributionFamily] = {
    RUST.name: RUST,
    PYTHON.name: PYTHON,
}


def get_family(backend: str) -> ContributionFamily:
    """Look up a contribution family by backend name."""
    try:
        return FAMILIES[backend]
    except KeyError:
        raise UnknownBackendError(backend) from None


__all__ = [
    "Action",
    "Contribution",
    "ContributionBase",
    "ContributionFamily",
    "ContributionKind",
    "FAMILIES",
    "PYTHON",
    "PyCaseContribution",
    "PyFieldContribution",
    "PyFunctionContribution",
    "PyModuleContribution",
    "PyTypeContribution",
    "RUST",
    "RustFieldContribution",
    "RustFunctionContribution",
    "RustModuleContribution",
    "RustTypeContribution",
    "RustVariantCaseContribution",
    "get_family",
]
