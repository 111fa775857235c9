"""Python backend contribution types."""

from __future__ import annotations

from pydantic import Field

from codegen_hooks.contributions.base import ContributionBase, ContributionFamily


class PyTypeContribution(ContributionBase):
    """Contributions for generated classes."""

    decorators: list[str] = Field(default_factory=list, description="Class decorators")
    bases: list[str] = Field(default_factory=list, description="Extra base classes")
    docstring_lines: list[str] = Field(default_factory=list)
    additional_code: list[str] = Field(default_factory=list)

    def add_decorator(self, decorator: str) -> None:
        self.decorators.append(decorator)

    def add_base(self, base: str) -> None:
        self.bases.append(base)

    def add_docstring_line(self, line: str) -> None:
        self.docstring_lines.append(line)

    def add_code(self, code: str) -> None:
        self.additional_code.append(code)


class PyFieldContribution(ContributionBase):
    """Contributions for class attributes generated from record fields."""

    comments: list[str] = Field(default_factory=list)
    metadata: list[str] = Field(
        default_factory=list, description='Keyword fragments for field(...), e.g. "repr=False"'
    )

    def add_comment(self, comment: str) -> None:
        self.comments.append(comment)

    def add_metadata(self, fragment: str) -> None:
        self.metadata.append(fragment)


class PyCaseContribution(ContributionBase):
    comments: list[str] = Field(default_factory=list)

    def add_comment(self, comment: str) -> None:
        self.comments.append(comment)


class PyFunctionContribution(ContributionBase):
    """Contributions for generated functions and methods."""

    decorators: list[str] = Field(default_factory=list)
    docstring_lines: list[str] = Field(default_factory=list)
    body_prologue: list[str] = Field(default_factory=list)
    body_epilogue: list[str] = Field(default_factory=list)

    def add_decorator(self, decorator: str) -> None:
        self.decorators.append(decorator)

    def add_docstring_line(self, line: str) -> None:
        self.docstring_lines.append(line)

    def add_prologue(self, code: str) -> None:
        self.body_prologue.append(code)

    def add_epilogue(self, code: str) -> None:
        self.body_epilogue.append(code)


class PyModuleContribution(ContributionBase):
    imports: list[str] = Field(default_factory=list)
    additional_code: list[str] = Field(default_factory=list)

    def add_import(self, statement: str) -> None:
        self.imports.append(statement)

    def add_code(self, code: str) -> None:
        self.additional_code.append(code)


PYTHON = ContributionFamily(
    name="python",
    type_contribution=PyTypeContribution,
    field_contribution=PyFieldContribution,
    case_contribution=PyCaseContribution,
    function_contribution=PyFunctionContribution,
    module_contribution=PyModuleContribution,
)
