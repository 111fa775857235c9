"""Rust backend contribution types.

Builder-style accumulators for customizing generated Rust bindings: derives,
raw attributes, doc comments, extra items, function body instrumentation and
module-level ``use`` statements. All fragments are raw source text spliced
verbatim by the emitter.

Example:
    contrib = RustTypeContribution()
    contrib.add_derive("serde::Serialize")
    contrib.add_attribute('#[serde(rename_all = "camelCase")]')
"""

from __future__ import annotations

from pydantic import Field

from codegen_hooks.contributions.base import ContributionBase, ContributionFamily


def escape_str(text: str) -> str:
    """Escape backslashes and double quotes for a Rust string literal."""
    return text.replace("\\", "\\\\").replace('"', '\\"')


class RustTypeContribution(ContributionBase):
    """Contributions for type definitions (records, variants, enums, flags, resources)."""

    attributes: list[str] = Field(
        default_factory=list, description='Raw attribute lines, e.g. "#[repr(C)]"'
    )
    derives: list[str] = Field(
        default_factory=list, description='Derive macros, e.g. "Clone", "serde::Serialize"'
    )
    doc_comments: list[str] = Field(
        default_factory=list, description="Doc comment lines without the ///"
    )
    additional_code: list[str] = Field(
        default_factory=list, description="Items emitted after the type (impl blocks, ...)"
    )

    def add_attribute(self, attr: str) -> None:
        """Add a raw attribute line including the ``#[...]`` syntax."""
        self.attributes.append(attr)

    def add_derive(self, derive: str) -> None:
        """Add a derive macro name; the emitter builds the ``#[derive(...)]`` list."""
        self.derives.append(derive)

    def add_doc_comment(self, comment: str) -> None:
        self.doc_comments.append(comment)

    def add_code(self, code: str) -> None:
        """Add code emitted right after the type definition."""
        self.additional_code.append(code)


class RustFieldContribution(ContributionBase):
    """Contributions for record fields."""

    attributes: list[str] = Field(default_factory=list)
    doc_comments: list[str] = Field(default_factory=list)

    def add_attribute(self, attr: str) -> None:
        self.attributes.append(attr)

    def add_doc_comment(self, comment: str) -> None:
        self.doc_comments.append(comment)


class RustVariantCaseContribution(ContributionBase):
    """Contributions for variant and enum cases."""

    attributes: list[str] = Field(default_factory=list)
    doc_comments: list[str] = Field(default_factory=list)

    def add_attribute(self, attr: str) -> None:
        self.attributes.append(attr)

    def add_doc_comment(self, comment: str) -> None:
        self.doc_comments.append(comment)


class RustFunctionContribution(ContributionBase):
    """Contributions for function definitions.

    ``body_prefix`` lines run before the generated body, ``body_suffix``
    lines run after it and before the return.
    """

    attributes: list[str] = Field(default_factory=list)
    doc_comments: list[str] = Field(default_factory=list)
    body_prefix: list[str] = Field(default_factory=list)
    body_suffix: list[str] = Field(default_factory=list)

    def add_attribute(self, attr: str) -> None:
        self.attributes.append(attr)

    def add_doc_comment(self, comment: str) -> None:
        self.doc_comments.append(comment)

    def add_body_prefix(self, code: str) -> None:
        self.body_prefix.append(code)

    def add_body_suffix(self, code: str) -> None:
        self.body_suffix.append(code)

    prepend_body = add_body_prefix
    append_body = add_body_suffix


class RustModuleContribution(ContributionBase):
    """Contributions for module-level code."""

    use_statements: list[str] = Field(
        default_factory=list, description="Use statements placed at the top of the module"
    )
    additional_code: list[str] = Field(default_factory=list)

    def add_use(self, use_stmt: str) -> None:
        self.use_statements.append(use_stmt)

    def add_code(self, code: str) -> None:
        self.additional_code.append(code)


RUST = ContributionFamily(
    name="rust",
    type_contribution=RustTypeContribution,
    field_contribution=RustFieldContribution,
    case_contribution=RustVariantCaseContribution,
    function_contribution=RustFunctionContribution,
    module_contribution=RustModuleContribution,
)
