"""Unit tests for the built-in visitors, calling hooks directly."""

import pytest

from codegen_hooks.core.annotations import AnnotationPayload, payload_for
from codegen_hooks.core.models import (
    Annotation,
    Case,
    EnumDef,
    FlagsDef,
    Function,
    Interface,
    Param,
    RecordDef,
    RecordField,
    VariantDef,
    World,
)
from codegen_hooks.visitors.deprecated import DeprecatedVisitor, deprecated_attribute
from codegen_hooks.visitors.derive import DeriveVisitor, split_derives
from codegen_hooks.visitors.logging_visitor import LoggingVisitor
from codegen_hooks.visitors.pydata import PyDataclassVisitor, PyTraceVisitor
from codegen_hooks.visitors.serde import SerdeVisitor
from codegen_hooks.visitors.since import SinceVisitor
from codegen_hooks.visitors.tracing import TracingVisitor
from codegen_hooks.visitors.validate import ValidateVisitor

of = AnnotationPayload.of


@pytest.fixture
def record() -> RecordDef:
    return RecordDef(name="user", type_id=1, fields=[RecordField(name="id", type_ref="u64")])


@pytest.fixture
def function() -> Function:
    return Function(
        name="fetch-user",
        params=[Param(name="id", type_ref="u64"), Param(name="verbose", type_ref="bool")],
        result="user",
    )


class TestDeriveVisitor:
    def test_split_derives(self) -> None:
        assert split_derives(of("Clone, Debug", "PartialEq")) == ["Clone", "Debug", "PartialEq"]
        assert split_derives(of(" , ")) == []

    def test_type_hooks(self, record: RecordDef) -> None:
        visitor = DeriveVisitor()
        payload = of("Clone, Debug")

        for contrib in (
            visitor.visit_record(payload, record),
            visitor.visit_variant(payload, VariantDef(name="v", type_id=2)),
            visitor.visit_enum(payload, EnumDef(name="e", type_id=3)),
            visitor.visit_flags(payload, FlagsDef(name="f", type_id=4)),
        ):
            assert contrib.derives == ["Clone", "Debug"]

    def test_empty_payload(self, record: RecordDef) -> None:
        assert DeriveVisitor().visit_record(of(""), record) is None

    def test_other_hooks_default_to_none(self, function: Function) -> None:
        assert DeriveVisitor().visit_function(of("Clone"), function) is None


class TestDeprecatedVisitor:
    @pytest.mark.parametrize(
        ("payload", "expected"),
        [
            (of(""), "#[deprecated]"),
            (of("use new-fn instead"), '#[deprecated = "use new-fn instead"]'),
            (
                of(since="1.2", note="gone"),
                '#[deprecated(since = "1.2", note = "gone")]',
            ),
            (of(note="gone"), '#[deprecated(note = "gone")]'),
            (of(reason="x"), None),
        ],
    )
    def test_attribute(self, payload: AnnotationPayload, expected: str | None) -> None:
        assert deprecated_attribute(payload) == expected

    def test_member_hooks(self, function: Function) -> None:
        visitor = DeprecatedVisitor()
        payload = of("use display-name")

        field = visitor.visit_field(payload, RecordField(name="legacy", type_ref="string"), 0)
        case = visitor.visit_variant_case(payload, Case(name="failed"), 1)
        func = visitor.visit_function(payload, function)

        assert field.attributes == ['#[deprecated = "use display-name"]']
        assert case.attributes == ['#[deprecated = "use display-name"]']
        assert func.attributes == ['#[deprecated = "use display-name"]']

    def test_malformed_payload(self, function: Function) -> None:
        assert DeprecatedVisitor().visit_function(of(unknown="x"), function) is None

    def test_bare_marker_next_to_key_value_form(self, function: Function) -> None:
        annotations = [
            Annotation(target="deprecated"),
            Annotation(target="deprecated", payload={"since": "1.2"}),
        ]
        contrib = DeprecatedVisitor().visit_function(
            payload_for(annotations, "deprecated"), function
        )
        assert contrib.attributes == ['#[deprecated(since = "1.2")]']

    def test_note_and_key_value_form_rejected(self) -> None:
        assert deprecated_attribute(of("use x", since="1.2")) is None

    def test_quotes_escaped(self) -> None:
        assert deprecated_attribute(of('use "new" \\ old')) == (
            '#[deprecated = "use \\"new\\" \\\\ old"]'
        )
        assert deprecated_attribute(of(note='say "hi"')) == (
            '#[deprecated(note = "say \\"hi\\"")]'
        )


class TestTracingVisitor:
    def test_default_level(self, function: Function) -> None:
        contrib = TracingVisitor().visit_function(of(""), function)
        assert contrib.attributes == ["#[tracing::instrument]"]
        assert contrib.body_prefix == ['tracing::debug!("Entering function: fetch-user");']

    def test_explicit_level(self, function: Function) -> None:
        contrib = TracingVisitor().visit_function(of("info"), function)
        assert contrib.body_prefix == ['tracing::info!("Entering function: fetch-user");']

    def test_invalid_level(self, function: Function) -> None:
        assert TracingVisitor().visit_function(of("loud"), function) is None

    def test_interface(self) -> None:
        contrib = TracingVisitor().visit_interface(of(""), Interface(name="users"))
        assert contrib.use_statements == ["use tracing;"]


class TestLoggingVisitor:
    def test_entry_and_exit(self, function: Function) -> None:
        contrib = LoggingVisitor().visit_function(of(""), function)

        assert contrib.body_prefix == [
            'println!("[ENTRY] fetch-user");',
            "println!(\"  param 'id' = {:?}\", id);",
            "println!(\"  param 'verbose' = {:?}\", verbose);",
        ]
        assert contrib.body_suffix == ['println!("[EXIT] fetch-user => {:?}", __wit_result);']

    def test_no_result(self) -> None:
        contrib = LoggingVisitor().visit_function(of(""), Function(name="reset"))
        assert contrib.body_prefix == ['println!("[ENTRY] reset");']
        assert contrib.body_suffix == ['println!("[EXIT] reset");']


class TestSinceVisitor:
    def test_function(self, function: Function) -> None:
        contrib = SinceVisitor().visit_function(of("1.4.0"), function)
        assert contrib.attributes == ['#[doc = "Since version: 1.4.0"]']

    def test_version_option(self, function: Function) -> None:
        contrib = SinceVisitor().visit_function(of(version="2.1"), function)
        assert contrib.attributes == ['#[doc = "Since version: 2.1"]']

    def test_interface_and_world(self) -> None:
        visitor = SinceVisitor()
        interface = visitor.visit_interface(of("1.0"), Interface(name="api"))
        world = visitor.visit_world(of("2.0.0"), World(name="app"))

        assert interface.additional_code == ["// Interface available since version: 1.0"]
        assert world.additional_code == ["// World available since version: 2.0.0"]

    def test_missing_version(self, function: Function) -> None:
        assert SinceVisitor().visit_function(of(""), function) is None


class TestValidateVisitor:
    def test_one_assert_per_condition(self, function: Function) -> None:
        contrib = ValidateVisitor().visit_function(of("id > 0", "id < 100"), function)
        assert contrib.body_prefix == [
            'assert!(id > 0, "Validation failed");',
            'assert!(id < 100, "Validation failed");',
        ]

    def test_empty(self, function: Function) -> None:
        assert ValidateVisitor().visit_function(of("  "), function) is None


class TestSerdeVisitor:
    def test_record_container(self, record: RecordDef) -> None:
        contrib = SerdeVisitor().visit_record(of(rename_all="camelCase"), record)
        assert contrib.derives == ["serde::Serialize", "serde::Deserialize"]
        assert contrib.attributes == ['#[serde(rename_all = "camelCase")]']

    def test_bare_serde(self, record: RecordDef) -> None:
        contrib = SerdeVisitor().visit_record(of(""), record)
        assert contrib.derives == ["serde::Serialize", "serde::Deserialize"]
        assert contrib.attributes == []

    def test_variant_tagging(self) -> None:
        contrib = SerdeVisitor().visit_variant(
            of(tag="type", content="data"), VariantDef(name="outcome", type_id=3)
        )
        assert contrib.attributes == ['#[serde(tag = "type", content = "data")]']

    def test_unknown_container_key(self, record: RecordDef) -> None:
        assert SerdeVisitor().visit_record(of(tag="type"), record) is None

    def test_field_options(self) -> None:
        field = RecordField(name="user-id", type_ref="u64")
        contrib = SerdeVisitor().visit_field(of(rename="userId", skip="true"), field, 0)
        assert contrib.attributes == ['#[serde(rename = "userId", skip)]']

    def test_field_false_flag_dropped(self) -> None:
        field = RecordField(name="email", type_ref="string")
        assert SerdeVisitor().visit_field(of(default="false"), field, 1) is None

    def test_case_rename(self) -> None:
        contrib = SerdeVisitor().visit_variant_case(of(rename="OK"), Case(name="ok"), 0)
        assert contrib.attributes == ['#[serde(rename = "OK")]']

    def test_rename_escaped(self) -> None:
        field = RecordField(name="id", type_ref="u64")
        contrib = SerdeVisitor().visit_field(of(rename='a"b'), field, 0)
        assert contrib.attributes == ['#[serde(rename = "a\\"b")]']

    def test_free_text_is_malformed(self) -> None:
        field = RecordField(name="email", type_ref="string")
        assert SerdeVisitor().visit_field(of("rename me"), field, 0) is None


class TestPythonVisitors:
    def test_dataclass_plain(self, record: RecordDef) -> None:
        contrib = PyDataclassVisitor().visit_record(of(""), record)
        assert contrib.decorators == ["@dataclass"]

    def test_dataclass_flags(self, record: RecordDef) -> None:
        contrib = PyDataclassVisitor().visit_record(of("frozen, slots"), record)
        assert contrib.decorators == ["@dataclass(frozen=True, slots=True)"]

    def test_dataclass_unknown_flag(self, record: RecordDef) -> None:
        assert PyDataclassVisitor().visit_record(of("mutable"), record) is None

    def test_dataclass_field(self) -> None:
        field = RecordField(name="id", type_ref="u64")
        contrib = PyDataclassVisitor().visit_field(of(default="0", repr="False"), field, 0)
        assert contrib.metadata == ["default=0", "repr=False"]

    def test_trace(self, function: Function) -> None:
        contrib = PyTraceVisitor().visit_function(of("info"), function)
        assert contrib.body_prologue == ['logger.info("Entering function: fetch-user")']

    def test_trace_interface(self) -> None:
        contrib = PyTraceVisitor().visit_interface(of(""), Interface(name="users"))
        assert contrib.imports == ["import logging"]
        assert contrib.additional_code == ["logger = logging.getLogger(__name__)"]
