"""Shared pytest fixtures for codegen-hooks tests."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from dotenv import load_dotenv
from hypothesis import settings

from codegen_hooks.core import (
    Annotation,
    Case,
    EnumDef,
    Function,
    Interface,
    Param,
    RecordDef,
    RecordField,
    Schema,
    VariantDef,
)
from codegen_hooks.core.config import HooksConfig

# Load environment variables from .env file
load_dotenv()

# Configure hypothesis for property-based testing
settings.register_profile("ci", max_examples=100, deadline=None)
settings.register_profile("dev", max_examples=20, deadline=None)
settings.load_profile("dev")


@pytest.fixture
def config() -> HooksConfig:
    """Default configuration, isolated from the environment and .env files."""
    with patch.dict(os.environ, {}, clear=True):
        return HooksConfig(_env_file=None)


@pytest.fixture
def fixtures_path() -> Path:
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def user_record() -> RecordDef:
    return RecordDef(
        name="user",
        type_id=1,
        annotations=[
            Annotation(target="derive", payload="Clone, Debug"),
            Annotation(target="serde", payload={"rename_all": "camelCase"}),
        ],
        fields=[
            RecordField(
                name="user-id",
                type_ref="u64",
                annotations=[Annotation(target="serde", payload={"rename": "userId"})],
            ),
            RecordField(name="email", type_ref="string"),
            RecordField(
                name="legacy-name",
                type_ref="string",
                annotations=[Annotation(target="deprecated", payload="use display-name")],
            ),
        ],
    )


@pytest.fixture
def color_enum() -> EnumDef:
    return EnumDef(
        name="color",
        type_id=2,
        annotations=[Annotation(target="derive", payload="Clone, Debug")],
        cases=[Case(name="red"), Case(name="green"), Case(name="blue")],
    )


@pytest.fixture
def fetch_function() -> Function:
    return Function(
        name="fetch-user",
        params=[Param(name="id", type_ref="u64")],
        result="user",
        annotations=[
            Annotation(target="trace", payload="info"),
            Annotation(target="log"),
        ],
    )


@pytest.fixture
def sample_schema(user_record: RecordDef, color_enum: EnumDef, fetch_function: Function) -> Schema:
    """A small schema touching every built-in Rust visitor."""
    outcome = VariantDef(
        name="outcome",
        type_id=3,
        annotations=[Annotation(target="serde", payload={"tag": "type"})],
        cases=[
            Case(name="ok", type_ref="user"),
            Case(
                name="failed",
                type_ref="string",
                annotations=[Annotation(target="deprecated")],
            ),
        ],
    )
    remove = Function(
        name="remove-user",
        params=[Param(name="id", type_ref="u64")],
        annotations=[
            Annotation(target="validate", payload="id > 0"),
            Annotation(target="since", payload="1.4.0"),
        ],
    )
    users = Interface(
        name="users",
        package="example:app",
        annotations=[Annotation(target="trace")],
        types=[user_record, color_enum, outcome],
        functions=[fetch_function, remove],
    )
    return Schema(package="example:app", interfaces=[users])
