"""Tests for the schema synthesizer."""

from __future__ import annotations

import enum
from typing import Any, Literal

import pytest
from pydantic import BaseModel, create_model

import partly_documented_commands
import sample_commands
from toolbridge.adapter.errors import UnsupportedShapeError
from toolbridge.adapter.metadata import (
    CommandMetadata,
    ParameterMetadata,
    SemanticType,
    StaticDefault,
    read_command,
)
from toolbridge.adapter.schema import (
    json_schema_for,
    resolve_default,
    synthesize,
    tool_name,
    zero_value,
)


class _Level(enum.Enum):
    LOW = 1
    HIGH = 2


class _Options(BaseModel):
    depth: int = 2
    verbose: bool = False


def _optional(annotation: Any, semantic: SemanticType, static: StaticDefault | None = None) -> ParameterMetadata:
    return ParameterMetadata(
        name="p",
        annotation=annotation,
        semantic_type=semantic,
        description="A parameter.",
        mandatory=False,
        static_default=static,
    )


class TestToolName:
    def test_hyphen_becomes_underscore(self) -> None:
        assert tool_name("Get-Greeting") == "Get_Greeting"

    def test_other_separators(self) -> None:
        assert tool_name("my.tool name") == "my_tool_name"

    def test_identifier_unchanged(self) -> None:
        assert tool_name("greet") == "greet"


class TestSynthesize:
    def test_single_mandatory_text_parameter(self) -> None:
        descriptor = synthesize(read_command(sample_commands.greet))
        schema = descriptor.input_schema
        assert descriptor.name == "greet"
        assert descriptor.description == "Return a greeting."
        assert schema["type"] == "object"
        assert schema["additionalProperties"] is False
        assert schema["required"] == ["name"]
        assert set(schema["properties"]) == {"name"}
        assert schema["properties"]["name"] == {"type": "string", "description": "Who to greet."}

    def test_optional_defaults(self) -> None:
        schema = synthesize(read_command(sample_commands.repeat)).input_schema
        props = schema["properties"]
        assert schema["required"] == ["text"]
        assert props["times"]["default"] == 0
        assert props["label"]["default"] == ""
        assert props["separator"]["default"] == " "
        assert props["shout"]["default"] is False
        assert "default" not in props["text"]

    def test_static_none_and_float_defaults(self) -> None:
        props = synthesize(read_command(sample_commands.tags)).input_schema["properties"]
        assert props["items"]["default"] is None
        assert props["limit"]["default"] == 1.5

    def test_no_parameters_has_no_required(self) -> None:
        schema = synthesize(read_command(sample_commands.get_value)).input_schema
        assert schema["properties"] == {}
        assert "required" not in schema

    def test_name_override(self) -> None:
        descriptor = synthesize(read_command(sample_commands.greet), name="hello")
        assert descriptor.name == "hello"

    def test_overloads_rejected(self) -> None:
        with pytest.raises(UnsupportedShapeError, match="2 overloaded signatures"):
            synthesize(read_command(partly_documented_commands.convert))

    def test_variadic_rejected(self) -> None:
        with pytest.raises(UnsupportedShapeError, match=r"\*names"):
            synthesize(read_command(partly_documented_commands.variadic))

    def test_nested_model_definitions_hoisted(self) -> None:
        meta = CommandMetadata(
            name="configure",
            description="Configure.",
            parameters=[
                ParameterMetadata(
                    name="options",
                    annotation=_Options,
                    semantic_type=SemanticType.OTHER,
                    description="Options.",
                    mandatory=True,
                ),
                ParameterMetadata(
                    name="many",
                    annotation=list[_Options],
                    semantic_type=SemanticType.OTHER,
                    description="More options.",
                    mandatory=True,
                ),
            ],
        )
        schema = synthesize(meta).input_schema
        assert "_Options" in schema["$defs"]
        assert "$defs" not in schema["properties"]["many"]
        assert schema["properties"]["many"]["items"] == {"$ref": "#/$defs/_Options"}

    def test_shared_definition_name_clash_rejected(self) -> None:
        first = create_model("Shared", a=(int, 0))
        second = create_model("Shared", b=(str, ""))
        meta = CommandMetadata(
            name="merge",
            description="Merge.",
            parameters=[
                ParameterMetadata(
                    name="left",
                    annotation=list[first],
                    semantic_type=SemanticType.OTHER,
                    description="Left side.",
                    mandatory=True,
                ),
                ParameterMetadata(
                    name="right",
                    annotation=list[second],
                    semantic_type=SemanticType.OTHER,
                    description="Right side.",
                    mandatory=True,
                ),
            ],
        )
        with pytest.raises(UnsupportedShapeError, match="'Shared'"):
            synthesize(meta)

    def test_same_model_twice_shares_definition(self) -> None:
        meta = CommandMetadata(
            name="pair",
            description="Pair.",
            parameters=[
                ParameterMetadata(
                    name=name,
                    annotation=list[_Options],
                    semantic_type=SemanticType.OTHER,
                    description="Options.",
                    mandatory=True,
                )
                for name in ("left", "right")
            ],
        )
        assert list(synthesize(meta).input_schema["$defs"]) == ["_Options"]


class TestResolveDefault:
    def test_static_wins(self) -> None:
        param = _optional(int, SemanticType.INTEGER, StaticDefault(7))
        assert resolve_default(param) == 7

    def test_static_tuple_made_jsonable(self) -> None:
        param = _optional(tuple, SemanticType.OTHER, StaticDefault((1, 2)))
        assert resolve_default(param) == [1, 2]

    def test_integer_zero(self) -> None:
        assert resolve_default(_optional(int, SemanticType.INTEGER)) == 0

    def test_text_empty(self) -> None:
        assert resolve_default(_optional(str, SemanticType.TEXT)) == ""

    def test_boolean_false(self) -> None:
        assert resolve_default(_optional(bool, SemanticType.BOOLEAN)) is False

    def test_other_default_constructed(self) -> None:
        assert resolve_default(_optional(float, SemanticType.OTHER)) == 0.0
        assert resolve_default(_optional(list[str], SemanticType.OTHER)) == []
        assert resolve_default(_optional(dict[str, int], SemanticType.OTHER)) == {}
        assert resolve_default(_optional(set[int], SemanticType.OTHER)) == []


class TestZeroValue:
    def test_enum_first_member_name(self) -> None:
        assert zero_value(_Level) == "LOW"

    def test_model_with_defaults(self) -> None:
        assert zero_value(_Options) == {"depth": 2, "verbose": False}

    def test_literal_first_choice(self) -> None:
        assert zero_value(Literal["a", "b"]) == "a"

    def test_optional_is_none(self) -> None:
        assert zero_value(float | None) is None

    def test_any_is_none(self) -> None:
        assert zero_value(Any) is None

    def test_unconstructible_is_none(self) -> None:
        class NeedsArgs:
            def __init__(self, x: int) -> None:
                self.x = x

        assert zero_value(NeedsArgs) is None


class TestJsonSchemaFor:
    def test_any_accepts_everything(self) -> None:
        assert json_schema_for(Any) == {}

    def test_list_of_int(self) -> None:
        assert json_schema_for(list[int]) == {"type": "array", "items": {"type": "integer"}}

    def test_arbitrary_class(self) -> None:
        class Opaque:
            pass

        assert json_schema_for(Opaque) == {}
