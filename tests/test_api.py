"""End-to-end tests for to_text/from_text."""

from dataclasses import dataclass
from enum import Enum
from typing import Literal, NewType

import pytest
from pydantic import BaseModel, Field, RootModel

from vdfcodec import from_text, parse, to_text
from vdfcodec.errors import (
    DocumentNameError,
    NestingTooDeep,
    ParseError,
    UnknownVariant,
    UnresolvedAnnotation,
    UnsupportedShape,
)
from vdfcodec.scalars import F32, F64, I8, I16, I32, I64, U8, U16, U32, U64, Char


@dataclass
class Inner:
    bonus_content: U8
    coolness: F64


@dataclass
class Example:
    thing: str
    other_thing: bool
    more_stuff: Inner


EXAMPLE_TEXT = (
    '"Example"\n'
    "{\n"
    '\t"thing"\t"hello"\n'
    '\t"other_thing"\t"1"\n'
    '\t"more_stuff"\n'
    "\t{\n"
    '\t\t"bonus_content"\t"69"\n'
    '\t\t"coolness"\t"420.1337"\n'
    "\t}\n"
    "}"
)

EXAMPLE_VALUE = Example(thing="hello", other_thing=True, more_stuff=Inner(bonus_content=69, coolness=420.1337))


class Mode(Enum):
    A = 1
    B = 2


Handle = NewType("Handle", U32)


@dataclass
class KitchenSink:
    flag: bool
    tiny: I8
    short: I16
    medium: I32
    wide: I64
    byte: U8
    word: U16
    dword: U32
    qword: U64
    single: F32
    double: float
    letter: Char
    text: str
    mode: Mode
    speed: Literal["fast", "slow"]
    handle: Handle
    lookup: dict[str, int]
    children: dict[str, Inner]


class Folders(RootModel[dict[str, str]]):
    pass


class AppState(BaseModel):
    app_id: U32 = Field(alias="appid")
    name: str
    state_flags: U16 = Field(alias="StateFlags")


# ---------------------------------------------------------------------------
# round trips
# ---------------------------------------------------------------------------

def test_example_renders_exactly():
    assert to_text(EXAMPLE_VALUE, "Example") == EXAMPLE_TEXT

def test_example_parses_back():
    assert from_text(EXAMPLE_TEXT, Example) == EXAMPLE_VALUE

def test_record_name_is_the_default_document_name():
    assert to_text(EXAMPLE_VALUE) == EXAMPLE_TEXT

def test_kitchen_sink_round_trip():
    value = KitchenSink(
        flag=False,
        tiny=-128,
        short=32767,
        medium=-(2**31),
        wide=2**63 - 1,
        byte=255,
        word=0,
        dword=2**32 - 1,
        qword=2**64 - 1,
        single=0.3,
        double=0.1 + 0.2,
        letter='"',
        text='tab\there "quoted" and \\ slash\nnewline',
        mode=Mode.B,
        speed="slow",
        handle=Handle(12),
        lookup={"z": 1, "a": -1},
        children={"first": Inner(1, 1.5), "second": Inner(2, -0.0)},
    )
    text = to_text(value, "Sink")
    assert from_text(text, KitchenSink) == value

def test_text_round_trip_is_stable():
    text = to_text(EXAMPLE_VALUE)
    assert to_text(from_text(text, Example)) == text

def test_root_model_document():
    folders = Folders({"0": r"C:\Program Files (x86)\Steam", "1": r"D:\SteamLibrary"})
    text = to_text(folders, "libraryfolders")
    assert text == (
        '"libraryfolders"\n'
        "{\n"
        '\t"0"\t"C:\\\\Program Files (x86)\\\\Steam"\n'
        '\t"1"\t"D:\\\\SteamLibrary"\n'
        "}"
    )
    assert from_text(text, Folders) == folders

def test_pydantic_model_document():
    state = AppState(appid=440, name="Team Fortress 2", StateFlags=4)
    text = to_text(state, "AppState")
    assert '\t"appid"\t"440"' in text
    assert from_text(text, AppState) == state

def test_informal_text_into_a_type():
    text = "Example { thing hello more_stuff { coolness 420.1337 bonus_content 69 } other_thing 1 }"
    assert from_text(text, Example) == EXAMPLE_VALUE

def test_top_level_variant_and_scalar():
    assert to_text(Mode.A) == '"Mode"\t"A"'
    assert from_text('"Mode"\t"A"', Mode) is Mode.A
    assert to_text(5, "count") == '"count"\t"5"'
    assert from_text('"count"\t"5"', int) == 5


# ---------------------------------------------------------------------------
# document names
# ---------------------------------------------------------------------------

def test_map_needs_a_name():
    with pytest.raises(DocumentNameError):
        to_text({"a": "b"})
    assert to_text({"a": "b"}, "Config") == '"Config"\n{\n\t"a"\t"b"\n}'

def test_scalar_needs_a_name():
    with pytest.raises(DocumentNameError):
        to_text(5)

def test_expected_name():
    assert from_text(EXAMPLE_TEXT, Example, name="Example") == EXAMPLE_VALUE
    with pytest.raises(DocumentNameError):
        from_text(EXAMPLE_TEXT, Example, name="Other")

def test_unsupported_shape_wins_over_missing_name():
    with pytest.raises(UnsupportedShape):
        to_text([1, 2])
    with pytest.raises(UnsupportedShape):
        to_text(None)


# ---------------------------------------------------------------------------
# errors and config
# ---------------------------------------------------------------------------

def test_unknown_variant_in_text():
    with pytest.raises(UnknownVariant):
        from_text('"Mode"\t"C"', Mode)

def test_malformed_text():
    with pytest.raises(ParseError):
        from_text('"Example" {', Example)

def test_parser_config_is_passed_through():
    with pytest.raises(ParseError, match="maximum depth"):
        from_text(EXAMPLE_TEXT, Example, config={"parser_config": {"max_depth": 1}})

def test_bridge_config_is_passed_through():
    with pytest.raises(NestingTooDeep):
        to_text(EXAMPLE_VALUE, config={"bridge_config": {"max_depth": 1}})

def test_lexer_config_is_passed_through():
    text = '"Doc" { "a" "b" // note here\n}'
    with pytest.raises(ParseError):
        parse(text, config={"lexer_config": {"skip_comments": False}})
    assert parse(text).get("Doc").get("a") == "b"

def test_unknown_config_option():
    with pytest.raises(ValueError, match="Unknown config option"):
        to_text(EXAMPLE_VALUE, config={"formatter_config": {}})

def test_record_with_unresolvable_reference():
    @dataclass
    class LocalInner:
        value: int

    @dataclass
    class LocalOuter:
        inner: "LocalInner"

    with pytest.raises(UnresolvedAnnotation, match="LocalInner") as excinfo:
        to_text(LocalOuter(LocalInner(1)))
    assert not isinstance(excinfo.value, UnsupportedShape)
    with pytest.raises(UnresolvedAnnotation):
        from_text('"LocalOuter" { "inner" { "value" "1" } }', LocalOuter)
