# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

from collections.abc import Callable
from typing import Any

import pytest

from progopts import (
    HELP_OPTION,
    DuplicateOptionError,
    NullValueError,
    Option,
    OptionParseError,
    OptionRegistry,
    OptionType,
    OptionTypeError,
    make_boolean_option,
    make_option,
    make_string_option,
)


@pytest.fixture
def registry() -> OptionRegistry:
    return OptionRegistry()


def test_attached_option_registers(registry: OptionRegistry) -> None:
    first = make_string_option(registry, "first", "x")
    second = make_option(registry, "second", OptionType.INT)

    assert registry["first"] is first
    assert registry["second"] is second
    assert first.seq == 1
    assert second.seq == 2
    assert not first.is_required
    assert second.is_required
    assert not first.found


def test_detached_option() -> None:
    option = Option.detached("standalone", None, OptionType.STRING)
    assert option.seq == 0
    assert option.is_required


@pytest.mark.parametrize("registry_given,name", [(False, "x"), (True, None)])
def test_null_values(registry: OptionRegistry, registry_given: bool, name: str | None) -> None:
    with pytest.raises(NullValueError):
        Option(registry if registry_given else None, name, "v", OptionType.STRING)


def test_detached_null_name() -> None:
    with pytest.raises(NullValueError):
        Option.detached(None, "v", OptionType.STRING)


def test_duplicate_option(registry: OptionRegistry) -> None:
    make_string_option(registry, "name", "a")
    with pytest.raises(DuplicateOptionError) as e:
        make_boolean_option(registry, "name", True)

    assert e.value.name == "name"
    assert isinstance(e.value, ValueError)
    assert len(registry) == 1


def test_boolean_factory(registry: OptionRegistry) -> None:
    on = make_boolean_option(registry, "on", True)
    off = make_boolean_option(registry, "off", False)

    assert on.is_bool
    assert on.value == "true"
    assert off.value == "false"
    assert on.as_boolean() is True
    assert off.as_boolean() is False


def test_make_option_never_toggles(registry: OptionRegistry) -> None:
    option = make_option(registry, "flag", OptionType.BOOLEAN, "true")
    assert option.type is OptionType.BOOLEAN
    assert not option.is_bool


@pytest.mark.parametrize(
    "type_,text,accessor,expected",
    [
        (OptionType.BYTE, "12", Option.as_byte, 12),
        (OptionType.SHORT, "-300", Option.as_short, -300),
        (OptionType.INT, "70000", Option.as_int, 70000),
        (OptionType.LONG, "5000000000", Option.as_long, 5000000000),
        (OptionType.FLOAT, "0.5", Option.as_float, 0.5),
        (OptionType.DOUBLE, "2.25", Option.as_double, 2.25),
        (OptionType.STRING, "text", Option.as_string, "text"),
    ],
)
def test_accessors(
    registry: OptionRegistry,
    type_: OptionType,
    text: str,
    accessor: Callable[[Option], Any],
    expected: Any,
) -> None:
    option = make_option(registry, "opt", type_, text)
    assert accessor(option) == expected


@pytest.mark.parametrize(
    "accessor",
    [
        Option.as_boolean,
        Option.as_byte,
        Option.as_short,
        Option.as_long,
        Option.as_float,
        Option.as_double,
        Option.as_string,
    ],
)
@pytest.mark.parametrize("text", ["1", "true", "abc", None])
def test_type_mismatch(
    registry: OptionRegistry, accessor: Callable[[Option], Any], text: str | None
) -> None:
    option = make_option(registry, "count", OptionType.INT, text)
    with pytest.raises(OptionTypeError) as e:
        accessor(option)

    assert e.value.name == "count"
    assert e.value.actual is OptionType.INT


def test_type_mismatch_int_accessor(registry: OptionRegistry) -> None:
    option = make_string_option(registry, "s", "1")
    with pytest.raises(OptionTypeError):
        option.as_int()


def test_required_unset_access(registry: OptionRegistry) -> None:
    number = make_option(registry, "number", OptionType.INT)
    text = make_string_option(registry, "text")

    with pytest.raises(OptionParseError):
        number.as_int()
    assert text.as_string() is None


def test_invalid_stored_value(registry: OptionRegistry) -> None:
    option = make_option(registry, "port", OptionType.SHORT, "99999")
    with pytest.raises(OptionParseError) as e:
        option.as_short()
    assert e.value.text == "99999"


def test_value_is_parsed_on_access(registry: OptionRegistry) -> None:
    option = make_option(registry, "level", OptionType.INT, "1")
    assert option.as_int() == 1
    option.value = "2"
    assert option.as_int() == 2


def test_as_string_list(registry: OptionRegistry) -> None:
    option = make_string_option(registry, "items", "a,b,,c")
    assert option.as_string_list(",") == ["a", "b", "c"]
    assert option.as_string_list(",", True) == ["a", ",", "b", ",", ",", "c"]


def test_as_string_list_type(registry: OptionRegistry) -> None:
    listing = make_option(registry, "listing", OptionType.STRING_LIST, "x y")
    number = make_option(registry, "number", OptionType.INT, "1")
    unset = make_string_option(registry, "unset")

    assert listing.as_string_list(" ") == ["x", "y"]
    with pytest.raises(OptionTypeError):
        listing.as_string()
    with pytest.raises(OptionTypeError):
        number.as_string_list(",")
    with pytest.raises(OptionParseError):
        unset.as_string_list(",")


@pytest.mark.parametrize(
    "factory,expected",
    [
        (lambda r: make_string_option(r, "name", "x"), "[-name value]"),
        (lambda r: make_string_option(r, "name"), "-name value"),
        (lambda r: make_boolean_option(r, "name", False), "[-name]"),
        (lambda r: Option(r, "name", None, OptionType.BOOLEAN, True), "-name"),
    ],
)
def test_usage_string(
    registry: OptionRegistry, factory: Callable[[OptionRegistry], Option], expected: str
) -> None:
    assert factory(registry).usage_string("-") == expected


def test_usage_string_prefix(registry: OptionRegistry) -> None:
    option = make_option(registry, "size", OptionType.INT)
    assert option.usage_string("--") == "--size value"


def test_ordering() -> None:
    registry = OptionRegistry()
    late = make_string_option(registry, "a", "1")
    early_detached = Option.detached("zz", "1", OptionType.STRING)
    other_detached = Option.detached("b", "1", OptionType.STRING)

    assert sorted([late, early_detached, other_detached]) == [
        other_detached,
        early_detached,
        late,
    ]


def test_equality_is_identity() -> None:
    other_help = Option.detached("help", "false", OptionType.BOOLEAN, True)
    assert other_help != HELP_OPTION
    assert hash(other_help) == hash(HELP_OPTION)


def test_str(registry: OptionRegistry) -> None:
    required = make_option(registry, "count", OptionType.INT)
    optional = make_boolean_option(registry, "debug", False)

    assert str(required) == (
        "Option : [name=count], [defaultValue=none (required)], [seq =1],"
        "[found =false],[type=int], [isBool=false], [value=None]"
    )
    assert str(optional) == (
        "Option : [name=debug], [defaultValue=false], [seq =2],"
        "[found =false],[type=boolean], [isBool=true], [value=false]"
    )
