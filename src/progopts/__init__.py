# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

from progopts.exceptions import (
    DuplicateOptionError,
    MalformedOptionError,
    MissingRequiredOptionError,
    MissingValueError,
    NullValueError,
    OptionError,
    OptionParseError,
    OptionTypeError,
    UnrecognizedOptionError,
)
from progopts.option import (
    HELP_OPTION,
    Option,
    make_boolean_option,
    make_option,
    make_string_option,
)
from progopts.registry import DEFAULT_OPTION_PREFIX, OptionRegistry, ParseResult
from progopts.types import OptionType

__all__ = [
    "DEFAULT_OPTION_PREFIX",
    "DuplicateOptionError",
    "HELP_OPTION",
    "MalformedOptionError",
    "MissingRequiredOptionError",
    "MissingValueError",
    "NullValueError",
    "Option",
    "OptionError",
    "OptionParseError",
    "OptionRegistry",
    "OptionType",
    "OptionTypeError",
    "ParseResult",
    "UnrecognizedOptionError",
    "make_boolean_option",
    "make_option",
    "make_string_option",
]
