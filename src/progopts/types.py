# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import math
import re
import struct
from enum import Enum, unique

from progopts.exceptions import OptionParseError

_INTEGER = re.compile(r"[+-]?[0-9]+")
_DECIMAL = re.compile(
    r"[+-]?(?:NaN|Infinity|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?[fFdD]?)"
)


def _parse_integer(text: str, bits: int) -> int:
    if _INTEGER.fullmatch(text) is None:
        raise ValueError(f"invalid literal {text!r}")

    value = int(text, 10)
    limit = 1 << (bits - 1)
    if not -limit <= value < limit:
        raise ValueError(f"{value} out of range for {bits} bit integer")
    return value


def _parse_decimal(text: str) -> float:
    text = text.strip()
    if _DECIMAL.fullmatch(text) is None:
        raise ValueError(f"invalid literal {text!r}")

    if text[-1] in "fFdD":
        text = text[:-1]
    # float() spells these differently.
    text = text.replace("Infinity", "inf").replace("NaN", "nan")
    return float(text)


def _to_single(value: float) -> float:
    try:
        return struct.unpack("f", struct.pack("f", value))[0]  # type: ignore[no-any-return]
    except OverflowError:
        return math.copysign(math.inf, value)


@unique
class OptionType(Enum):
    """The kinds of values an option can hold.

    Option values are always stored as text; :meth:`parse` converts
    that text on demand and never caches the result.
    """

    BOOLEAN = "boolean"
    BYTE = "byte"
    SHORT = "short"
    INT = "int"
    LONG = "long"
    FLOAT = "float"
    DOUBLE = "double"
    STRING = "string"
    STRING_LIST = "string-list"

    @property
    def is_bool(self) -> bool:
        return self is OptionType.BOOLEAN

    @property
    def is_text(self) -> bool:
        return self in (OptionType.STRING, OptionType.STRING_LIST)

    def parse(self, text: str | None) -> bool | int | float | str | None:
        """Converts ``text`` according to the textual rules of this kind.

        :param text: The stored option value; ``None`` means unset.
        :raises OptionParseError: If ``text`` is not valid for this kind.
        """
        if self.is_text:
            return text
        if text is None:
            raise OptionParseError(self, text, "value is unset")

        try:
            match self:
                case OptionType.BOOLEAN:
                    match text.lower():
                        case "true":
                            return True
                        case "false":
                            return False
                        case _:
                            raise ValueError("expected true or false")
                case OptionType.BYTE:
                    return _parse_integer(text, 8)
                case OptionType.SHORT:
                    return _parse_integer(text, 16)
                case OptionType.INT:
                    return _parse_integer(text, 32)
                case OptionType.LONG:
                    return _parse_integer(text, 64)
                case OptionType.FLOAT:
                    return _to_single(_parse_decimal(text))
                case OptionType.DOUBLE:
                    return _parse_decimal(text)
        except ValueError as e:
            raise OptionParseError(self, text, str(e)) from e

        raise NotImplementedError(self)
