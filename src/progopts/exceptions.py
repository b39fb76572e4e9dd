# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from progopts.types import OptionType


# ****************
# * Base classes *
# ****************


class OptionError(Exception):
    def __init__(self, message: str | None = None):
        self.message = message

        super().__init__(message)

    def _message_core(self) -> str:
        return "invalid option usage"

    def __str__(self) -> str:
        message = self._message_core()

        if self.message is not None:
            message = f"{message}; {self.message}"

        return message

    def __repr__(self) -> str:
        return f"{type(self).__name__}({repr(str(self))})"


class NamedOptionError(OptionError):
    def __init__(self, name: str, message: str | None = None):
        self.name = name

        super().__init__(message)


# *********************************
# * Declaration and parse errors  *
# *********************************


class NullValueError(OptionError, ValueError):
    def _message_core(self) -> str:
        return "null values are not allowed"


class DuplicateOptionError(NamedOptionError, ValueError):
    def _message_core(self) -> str:
        return f"duplicate option: {self.name}"


class UnrecognizedOptionError(NamedOptionError, ValueError):
    def _message_core(self) -> str:
        return f"unrecognized option: {self.name}"


class MalformedOptionError(OptionError, ValueError):
    def __init__(self, token: str, prefix: str, message: str | None = None):
        self.token = token
        self.prefix = prefix

        super().__init__(message)

    def _message_core(self) -> str:
        return f"{self.token!r} does not start with {self.prefix!r}"


class MissingValueError(NamedOptionError, ValueError):
    def _message_core(self) -> str:
        return f"Missing value for option : {self.name}"


class MissingRequiredOptionError(NamedOptionError, ValueError):
    def _message_core(self) -> str:
        return f"Missing required option : {self.name}"


# *************************
# * Value access errors   *
# *************************


class OptionTypeError(NamedOptionError, TypeError):
    def __init__(
        self,
        name: str,
        expected: OptionType,
        actual: OptionType,
        message: str | None = None,
    ):
        self.expected = expected
        self.actual = actual

        super().__init__(name, message)

    def _message_core(self) -> str:
        return f"incorrect type: {self.name} is {self.actual.value}, not {self.expected.value}"


class OptionParseError(OptionError, ValueError):
    def __init__(self, type_: OptionType, text: str | None, message: str | None = None):
        self.type = type_
        self.text = text

        super().__init__(message)

    def _message_core(self) -> str:
        return f"{self.text!r} is not a valid {self.type.value} value"
