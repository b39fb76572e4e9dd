# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Self

from progopts.exceptions import NullValueError, OptionParseError, OptionTypeError
from progopts.types import OptionType
from progopts.utils import tokenize

if TYPE_CHECKING:
    from progopts.registry import OptionRegistry


class Option:
    """A single named and typed command line setting.

    The value is kept as text and converted by the ``as_*`` accessors
    on every call. An option created without a default is required:
    :meth:`OptionRegistry.parse_options` fails if it never shows up.

    Options sort by declaration order (``seq``) and then by name, which
    keeps related options together in the usage text.
    """

    name: str
    type: OptionType
    is_bool: bool
    value: str | None
    is_required: bool
    found: bool
    seq: int

    def __init__(
        self,
        registry: OptionRegistry | None,
        name: str | None,
        default: str | None,
        type_: OptionType,
        is_bool: bool = False,
    ) -> None:
        """Creates an option and adds it to ``registry``.

        :param registry: The registry the option belongs to.
        :param name: The name used on the command line, without prefix.
        :param default: The initial value, or None if the option is required.
        :param type_: The kind of value this option holds.
        :param is_bool: Whether the option toggles instead of taking a value.
        """
        if registry is None or name is None:
            raise NullValueError()

        self._setup(name, default, type_, is_bool)
        self.seq = registry.add_option(self)

    @classmethod
    def detached(
        cls,
        name: str | None,
        default: str | None,
        type_: OptionType,
        is_bool: bool = False,
    ) -> Self:
        """Creates an option which does not belong to any registry.

        This is meant for shared options such as :data:`HELP_OPTION`;
        the sequence number is fixed to 0.
        """
        if name is None:
            raise NullValueError()

        option = cls.__new__(cls)
        option._setup(name, default, type_, is_bool)
        option.seq = 0
        return option

    def _setup(self, name: str, default: str | None, type_: OptionType, is_bool: bool) -> None:
        self.name = name
        self.value = default
        self.type = type_
        self.is_bool = is_bool
        self.is_required = default is None
        self.found = False

    def usage_string(self, option_prefix: str) -> str:
        """Describes how this option is used on the command line."""
        usage = f"{option_prefix}{self.name}"
        if not self.is_bool:
            usage += " value"
        if not self.is_required:
            usage = f"[{usage}]"
        return usage

    def toggle(self) -> None:
        self.value = "false" if (self.value or "").lower() == "true" else "true"

    def __str__(self) -> str:
        default = "none (required)" if self.is_required else self.value
        return (
            "Option : "
            f"[name={self.name}], "
            f"[defaultValue={default}], "
            f"[seq ={self.seq}],"
            f"[found ={str(self.found).lower()}],"
            f"[type={self.type.value}], "
            f"[isBool={str(self.is_bool).lower()}], "
            f"[value={self.value}]"
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r}, {self.type.value}, seq={self.seq})"

    # Equality stays identity based; the help option relies on it.
    def __hash__(self) -> int:
        return hash(self.name)

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, Option):
            return NotImplemented
        return (self.seq, self.name) < (other.seq, other.name)

    def _checked(self, type_: OptionType) -> Any:
        if type_ is not self.type:
            raise OptionTypeError(self.name, type_, self.type)
        return type_.parse(self.value)

    def as_boolean(self) -> bool:
        return bool(self._checked(OptionType.BOOLEAN))

    def as_byte(self) -> int:
        return int(self._checked(OptionType.BYTE))

    def as_short(self) -> int:
        return int(self._checked(OptionType.SHORT))

    def as_int(self) -> int:
        return int(self._checked(OptionType.INT))

    def as_long(self) -> int:
        return int(self._checked(OptionType.LONG))

    def as_float(self) -> float:
        return float(self._checked(OptionType.FLOAT))

    def as_double(self) -> float:
        return float(self._checked(OptionType.DOUBLE))

    def as_string(self) -> str | None:
        return self._checked(OptionType.STRING)  # type: ignore[no-any-return]

    def as_string_list(self, delimiters: str, return_delimiters: bool = False) -> list[str]:
        """Splits the value on any character in ``delimiters``.

        Works for ``STRING`` and ``STRING_LIST`` options. Empty pieces
        are dropped; with ``return_delimiters`` the delimiter characters
        are kept as separate elements.
        """
        if not self.type.is_text:
            raise OptionTypeError(self.name, OptionType.STRING_LIST, self.type)
        if self.value is None:
            raise OptionParseError(self.type, self.value, "value is unset")
        return tokenize(self.value, delimiters, return_delimiters)


def make_string_option(
    registry: OptionRegistry, name: str, default: str | None = None
) -> Option:
    return Option(registry, name, default, OptionType.STRING)


def make_boolean_option(registry: OptionRegistry, name: str, default: bool) -> Option:
    """Creates a boolean option; giving it on the command line flips ``default``."""
    return Option(registry, name, "true" if default else "false", OptionType.BOOLEAN, True)


def make_option(
    registry: OptionRegistry,
    name: str,
    type_: OptionType,
    default: str | None = None,
) -> Option:
    """Creates an option of any kind.

    Prefer :func:`make_string_option` or :func:`make_boolean_option`
    where they fit. Options created here never toggle, even for
    :attr:`OptionType.BOOLEAN`; they take a value like any other.
    """
    return Option(registry, name, default, type_, False)


HELP_OPTION = Option.detached("help", "false", OptionType.BOOLEAN, True)
"""
Shared help option, see :meth:`OptionRegistry.add_help_option`.
It is matched by identity, so a separately created option named
``help`` does not trigger the usage output.
"""
