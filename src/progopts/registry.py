# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from collections.abc import Iterator, Sequence
from enum import Enum, unique

from progopts.exceptions import (
    DuplicateOptionError,
    MalformedOptionError,
    MissingRequiredOptionError,
    MissingValueError,
    NullValueError,
    UnrecognizedOptionError,
)
from progopts.log import get_logger
from progopts.option import HELP_OPTION, Option

logger = get_logger(__name__)

DEFAULT_OPTION_PREFIX = "-"


@unique
class ParseResult(Enum):
    """Outcome of :meth:`OptionRegistry.parse_options`."""

    #: All tokens were consumed and every required option was found.
    OK = "ok"
    #: The help option was given; the caller should print
    #: :meth:`OptionRegistry.usage` and terminate.
    HELP_REQUESTED = "help"


class OptionRegistry:
    """The options of one program, keyed by name.

    A registry is not thread safe. Callers sharing one between threads
    must serialize :meth:`add_option` and :meth:`parse_options` themselves.
    """

    def __init__(self, option_prefix: str = DEFAULT_OPTION_PREFIX, strict_prefix: bool = False):
        """
        :param option_prefix: Marker in front of each option name on the command line.
        :param strict_prefix: Reject tokens which do not start with ``option_prefix``.
                              By default the prefix length is cut off unchecked.
        """
        self.option_prefix = option_prefix
        self.strict_prefix = strict_prefix
        self.options: dict[str, Option] = {}

    def add_option(self, option: Option | None) -> int:
        """Adds ``option``; returns the number of options afterwards."""
        if option is None:
            raise NullValueError("can't add null option")
        if option.name in self.options:
            raise DuplicateOptionError(option.name)

        self.options[option.name] = option
        return len(self.options)

    def add_help_option(self) -> None:
        """Adds the shared help option, replacing any option named ``help``."""
        self.options[HELP_OPTION.name] = HELP_OPTION

    def _option_name(self, token: str) -> str:
        if self.strict_prefix and not token.startswith(self.option_prefix):
            raise MalformedOptionError(token, self.option_prefix)
        return token[len(self.option_prefix) :]

    def parse_options(self, args: Sequence[str]) -> ParseResult:
        """Matches ``args`` against the registered options.

        Boolean options flip their current value each time they occur;
        all other options take the following token as value. Options
        changed before an error is raised keep their new value.

        :param args: The raw tokens, e.g. ``sys.argv[1:]``.
        :return: :attr:`ParseResult.HELP_REQUESTED` as soon as the help
                 option is seen, :attr:`ParseResult.OK` otherwise.
        """
        i = 0
        while i < len(args):
            name = self._option_name(args[i])
            if (option := self.options.get(name)) is None:
                raise UnrecognizedOptionError(name)

            if option is HELP_OPTION:
                logger.debug("help option given, stopping at token %d", i)
                return ParseResult.HELP_REQUESTED

            if option.is_bool:
                option.toggle()
                i += 1
            else:
                if i + 1 >= len(args):
                    raise MissingValueError(option.name)
                option.value = args[i + 1]
                i += 2

            option.found = True
            logger.trace("%s = %s", option.name, option.value)

        for option in self.options.values():
            if option.is_required and not option.found:
                raise MissingRequiredOptionError(option.name)

        logger.debug("parsed %d tokens", len(args))
        return ParseResult.OK

    def sorted_options(self) -> list[Option]:
        return sorted(self.options.values())

    def printable_description(self) -> str:
        """Usage of all options; three per line in declaration order."""
        out = ""
        for i, option in enumerate(self.sorted_options()):
            out += " "
            out += option.usage_string(self.option_prefix)
            if (i + 1) % 3 == 0:
                out += "\n"
        return out

    def usage(self) -> str:
        return f"Usage : \n{self.printable_description()}"

    def __len__(self) -> int:
        return len(self.options)

    def __contains__(self, name: object) -> bool:
        return name in self.options

    def __getitem__(self, name: str) -> Option:
        return self.options[name]

    def __iter__(self) -> Iterator[Option]:
        return iter(self.sorted_options())

    def __str__(self) -> str:
        out = f"ProgramOptions : [optionPrefix={self.option_prefix}], "
        for option in self.options.values():
            out += f"{option}\n"
        return out
