# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import sys
from collections.abc import Sequence
from typing import NoReturn

import exitcode

from progopts.config import Settings, load_settings
from progopts.exceptions import OptionError
from progopts.log import get_logger, setup_logging
from progopts.option import Option, make_boolean_option, make_option, make_string_option
from progopts.registry import OptionRegistry, ParseResult
from progopts.types import OptionType

logger = get_logger(__name__)


def _exit_with_usage(registry: OptionRegistry, code: int) -> NoReturn:
    print(registry.usage(), file=sys.stderr)
    sys.exit(code)


def parse_or_exit(
    registry: OptionRegistry,
    args: Sequence[str] | None = None,
    settings: Settings | None = None,
) -> None:
    """Parses ``args`` and terminates the process on help or bad input.

    This is the usual entry point for programs. The usage text is
    written to stderr in both cases.

    :param registry: The options of the program.
    :param args: The tokens to parse; defaults to ``sys.argv[1:]``.
    :param settings: Provides the exit codes; defaults to :class:`Settings`.
    """
    args = sys.argv[1:] if args is None else args
    settings = Settings() if settings is None else settings

    try:
        result = registry.parse_options(args)
    except OptionError as e:
        logger.error(e)
        _exit_with_usage(registry, settings.error_exit_code)

    if result is ParseResult.HELP_REQUESTED:
        _exit_with_usage(registry, settings.help_exit_code)


def build_demo_registry() -> OptionRegistry:
    registry = OptionRegistry()
    make_option(registry, "domain", OptionType.INT)
    make_string_option(registry, "topic", "Example")
    make_option(registry, "peers", OptionType.STRING_LIST, "localhost")
    make_option(registry, "rate", OptionType.DOUBLE, "1.0")
    make_boolean_option(registry, "verbose", False)
    registry.add_help_option()
    return registry


def _format_value(option: Option) -> str:
    match option.type:
        case OptionType.STRING_LIST:
            return ", ".join(option.as_string_list(","))
        case OptionType.INT:
            return str(option.as_int())
        case OptionType.DOUBLE:
            return str(option.as_double())
        case OptionType.BOOLEAN:
            return str(option.as_boolean()).lower()
        case OptionType.STRING:
            return str(option.as_string())
        case _:
            raise NotImplementedError(option.type)


def main(args: Sequence[str] | None = None) -> None:
    try:
        settings = load_settings()
    except (OSError, ValueError) as e:
        print(f"invalid config: {e}", file=sys.stderr)
        sys.exit(exitcode.CONFIG)

    setup_logging(level=settings.loglevel, color_mode=settings.color)

    registry = build_demo_registry()
    parse_or_exit(registry, args, settings)

    try:
        lines = [f"{o.name}: {_format_value(o)}" for o in registry if o.name != "help"]
    except OptionError as e:
        logger.error(e)
        _exit_with_usage(registry, settings.error_exit_code)

    for line in lines:
        print(line)

    sys.exit(exitcode.OK)


if __name__ == "__main__":
    main()
