# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from collections.abc import Iterator


def iter_tokens(text: str, delimiters: str, return_delimiters: bool = False) -> Iterator[str]:
    """
    Splits ``text`` on any character contained in ``delimiters``.

    Empty tokens between consecutive delimiters are skipped.
    If ``return_delimiters`` is set, every delimiter character is
    yielded as a token of its own at its original position.

    Example: "a,b;;c" with delimiters ",;" -> a b c
    """
    start = 0
    for i, char in enumerate(text):
        if char not in delimiters:
            continue
        if i > start:
            yield text[start:i]
        if return_delimiters:
            yield char
        start = i + 1

    if start < len(text):
        yield text[start:]


def tokenize(text: str, delimiters: str, return_delimiters: bool = False) -> list[str]:
    return list(iter_tokens(text, delimiters, return_delimiters))
