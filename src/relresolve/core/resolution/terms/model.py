"""Python values produced by the term reader."""

from __future__ import annotations

import re

_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "s": " ",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "e": "\x1b",
    "d": "\x7f",
    "0": "\0",
}


class Atom(str):
    """An Erlang atom. Compares and hashes like the plain string."""

    __slots__ = ()

    def __repr__(self) -> str:
        return f"Atom({str.__repr__(self)})"


class TermSyntaxError(ValueError):
    """Raised when text is not a valid sequence of data terms."""

    def __init__(self, message: str, line: int) -> None:
        self.line = line
        super().__init__(f"line {line}: {message}")


def unescape(body: str) -> str:
    """Resolve backslash escapes inside a quoted string or atom body."""
    return re.sub(r"\\(.)", lambda m: _ESCAPES.get(m.group(1), m.group(1)), body, flags=re.DOTALL)
