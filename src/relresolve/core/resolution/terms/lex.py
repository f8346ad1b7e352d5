"""Lexer definitions for the Erlang data term grammar."""

from __future__ import annotations

import ply.lex

from relresolve.core.resolution.terms.model import Atom, TermSyntaxError, unescape

tokens = (
    # Literals
    "ATOM", "STRING", "INTEGER", "FLOAT",

    # Delimiters { } [ ] << >> #{ => , .
    "LBRACE", "RBRACE",
    "LBRACKET", "RBRACKET",
    "LBINARY", "RBINARY",
    "MAPSTART", "ARROW",
    "COMMA", "DOT",
)

# Completely ignored characters
t_ignore = " \t\r\x0c"

# Comments run to the end of the line
t_ignore_COMMENT = r"%[^\n]*"


def t_newline(t):
    r"\n+"
    t.lexer.lineno += len(t.value)


# Rules below are functions so they are tried in this order.

def t_FLOAT(t):
    r"-?\d+\.\d+(?:[eE][+-]?\d+)?"
    t.value = float(t.value)
    return t


def t_INTEGER(t):
    r"-?\d{1,2}\#[0-9A-Za-z]+|-?\d+|\$(?:\\.|.)"
    text = t.value
    if text.startswith("$"):
        t.value = ord(unescape(text[1:]))
    elif "#" in text:
        sign = -1 if text.startswith("-") else 1
        base, digits = text.lstrip("-").split("#", 1)
        try:
            t.value = sign * int(digits, int(base))
        except ValueError:
            raise TermSyntaxError(f"bad radix integer {text!r}", t.lexer.lineno) from None
    else:
        t.value = int(text)
    return t


def t_ATOM(t):
    r"[A-Za-z_][A-Za-z0-9_@]*|'(?:[^'\\]|\\.)*'"
    text = t.value
    if text.startswith("'"):
        t.lexer.lineno += text.count("\n")
        t.value = Atom(unescape(text[1:-1]))
    elif text[0].isupper() or text[0] == "_":
        raise TermSyntaxError(f"variables are not allowed in data terms: {text}", t.lexer.lineno)
    else:
        t.value = Atom(text)
    return t


def t_STRING(t):
    r'"(?:[^"\\]|\\.)*"'
    t.lexer.lineno += t.value.count("\n")
    t.value = unescape(t.value[1:-1])
    return t


def t_DOT(t):
    r"\.(?=\s|%|$)"
    return t


t_MAPSTART = r"\#\{"
t_ARROW = r"=>"
t_LBINARY = r"<<"
t_RBINARY = r">>"
t_LBRACE = r"\{"
t_RBRACE = r"\}"
t_LBRACKET = r"\["
t_RBRACKET = r"\]"
t_COMMA = r","


def t_error(t):
    raise TermSyntaxError(f"unexpected character {t.value[0]!r}", t.lexer.lineno)


lexer = ply.lex.lex()
