"""PLY-based parser for the Erlang data term grammar.

Only the data subset is accepted: atoms, strings, numbers, tuples, proper
lists, maps and binaries built from string or integer segments. Variables,
operators and improper lists are syntax errors.
"""

from __future__ import annotations

import ply.yacc

from relresolve.core.resolution.terms import lex
from relresolve.core.resolution.terms.model import TermSyntaxError

# Grammar definitions for PLY.

tokens = lex.tokens
start = "terms"


def p_terms_0(p):
    """terms :"""
    p[0] = []


def p_terms_1(p):
    """terms : terms term DOT"""
    terms = p[0] = p[1]
    terms.append(p[2])


def p_term(p):
    """term : ATOM
       term : INTEGER
       term : FLOAT
       term : strings
       term : tuple
       term : list
       term : map
       term : binary"""
    p[0] = p[1]


def p_strings_0(p):
    """strings : STRING"""
    p[0] = p[1]


def p_strings_1(p):
    """strings : strings STRING"""
    # Adjacent string literals concatenate: "abc" "def" == "abcdef".
    p[0] = p[1] + p[2]


def p_tuple(p):
    """tuple : LBRACE RBRACE
       tuple : LBRACE elements RBRACE"""
    p[0] = tuple(p[2]) if len(p) == 4 else ()


def p_list(p):
    """list : LBRACKET RBRACKET
       list : LBRACKET elements RBRACKET"""
    p[0] = p[2] if len(p) == 4 else []


def p_elements_0(p):
    """elements : term"""
    p[0] = [p[1]]


def p_elements_1(p):
    """elements : elements COMMA term"""
    elements = p[0] = p[1]
    elements.append(p[3])


def p_map(p):
    """map : MAPSTART RBRACE
       map : MAPSTART associations RBRACE"""
    pairs = p[2] if len(p) == 4 else []
    try:
        p[0] = dict(pairs)
    except TypeError:
        raise TermSyntaxError("unsupported map key", p.lineno(1)) from None


def p_associations_0(p):
    """associations : association"""
    p[0] = [p[1]]


def p_associations_1(p):
    """associations : associations COMMA association"""
    associations = p[0] = p[1]
    associations.append(p[3])


def p_association(p):
    """association : term ARROW term"""
    p[0] = (p[1], p[3])


def p_binary(p):
    """binary : LBINARY RBINARY
       binary : LBINARY segments RBINARY"""
    p[0] = b"".join(p[2]) if len(p) == 4 else b""


def p_segments_0(p):
    """segments : segment"""
    p[0] = [p[1]]


def p_segments_1(p):
    """segments : segments COMMA segment"""
    segments = p[0] = p[1]
    segments.append(p[3])


def p_segment_string(p):
    """segment : strings"""
    p[0] = p[1].encode("utf-8")


def p_segment_integer(p):
    """segment : INTEGER"""
    p[0] = bytes([p[1] & 0xFF])


def p_error(t):
    if t is None:
        raise TermSyntaxError("unexpected end of input", parser.lexer.lineno)
    raise TermSyntaxError(f"unexpected {t.value!r}", t.lineno)


parser = ply.yacc.yacc(method="LALR", write_tables=False, debug=False)


def parse(text: str) -> list:
    """Parse ``text`` and return its terms in order.

    Raises:
        TermSyntaxError: If ``text`` is not a valid sequence of data terms.
    """
    lexer = lex.lexer.clone()
    lexer.lineno = 1
    parser.lexer = lexer
    return parser.parse(text, lexer=lexer)
