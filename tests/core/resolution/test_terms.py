"""Tests for the Erlang term reader used on ``.app`` files."""

from __future__ import annotations

import pytest

from relresolve.core.resolution.terms import Atom, TermSyntaxError, consult


class TestScalars:
    """Atoms, strings and numbers."""

    def test_bare_and_quoted_atoms(self) -> None:
        assert consult("foo. 'Hello World'.") == ["foo", "Hello World"]

    def test_atoms_are_atom_instances(self) -> None:
        [term] = consult("stdlib.")
        assert isinstance(term, Atom)
        assert term == "stdlib"

    def test_atom_with_at_and_digits(self) -> None:
        assert consult("node@host1.") == ["node@host1"]

    def test_string_escapes(self) -> None:
        assert consult(r'"a\"b\n".') == ['a"b\n']

    def test_adjacent_strings_concatenate(self) -> None:
        assert consult('"abc" "def".') == ["abcdef"]

    def test_strings_are_plain_str(self) -> None:
        [term] = consult('"1.0.0".')
        assert type(term) is str

    def test_integers_and_floats(self) -> None:
        assert consult("42. -7. 3.14. 1.0e3.") == [42, -7, 3.14, 1000.0]

    def test_radix_integer(self) -> None:
        assert consult("16#ff. 2#101.") == [255, 5]

    def test_character_literal(self) -> None:
        assert consult("$a. $\\n.") == [97, 10]


class TestCompound:
    """Tuples, lists and binaries."""

    def test_tuple_and_list(self) -> None:
        assert consult("{a, [1, 2], \"x\"}.") == [("a", [1, 2], "x")]

    def test_empty_containers(self) -> None:
        assert consult("{}. [].") == [(), []]

    def test_binary(self) -> None:
        assert consult('<<"abc">>. <<>>. <<1, 2>>.') == [b"abc", b"", b"\x01\x02"]

    def test_nested_application_term(self) -> None:
        text = (
            "%% cowboy app file\n"
            "{application, cowboy,\n"
            " [{description, \"Small, fast, modern HTTP server.\"},\n"
            "  {vsn, \"2.10.0\"}, % trailing comment\n"
            "  {applications, [kernel, stdlib, crypto, cowlib, ranch]}]}.\n"
        )
        [(tag, name, props)] = consult(text)
        assert tag == "application"
        assert name == "cowboy"
        assert ("vsn", "2.10.0") in props
        assert ("applications", ["kernel", "stdlib", "crypto", "cowlib", "ranch"]) in props

    def test_multiple_terms(self) -> None:
        assert consult("a.\nb.\n") == ["a", "b"]

    def test_empty_input(self) -> None:
        assert consult("%% only a comment\n") == []


class TestMaps:
    """Maps decode to dicts."""

    def test_map(self) -> None:
        assert consult("#{level => info, 1 => \"one\"}.") == [{"level": "info", 1: "one"}]

    def test_empty_map(self) -> None:
        assert consult("#{}.") == [{}]

    def test_nested_map_in_env(self) -> None:
        [term] = consult("{env, [{opts, #{handlers => [h1], meta => #{}}}]}.")
        assert term == ("env", [("opts", {"handlers": ["h1"], "meta": {}})])

    def test_tuple_keys(self) -> None:
        assert consult("#{{a, 1} => b}.") == [{("a", 1): "b"}]


class TestSyntaxErrors:
    """Malformed input raises TermSyntaxError."""

    @pytest.mark.parametrize(
        "text",
        [
            "{a, b}",            # missing full stop
            "{a, b.",            # unterminated tuple
            "[a | b].",          # improper list
            "{a, B}.",           # variable
            "{a b}.",            # missing comma
            "\"unterminated.",   # unterminated string
            "#.",                # stray character
            "#{a}.",             # map entry without =>
            "#{[a] => b}.",      # unhashable key
        ],
    )
    def test_rejected(self, text: str) -> None:
        with pytest.raises(TermSyntaxError):
            consult(text)

    def test_error_reports_line(self) -> None:
        with pytest.raises(TermSyntaxError) as excinfo:
            consult("ok.\n\n{a, B}.")
        assert excinfo.value.line == 3
