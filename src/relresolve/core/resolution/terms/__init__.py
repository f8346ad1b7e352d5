"""Reader for the Erlang term syntax used by application resource files.

An ``.app`` file is a sequence of terms, each terminated by a full stop::

    %% comment
    {application, cowboy,
     [{description, "Small, fast, modern HTTP server."},
      {vsn, "2.10.0"},
      {env, [{opts, #{level => info}}]},
      {applications, [kernel, stdlib, crypto, cowlib, ranch]}]}.

``consult`` mirrors ``file:consult/1``: it returns the list of terms.

Mapping to Python:

- atoms become ``Atom`` (a ``str`` subclass, so they compare equal to names)
- strings become ``str``; binaries become ``bytes``
- tuples become ``tuple``; lists become ``list``; maps become ``dict``
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from relresolve.core.resolution.terms.model import Atom, TermSyntaxError
from relresolve.core.resolution.terms.parse import parse


def consult(text: str) -> list[Any]:
    """Parse every full-stop-terminated term in ``text``.

    Raises:
        TermSyntaxError: If ``text`` is not a valid sequence of data terms.
    """
    return parse(text)


def consult_file(path: Path) -> list[Any]:
    """Read and parse a term file.

    Raises:
        OSError: If the file cannot be read.
        UnicodeDecodeError: If the file is not valid UTF-8.
        TermSyntaxError: If the content is not a valid sequence of terms.
    """
    return consult(Path(path).read_text(encoding="utf-8"))


__all__ = ["Atom", "TermSyntaxError", "consult", "consult_file"]
