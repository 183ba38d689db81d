"""Route configuration parser.

The configuration language holds one route per line::

    # comment
    GET     /demos/:test        demos.index
    GET     /public             staticDir:public

``parse_lines`` drops blank lines and lines starting with ``#`` in the first
column; nothing else is trimmed. ``tokenize_line`` splits a surviving line on
runs of whitespace into ``(verb, path, target)``. Lines with fewer than three
fields are rejected here rather than surfacing later as a broken controller
reference. Extra fields are ignored with a warning.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Tuple, Union

from .errors import MalformedRouteLine

__all__ = ["RouteLine", "parse_lines", "tokenize_line", "parse_config"]

logger = logging.getLogger("routeconf")

_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class RouteLine:
    lineno: int
    verb: str
    path: str
    target: str


def _is_ignored(line: str) -> bool:
    return line == "" or line.startswith("#")


def parse_lines(text: str) -> List[str]:
    """Return the meaningful lines of ``text`` in source order."""
    return [line for _, line in _numbered_lines(text)]


def _numbered_lines(text: str) -> Iterator[Tuple[int, str]]:
    for lineno, line in enumerate(text.split("\n"), start=1):
        if line.endswith("\r"):
            line = line[:-1]
        if _is_ignored(line):
            continue
        yield lineno, line


def tokenize_line(line: str, lineno: Optional[int] = None) -> Tuple[str, str, str]:
    """Split ``line`` into ``(verb, path, target)``."""
    fields = [field for field in _WHITESPACE.split(line) if field]
    if len(fields) < 3:
        raise MalformedRouteLine(
            line, "expected '<VERB> <path> <controller>.<method>'", lineno
        )
    if len(fields) > 3:
        logger.warning(
            "Ignoring extra fields %r in route line %s", fields[3:], lineno or line
        )
    verb, path, target = fields[:3]
    return verb, path, target


def parse_config(source: Union[str, Iterable[str]]) -> List[RouteLine]:
    """Parse raw configuration text (or pre-split lines) into ``RouteLine`` records."""
    if isinstance(source, str):
        numbered = list(_numbered_lines(source))
    else:
        numbered = [
            (lineno, line)
            for lineno, line in enumerate(source, start=1)
            if not _is_ignored(line)
        ]
    result: List[RouteLine] = []
    for lineno, line in numbered:
        verb, path, target = tokenize_line(line, lineno)
        result.append(RouteLine(lineno=lineno, verb=verb, path=path, target=target))
    return result
