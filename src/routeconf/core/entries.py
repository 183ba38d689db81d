"""Route entry records.

A route table only ever holds two kinds of entry:

- :class:`HandlerRoute` binds ``verb pattern`` to ``controller.method``.
- :class:`StaticMount` exposes a filesystem directory under ``pattern``.

:class:`WildcardRoute` is the third shape a configuration line can take
(``controller.{method}``). The factory expands it into ``HandlerRoute``
records before the table is populated; consumers never see it.

All records are frozen dataclasses and validate their verb on construction.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union

from .errors import UnrecognisedVerb

__all__ = [
    "HTTP_VERBS",
    "HandlerRoute",
    "StaticMount",
    "WildcardRoute",
    "RouteEntry",
    "normalize_verb",
]

HTTP_VERBS: Tuple[str, ...] = ("delete", "get", "post", "put")


def normalize_verb(verb: str, path: str) -> str:
    """Lower-case ``verb`` and check it against :data:`HTTP_VERBS`."""
    normalized = verb.lower()
    if normalized not in HTTP_VERBS:
        raise UnrecognisedVerb(verb, path)
    return normalized


@dataclass(frozen=True)
class _BaseEntry:
    verb: str
    pattern: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "verb", normalize_verb(self.verb, self.pattern))


@dataclass(frozen=True)
class HandlerRoute(_BaseEntry):
    """Route served by a named callable on a controller module."""

    controller: str
    method: str

    @property
    def action(self) -> str:
        return f"{self.controller}.{self.method}"


@dataclass(frozen=True)
class StaticMount(_BaseEntry):
    """Route serving files from ``directory``."""

    directory: str


@dataclass(frozen=True)
class WildcardRoute(_BaseEntry):
    """Unexpanded ``controller.{method}`` line; lives only inside the factory."""

    controller: str

    def __post_init__(self) -> None:
        # Checked on each expanded entry instead.
        pass


RouteEntry = Union[HandlerRoute, StaticMount]
