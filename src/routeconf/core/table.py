"""Ordered, lazily built route table.

The table is filled once, on the first ``ensure_built()`` call, from a
``source`` callable returning parsed :class:`~routeconf.core.parser.RouteLine`
records. Later calls return the same tuple without touching the source again.

The built flag is a plain attribute: concurrent first access from several
threads is not supported, callers running in a threaded host must build the
table (``router.get_routes()``) before serving requests.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Iterator, List, Optional, Tuple

from .entries import HandlerRoute, RouteEntry
from .factory import RouteEntryFactory
from .parser import RouteLine

__all__ = ["RouteTable"]

logger = logging.getLogger("routeconf")


class RouteTable:
    """Route entries in configuration order, built on demand."""

    __slots__ = ("_source", "_factory", "_on_entry", "_entries")

    def __init__(
        self,
        source: Callable[[], Iterable[RouteLine]],
        factory: RouteEntryFactory,
        *,
        on_entry: Optional[Callable[[RouteEntry], None]] = None,
    ) -> None:
        self._source = source
        self._factory = factory
        self._on_entry = on_entry
        self._entries: Optional[Tuple[RouteEntry, ...]] = None

    @property
    def built(self) -> bool:
        return self._entries is not None

    def ensure_built(self) -> Tuple[RouteEntry, ...]:
        if self._entries is not None:
            return self._entries
        collected: List[RouteEntry] = []
        for line in self._source():
            collected.extend(self._factory.build(line.verb, line.path, line.target))
        if self._on_entry is not None:
            for entry in collected:
                self._on_entry(entry)
        self._entries = tuple(collected)
        logger.debug("Route table built with %d entries", len(collected))
        return self._entries

    def matching(self, action: str) -> Iterator[HandlerRoute]:
        """Yield handler routes for ``action`` in table order."""
        for entry in self.ensure_built():
            if isinstance(entry, HandlerRoute) and entry.action == action:
                yield entry

    def __iter__(self) -> Iterator[RouteEntry]:
        return iter(self.ensure_built())

    def __len__(self) -> int:
        return len(self.ensure_built())
