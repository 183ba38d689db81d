"""Forward binding: register the route table on a host web application.

The host is anything satisfying :class:`HostApp`. Hosts that predate the
protocol are accepted when they expose per-verb registration methods
(``host.get(pattern, handler)``, ``host.post(...)``) and a ``locals`` mapping
instead of ``context``.
"""

from __future__ import annotations

import logging
from collections.abc import MutableMapping
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, List, Optional, Protocol, Tuple

from .entries import HandlerRoute, StaticMount
from .errors import StaticPathInvalid

if TYPE_CHECKING:  # pragma: no cover - import for typing only
    from .base_router import BaseRouter

__all__ = ["HostApp", "RouteBinder", "Registration"]

logger = logging.getLogger("routeconf")

Registration = Tuple[str, str, Callable]


class HostApp(Protocol):
    """What a host web application must offer to receive routes."""

    context: MutableMapping

    def register(self, verb: str, pattern: str, handler: Callable) -> Any: ...

    def mount_static(self, pattern: str, directory: str) -> Any: ...


class RouteBinder:
    """Walk a router's table and register each entry with a host."""

    __slots__ = ("router",)

    def __init__(self, router: "BaseRouter") -> None:
        self.router = router

    def mount(self, table, host: Any) -> List[Registration]:
        self.publish(host)
        registered: List[Registration] = []
        for entry in table:
            if isinstance(entry, StaticMount):
                self._mount_static(entry, host)
                continue
            handler = self.router._handler_for(entry)
            self._register(host, entry, handler)
            registered.append((entry.verb, entry.pattern, handler))
        logger.debug("Mounted %d handler routes on %r", len(registered), host)
        return registered

    def publish(self, host: Any) -> None:
        """Expose the router to templates under ``template_var``."""
        context = self._context_of(host)
        if context is None:
            raise TypeError(f"Host {host!r} exposes neither 'context' nor 'locals'")
        context[self.router.options.template_var] = self.router

    def _mount_static(self, entry: StaticMount, host: Any) -> None:
        if not Path(entry.directory).is_dir():
            raise StaticPathInvalid(entry.directory)
        host.mount_static(entry.pattern, entry.directory)
        logger.debug("Mounted static directory %s at %s", entry.directory, entry.pattern)

    def _register(self, host: Any, entry: HandlerRoute, handler: Callable) -> None:
        register = getattr(host, "register", None)
        if callable(register):
            register(entry.verb, entry.pattern, handler)
            return
        per_verb = getattr(host, entry.verb, None)
        if not callable(per_verb):
            raise TypeError(f"Host {host!r} cannot register '{entry.verb}' routes")
        per_verb(entry.pattern, handler)

    @staticmethod
    def _context_of(host: Any) -> Optional[MutableMapping]:
        for attr in ("context", "locals"):
            value = getattr(host, attr, None)
            if isinstance(value, MutableMapping):
                return value
        return None

