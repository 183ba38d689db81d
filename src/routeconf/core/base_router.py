"""Plugin-free router runtime (source of truth).

The module exposes :class:`BaseRouter`, which owns one route table compiled
from a route configuration file and answers both directions of routing:
forward binding (register every route on a host application) and reverse
binding (build a URL from ``controller.method`` plus parameters).
Subclasses add handler middleware but must preserve these semantics.

Constructor and options
-----------------------
Constructor signature::

    BaseRouter(options=None, **overrides)

``options`` is an optional mapping; ``overrides`` win over it. Keys are
merged with :func:`default_options` through ``SmartOptions``. ``None`` values
fall back to the default. Unknown keys raise ``TypeError``.

- ``controllers_path``: ``"app/controllers/"``, relative to ``root_path``.
- ``root_path``: current working directory at construction time.
- ``routes_file``: ``"config/routes.conf"``, relative to ``root_path``.
- ``template_var``: ``"routeconf"``, key under which ``bind_routes`` publishes
  the router into the host's template context.
- ``strict_values``: ``False``; when true, binding a non-scalar value raises
  ``UnserializableValue`` instead of dropping it.
- ``static_prefix``: ``"staticDir:"``, marks static-directory targets.
- ``wildcard``: ``"{method}"``, method token expanded per controller export.

Slots: ``options``, ``loader`` (controller ``ModuleLoader``), ``binder``
(``UrlBinder``), ``factory``, ``table`` (``RouteTable``), ``resolver``.

Table lifecycle
---------------
The table is empty at construction and built on the first ``get_routes()``
(or any call that needs it). Building reads the routes file once through
``read_routes_file``; later calls reuse the cached tuple. Each built entry is
passed to ``_after_entry_registered`` in table order.

Public API
----------
- ``get_routes()`` -> tuple of ``HandlerRoute``/``StaticMount`` in file order.
- ``bind_routes(host)`` -> publishes the router into the host context, then
  registers every entry through ``RouteBinder``; returns the registered
  ``(verb, pattern, handler)`` triples.
- ``bind_url(pattern, params=())`` -> ``UrlBinder.bind``.
- ``reverse(action, *params)`` -> ``ReverseResolver.reverse``. Calling the
  router itself is the same as ``reverse``, so templates can write
  ``routeconf("demos.index", 5)``.
- ``actions()``, ``entries_for(action)``, ``members()`` for introspection.

Hooks for subclasses
--------------------
- ``_wrap_handler(entry, call_next)``: wrap controller callables before they
  reach the host (default passthrough).
- ``_after_entry_registered(entry)``: invoked once per built entry.
- ``_describe_extra()``: extra keys merged into ``members()``.

Invariants
----------
- Entries keep configuration order; wildcard lines never reach the table.
- The routes file is read at most once per successful build.
- Binding never mutates caller objects.
- Nothing here is thread-safe; build the table before serving concurrently.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from smartseeds import SmartOptions

from .binder import UrlBinder
from .entries import HandlerRoute, RouteEntry, StaticMount
from .errors import RoutesFileUnreadable
from .factory import STATIC_PREFIX, WILDCARD_METHOD, RouteEntryFactory
from .loader import ModuleLoader
from .mount import Registration, RouteBinder
from .parser import RouteLine, parse_config, parse_lines
from .resolver import ReverseResolver
from .table import RouteTable

__all__ = ["BaseRouter", "default_options"]

logger = logging.getLogger("routeconf")


def default_options() -> Dict[str, Any]:
    return {
        "controllers_path": "app/controllers/",
        "root_path": os.getcwd(),
        "routes_file": "config/routes.conf",
        "template_var": "routeconf",
        "strict_values": False,
        "static_prefix": STATIC_PREFIX,
        "wildcard": WILDCARD_METHOD,
    }


class BaseRouter:
    """Route table owner answering forward and reverse routing.

    Responsibilities:
    - compile the routes file into an ordered table, once
    - register table entries on a host application
    - rebuild URLs from action identifiers and parameters
    - provide hooks for subclasses to wrap handlers
    """

    __slots__ = (
        "options",
        "loader",
        "binder",
        "factory",
        "table",
        "resolver",
    )

    def __init__(self, options: Optional[Mapping[str, Any]] = None, **overrides: Any) -> None:
        defaults = default_options()
        incoming: Dict[str, Any] = dict(options or {})
        incoming.update(overrides)
        unknown = sorted(set(incoming) - set(defaults))
        if unknown:
            raise TypeError(f"Unknown router options: {', '.join(unknown)}")
        self.options = SmartOptions(incoming, defaults=defaults, ignore_none=True)
        root = Path(self.options.root_path)
        self.loader = ModuleLoader(root / self.options.controllers_path)
        self.binder = UrlBinder(strict_values=bool(self.options.strict_values))
        self.factory = RouteEntryFactory(
            self.loader,
            static_root=root,
            static_prefix=self.options.static_prefix,
            wildcard=self.options.wildcard,
        )
        self.table = RouteTable(
            self._load_route_lines, self.factory, on_entry=self._after_entry_registered
        )
        self.resolver = ReverseResolver(self.table, self.binder)

    # ------------------------------------------------------------------
    # Configuration source
    # ------------------------------------------------------------------
    @property
    def routes_path(self) -> Path:
        return Path(self.options.root_path) / self.options.routes_file

    def read_routes_file(self, path: Path) -> List[str]:
        """Return the meaningful lines of the routes file at ``path``."""
        try:
            text = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise RoutesFileUnreadable(str(path), str(exc)) from exc
        return parse_lines(text)

    def _load_route_lines(self) -> List[RouteLine]:
        return parse_config(self.read_routes_file(self.routes_path))

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def get_routes(self) -> Tuple[RouteEntry, ...]:
        """Return the route table, building it on first use."""
        return self.table.ensure_built()

    def bind_routes(self, host: Any) -> List[Registration]:
        """Register every route on ``host`` and publish the router to its views."""
        routes = self.get_routes()
        return RouteBinder(self).mount(routes, host)

    def bind_url(self, pattern: str, params: Any = ()) -> str:
        """Substitute ``params`` into ``pattern``; see :mod:`routeconf.core.binder`."""
        return self.binder.bind(pattern, params)

    def reverse(self, action: str, *params: Any) -> str:
        """Return the URL of the first ``action`` route that ``params`` can fill."""
        return self.resolver.reverse(action, *params)

    __call__ = reverse

    def actions(self) -> Tuple[str, ...]:
        """Action identifiers in table order, without duplicates."""
        seen: Dict[str, None] = {}
        for entry in self.get_routes():
            if isinstance(entry, HandlerRoute):
                seen.setdefault(entry.action, None)
        return tuple(seen)

    def entries_for(self, action: str) -> Tuple[HandlerRoute, ...]:
        return tuple(self.table.matching(action))

    # ------------------------------------------------------------------
    # Handler resolution
    # ------------------------------------------------------------------
    def _handler_for(self, entry: HandlerRoute) -> Callable:
        func = self.loader.resolve(entry.controller, entry.method)
        return self._wrap_handler(entry, func)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------
    def members(self) -> Dict[str, Any]:
        """Describe the table: routes in order plus the patterns per action."""
        routes = [self._entry_member_info(entry) for entry in self.get_routes()]
        actions: Dict[str, List[str]] = {}
        for entry in self.get_routes():
            if isinstance(entry, HandlerRoute):
                actions.setdefault(entry.action, []).append(entry.pattern)
        result: Dict[str, Any] = {
            "routes_file": str(self.routes_path),
            "routes": routes,
            "actions": actions,
        }
        result.update(self._describe_extra())
        return result

    def _entry_member_info(self, entry: RouteEntry) -> Dict[str, Any]:
        if isinstance(entry, StaticMount):
            return {"verb": entry.verb, "pattern": entry.pattern, "static": entry.directory}
        return {
            "verb": entry.verb,
            "pattern": entry.pattern,
            "action": entry.action,
            "controller": entry.controller,
            "method": entry.method,
        }

    # ------------------------------------------------------------------
    # Hooks (no-op for BaseRouter)
    # ------------------------------------------------------------------
    def _wrap_handler(
        self, entry: HandlerRoute, call_next: Callable
    ) -> Callable:  # pragma: no cover - overridden by plugin routers
        return call_next

    def _after_entry_registered(
        self, entry: RouteEntry
    ) -> None:  # pragma: no cover - hook for subclasses
        """Hook invoked once per entry when the table is built."""
        return None

    def _describe_extra(self) -> Dict[str, Any]:  # pragma: no cover - hook for subclasses
        return {}
