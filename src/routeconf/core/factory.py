"""Turn one configuration line into route entries.

``RouteEntryFactory.build(verb, path, target)`` returns a list because a
wildcard target (``pages.{method}``) becomes one :class:`HandlerRoute` per
callable the controller exports. The static sentinel (``staticDir:public``)
is checked on the whole target before any ``.`` splitting, so directory
names may contain dots.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Union

from .entries import HandlerRoute, RouteEntry, StaticMount, WildcardRoute
from .errors import MalformedRouteLine
from .loader import ModuleLoader, exported_callables

__all__ = ["RouteEntryFactory", "STATIC_PREFIX", "WILDCARD_METHOD"]

logger = logging.getLogger("routeconf")

STATIC_PREFIX = "staticDir:"
WILDCARD_METHOD = "{method}"


class RouteEntryFactory:
    """Build route entries, expanding wildcard lines through ``loader``."""

    __slots__ = ("loader", "static_root", "static_prefix", "wildcard")

    def __init__(
        self,
        loader: ModuleLoader,
        *,
        static_root: Optional[Union[str, Path]] = None,
        static_prefix: str = STATIC_PREFIX,
        wildcard: str = WILDCARD_METHOD,
    ) -> None:
        self.loader = loader
        self.static_root = Path(static_root) if static_root is not None else None
        self.static_prefix = static_prefix
        self.wildcard = wildcard

    def build(self, verb: str, path: str, target: str) -> List[RouteEntry]:
        if target.startswith(self.static_prefix):
            return [StaticMount(verb, path, self._static_directory(target))]
        controller, _, method = target.partition(".")
        if not controller or not method:
            raise MalformedRouteLine(
                f"{verb} {path} {target}", "target must be '<controller>.<method>'"
            )
        if method == self.wildcard:
            return self.expand(WildcardRoute(verb, path, controller))
        return [HandlerRoute(verb, path, controller, method)]

    def expand(self, wildcard: WildcardRoute) -> List[RouteEntry]:
        """Produce one handler route per callable exported by the controller."""
        module = self.loader.load(wildcard.controller)
        entries: List[RouteEntry] = []
        for name in exported_callables(module):
            pattern = wildcard.pattern.replace(self.wildcard, name)
            entries.append(HandlerRoute(wildcard.verb, pattern, wildcard.controller, name))
        logger.debug(
            "Expanded %s.%s into %d routes", wildcard.controller, self.wildcard, len(entries)
        )
        return entries

    def _static_directory(self, target: str) -> str:
        directory = Path(target[len(self.static_prefix) :])
        if self.static_root is not None and not directory.is_absolute():
            directory = self.static_root / directory
        return str(directory)

