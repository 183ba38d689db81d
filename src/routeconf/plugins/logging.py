"""Logging plugin.

Wraps every handler that ``bind_routes`` hands to the host and reports each
request it serves:

- ``before`` (default True): ``"<action> start"``
- ``after`` (default True): ``"<action> end (<ms> ms)"``, elapsed time in
  milliseconds formatted with two decimals. Skipped when the handler raises.

Sinks: ``print`` true -> ``print(message)``; else ``log`` true ->
``logger.info(message)`` when the logger has handlers, otherwise ``print``
so messages are not silently dropped; else nothing. ``enabled`` gates the
plugin. The logger defaults to ``logging.getLogger("routeconf")``.

Options may be set per action or action pattern::

    router.plug("logging")
    router.logging.configure(_target="assets.*", enabled=False)

Registers itself as ``"logging"`` on import.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from routeconf.core.entries import HandlerRoute
from routeconf.core.router import Router
from routeconf.plugins._base_plugin import BasePlugin

__all__ = ["LoggingPlugin"]

_DEFAULTS = {"enabled": True, "before": True, "after": True, "log": True, "print": False}


class LoggingPlugin(BasePlugin):
    """Log handler calls with timing."""

    plugin_code = "logging"
    plugin_description = "Logs handler calls with timing"

    __slots__ = ("_logger",)

    def __init__(self, router, *, logger: Optional[logging.Logger] = None, **cfg):
        self._logger = logger or logging.getLogger("routeconf")
        super().__init__(router, **cfg)

    def configure(
        self,
        enabled: bool = True,
        before: bool = True,
        after: bool = True,
        log: bool = True,
        print: bool = False,  # noqa: A002 - option name mirrors the sink
    ):
        """Storage is handled by the wrapper."""

    def _emit(self, message: str, cfg: dict) -> None:
        if cfg["print"]:
            print(message)
            return
        if cfg["log"]:
            if self._logger.hasHandlers():
                self._logger.info(message)
            else:
                print(message)

    def wrap_handler(self, router, entry: HandlerRoute, call_next: Callable):
        def logged(*args, **kwargs):
            cfg = self._effective_config(entry.action)
            if not cfg["enabled"]:
                return call_next(*args, **kwargs)
            if cfg["before"]:
                self._emit(f"{entry.action} start", cfg)
            t0 = time.perf_counter()
            result = call_next(*args, **kwargs)
            elapsed = (time.perf_counter() - t0) * 1000
            if cfg["after"]:
                self._emit(f"{entry.action} end ({elapsed:.2f} ms)", cfg)
            return result

        return logged

    def _effective_config(self, action: str) -> dict:
        cfg = {**_DEFAULTS, **self.configuration(action)}
        return {key: bool(cfg[key]) if cfg[key] is not None else _DEFAULTS[key] for key in _DEFAULTS}


Router.register_plugin(LoggingPlugin)
