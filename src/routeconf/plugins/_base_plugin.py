"""Plugin contract used by the Router pipeline.

``BasePlugin``
    Base class for every plugin. Required class attributes:

    - ``plugin_code``: unique identifier used for registration (``"logging"``)
    - ``plugin_description``: human-readable description

    Constructor signature: ``BasePlugin(router, **config)``. ``config`` is
    forwarded to ``configure()``.

    ``configure(**config)``
        Subclasses declare their accepted options in the method signature.
        ``__init_subclass__`` wraps the method so that it:

        - parses ``flags`` (``"enabled,before:off"``) into booleans
        - honours ``_target``: ``"--base--"`` (default, router level), an
          action id (``"demos.index"``), an fnmatch pattern
          (``"admin.*"``) or several of those separated by commas
        - validates the options with pydantic's ``validate_call``
        - writes them into the router's ``_plugin_info`` store

    ``configuration(action=None)``
        Merged configuration: the base slot, then every target slot whose key
        matches ``action`` (fnmatch), in the order they were first written.

    ``on_entry(router, entry)``
        Called once per route entry when the table is built (or when the
        plugin is attached to a router whose table is already built).

    ``wrap_handler(router, entry, call_next)``
        Returns the callable registered on the host for a handler route.
        Default is passthrough.
"""

from __future__ import annotations

from fnmatch import fnmatchcase
from typing import Any, Callable, Dict, Optional

from pydantic import validate_call

__all__ = ["BasePlugin", "BASE_TARGET"]

BASE_TARGET = "--base--"


def _wrap_configure(original_configure: Callable) -> Callable:
    """Wrap a plugin's configure() to handle flags, _target, validation and storage."""
    validated = validate_call(original_configure)

    def wrapper(
        self: "BasePlugin", *, _target: str = BASE_TARGET, flags: Optional[str] = None, **kwargs: Any
    ) -> None:
        if flags:
            kwargs.update(self._parse_flags(flags))
        if "," in _target:
            for target in (chunk.strip() for chunk in _target.split(",")):
                if target:
                    wrapper(self, _target=target, **kwargs)
            return
        validated(self, **kwargs)
        self._write_config(_target, kwargs)

    wrapper.__doc__ = original_configure.__doc__
    return wrapper


class BasePlugin:
    """Hook interface + configuration helpers for router plugins."""

    __slots__ = ("name", "_router")

    plugin_code: str = ""
    plugin_description: str = ""

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if "configure" in cls.__dict__:
            cls.configure = _wrap_configure(cls.__dict__["configure"])

    def __init__(self, router: Any, **config: Any):
        self.name = self.plugin_code
        self._router = router
        self.bucket()
        self.configure(**config)

    def configure(self, *, _target: str = BASE_TARGET, flags: Optional[str] = None) -> None:
        """Accept only ``flags``; subclasses declare their own options."""
        if flags:
            self._write_config(_target, self._parse_flags(flags))

    def bucket(self) -> Dict[str, Dict[str, Any]]:
        """This plugin's slots in the router store, base slot guaranteed."""
        store = getattr(self._router, "_plugin_info")
        bucket = store.setdefault(self.name, {})
        bucket.setdefault(BASE_TARGET, {"config": {"enabled": True}, "locals": {}})
        return bucket

    def _write_config(self, target: str, config: Dict[str, Any]) -> None:
        if not config:
            return
        slot = self.bucket().setdefault(target, {"config": {}, "locals": {}})
        slot["config"].update(config)

    def configuration(self, action: Optional[str] = None) -> Dict[str, Any]:
        bucket = self.bucket()
        merged = dict(bucket[BASE_TARGET].get("config", {}))
        if action:
            for target, slot in bucket.items():
                if target != BASE_TARGET and fnmatchcase(action, target):
                    merged.update(slot.get("config", {}))
        return merged

    def _parse_flags(self, flags: str) -> Dict[str, bool]:
        mapping: Dict[str, bool] = {}
        for chunk in flags.split(","):
            chunk = chunk.strip()
            if not chunk:
                continue
            if ":" in chunk:
                name, value = chunk.split(":", 1)
                mapping[name.strip()] = value.strip().lower() != "off"
            else:
                mapping[chunk] = True
        return mapping

    def on_entry(self, router: Any, entry: Any) -> None:  # pragma: no cover - default no-op
        """Hook run once per route entry when the table is built."""

    def wrap_handler(self, router: Any, entry: Any, call_next: Callable) -> Callable:
        """Wrap handler invocation; default passthrough."""
        return call_next
