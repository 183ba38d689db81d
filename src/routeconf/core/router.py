"""Router with plugin pipeline (source of truth).

``Router`` extends ``BaseRouter`` with a global plugin registry, per-router
plugin instances and middleware wrapping of the controller callables handed
to the host by ``bind_routes``.

Internal state
--------------
- ``_plugins``: instantiated plugins in the order they were attached.
- ``_plugins_by_name``: name -> plugin instance.
- ``_plugin_info``: per-plugin configuration store. Each plugin owns one
  bucket holding a ``"--base--"`` slot (router-level) and one slot per
  target (an action id or an fnmatch pattern such as ``"admin.*"``). Every
  slot is ``{"config": {...}, "locals": {...}}``.

Global registry
---------------
``Router.register_plugin(plugin_class, name=None)`` requires a ``BasePlugin``
subclass (``TypeError`` otherwise) with a non-empty ``plugin_code``
(``ValueError``). Registering a different class under a taken code raises
``ValueError`` unless ``name`` is given explicitly, which overwrites.
``available_plugins()`` returns a copy of the registry.

Attaching plugins
-----------------
``plug(name, **config)`` instantiates the registered class (unknown names
raise ``ValueError`` listing the available ones), appends it, runs
``plugin.on_entry`` on every entry already built and returns ``self``.
Attached plugins are reachable as attributes (``router.logging``);
``__getattr__`` raises ``AttributeError`` for anything else.

Wrapping pipeline
-----------------
``_wrap_handler(entry, call_next)`` wraps in reverse attachment order, so
the first plugin attached is the outermost layer. Each layer is guarded by
``is_plugin_enabled(entry.action, plugin.name)``; a disabled layer calls
straight through to the next callable. ``functools.wraps`` keeps the
controller function's metadata.

Runtime switches
----------------
``set_plugin_enabled(action, plugin_name, enabled)`` and
``is_plugin_enabled(action, plugin_name)`` read and write the ``locals``
slot of the action, falling back to the ``"--base--"`` slot. Unknown plugins
raise ``AttributeError``.
"""

from __future__ import annotations

from functools import wraps
from typing import Any, Callable, Dict, List, Optional, Type

from routeconf.core.base_router import BaseRouter
from routeconf.core.entries import HandlerRoute, RouteEntry
from routeconf.plugins._base_plugin import BASE_TARGET, BasePlugin

__all__ = ["Router"]

_PLUGIN_REGISTRY: Dict[str, Type[BasePlugin]] = {}


class Router(BaseRouter):
    """Router with plugin registry/pipeline support."""

    __slots__ = BaseRouter.__slots__ + (
        "_plugins",
        "_plugins_by_name",
        "_plugin_info",
    )

    def __init__(self, *args, **kwargs):
        self._plugins: List[BasePlugin] = []
        self._plugins_by_name: Dict[str, BasePlugin] = {}
        self._plugin_info: Dict[str, Dict[str, Any]] = {}
        super().__init__(*args, **kwargs)

    # ------------------------------------------------------------------
    # Plugin registration
    # ------------------------------------------------------------------
    @classmethod
    def register_plugin(cls, plugin_class: Type[BasePlugin], name: Optional[str] = None) -> None:
        """Register a plugin class globally under ``name`` or its ``plugin_code``."""
        if not isinstance(plugin_class, type) or not issubclass(plugin_class, BasePlugin):
            raise TypeError("plugin_class must be a BasePlugin subclass")
        if not getattr(plugin_class, "plugin_code", None):
            raise ValueError(f"Plugin {plugin_class.__name__} is missing plugin_code")
        code = name or plugin_class.plugin_code
        if name is None:
            existing = _PLUGIN_REGISTRY.get(code)
            if existing is not None and existing is not plugin_class:
                raise ValueError(f"Plugin '{code}' already registered")
        _PLUGIN_REGISTRY[code] = plugin_class

    @classmethod
    def available_plugins(cls) -> Dict[str, Type[BasePlugin]]:
        return dict(_PLUGIN_REGISTRY)

    def plug(self, plugin: str, **config: Any) -> "Router":
        """Attach a plugin by its registered name."""
        if not isinstance(plugin, str):
            raise TypeError(
                f"Plugin must be referenced by name string, got {type(plugin).__name__}"
            )
        plugin_class = _PLUGIN_REGISTRY.get(plugin)
        if plugin_class is None:
            available = ", ".join(sorted(_PLUGIN_REGISTRY)) or "none"
            raise ValueError(f"Unknown plugin '{plugin}'. Available plugins: {available}")
        if plugin_class.plugin_code in self._plugins_by_name:
            raise ValueError(f"Plugin '{plugin_class.plugin_code}' already attached")
        instance = plugin_class(self, **config)
        self._plugins.append(instance)
        self._plugins_by_name[instance.name] = instance
        if self.table.built:
            for entry in self.table:
                instance.on_entry(self, entry)
        return self

    def iter_plugins(self) -> List[BasePlugin]:
        """Return attached plugin instances in application order."""
        return list(self._plugins)

    def get_config(self, plugin_name: str, action: Optional[str] = None) -> Dict[str, Any]:
        """Return the merged configuration of an attached plugin."""
        return self._plugin(plugin_name).configuration(action)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        plugin = self._plugins_by_name.get(name)
        if plugin is None:
            raise AttributeError(f"No plugin named '{name}' attached to router")
        return plugin

    def _plugin(self, plugin_name: str) -> BasePlugin:
        plugin = self._plugins_by_name.get(plugin_name)
        if plugin is None:
            raise AttributeError(f"No plugin named '{plugin_name}' attached to router")
        return plugin

    # ------------------------------------------------------------------
    # Runtime switches
    # ------------------------------------------------------------------
    def set_plugin_enabled(self, action: str, plugin_name: str, enabled: bool = True) -> None:
        bucket = self._plugin(plugin_name).bucket()
        slot = bucket.setdefault(action, {"config": {}, "locals": {}})
        slot.setdefault("locals", {})["enabled"] = bool(enabled)

    def is_plugin_enabled(self, action: str, plugin_name: str) -> bool:
        bucket = self._plugin(plugin_name).bucket()
        action_locals = bucket.get(action, {}).get("locals", {})
        if "enabled" in action_locals:
            return bool(action_locals["enabled"])
        base_locals = bucket.get(BASE_TARGET, {}).get("locals", {})
        return bool(base_locals.get("enabled", True))

    # ------------------------------------------------------------------
    # Overrides/hooks
    # ------------------------------------------------------------------
    def _wrap_handler(self, entry: HandlerRoute, call_next: Callable) -> Callable:  # type: ignore[override]
        wrapped = call_next
        for plugin in reversed(self._plugins):
            plugin_call = plugin.wrap_handler(self, entry, wrapped)
            wrapped = self._create_wrapper(plugin, entry, plugin_call, wrapped)
        return wrapped

    def _create_wrapper(
        self,
        plugin: BasePlugin,
        entry: HandlerRoute,
        plugin_call: Callable,
        next_handler: Callable,
    ) -> Callable:
        @wraps(next_handler)
        def wrapper(*args, **kwargs):
            if not self.is_plugin_enabled(entry.action, plugin.name):
                return next_handler(*args, **kwargs)
            return plugin_call(*args, **kwargs)

        return wrapper

    def _after_entry_registered(self, entry: RouteEntry) -> None:  # type: ignore[override]
        for plugin in self._plugins:
            plugin.on_entry(self, entry)

    def _describe_extra(self) -> Dict[str, Any]:  # type: ignore[override]
        if not self._plugins:
            return {}
        return {
            "plugins": {
                plugin.name: {
                    "description": plugin.plugin_description,
                    "config": plugin.configuration(),
                }
                for plugin in self._plugins
            }
        }
