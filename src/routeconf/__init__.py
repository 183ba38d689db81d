"""routeconf public API surface.

- Public exports: ``Router``, ``BaseRouter``, ``UrlBinder``, the route entry
  records and the error taxonomy.
- Plugin registration: built-in plugins (``logging``) are imported for their
  side effect of calling ``Router.register_plugin``. Imports are done through
  ``import_module`` to avoid cycles.

Importing the package never reads a routes file; tables are built on first use.
"""

from importlib import import_module

__version__ = "0.3.0"

from .core import BaseRouter, BindResult, HandlerRoute, Router, StaticMount, UrlBinder
from .core.errors import (
    ControllerNotFound,
    InsufficientParameters,
    MalformedRouteLine,
    MethodNotFound,
    NoMatchingAction,
    RouteConfError,
    RoutesFileUnreadable,
    StaticPathInvalid,
    UnrecognisedVerb,
    UnserializableValue,
)

for _plugin in ("logging",):
    import_module(f"{__name__}.plugins.{_plugin}")
del _plugin

__all__ = [
    "BaseRouter",
    "BindResult",
    "ControllerNotFound",
    "HandlerRoute",
    "InsufficientParameters",
    "MalformedRouteLine",
    "MethodNotFound",
    "NoMatchingAction",
    "RouteConfError",
    "Router",
    "RoutesFileUnreadable",
    "StaticMount",
    "StaticPathInvalid",
    "UnrecognisedVerb",
    "UnserializableValue",
    "UrlBinder",
]
