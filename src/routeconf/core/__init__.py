"""Core runtime aggregator.

Exposes the building blocks from a single module; importing it performs only
imports, it does not register plugins or build route tables.

* ``base_router`` -> ``BaseRouter`` (plugin-free engine)
* ``router`` -> ``Router`` (plugin-enabled)
* ``binder`` -> ``UrlBinder``, ``BindResult``
* ``entries`` -> ``HandlerRoute``, ``StaticMount``
"""

from .base_router import BaseRouter
from .binder import BindResult, UrlBinder
from .entries import HTTP_VERBS, HandlerRoute, StaticMount
from .router import Router

__all__ = [
    "BaseRouter",
    "BindResult",
    "HTTP_VERBS",
    "HandlerRoute",
    "Router",
    "StaticMount",
    "UrlBinder",
]
