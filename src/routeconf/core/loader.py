"""Controller module loader.

Controllers are plain Python files living under ``<root_path>/<controllers_path>``.
``ModuleLoader.load("demos")`` imports ``demos.py`` (or the ``demos/``
package) from that directory and caches the module object, so the factory
(wildcard expansion) and the route binder share one import per controller.

Loaded modules are registered in ``sys.modules`` under a private
``routeconf_controllers.*`` name, never under their bare name, so a
controller called ``json`` cannot shadow the standard library.
"""

from __future__ import annotations

import importlib.util
import logging
import re
import sys
from pathlib import Path
from types import ModuleType
from typing import Dict, List, Optional, Union

from .errors import ControllerNotFound, MethodNotFound

__all__ = ["ModuleLoader", "exported_callables"]

logger = logging.getLogger("routeconf")

_NAMESPACE = "routeconf_controllers"
_UNSAFE_CHARS = re.compile(r"\W")


class ModuleLoader:
    """Load controller modules from a base directory, one import per name."""

    __slots__ = ("base_dir", "_cache")

    def __init__(self, base_dir: Union[str, Path]):
        self.base_dir = Path(base_dir)
        self._cache: Dict[str, ModuleType] = {}

    def locate(self, name: str) -> Optional[Path]:
        candidate = self.base_dir / f"{name}.py"
        if candidate.is_file():
            return candidate
        package = self.base_dir / name / "__init__.py"
        if package.is_file():
            return package
        return None

    def load(self, name: str) -> ModuleType:
        """Return the controller module called ``name``.

        Raises:
            ControllerNotFound: when no file exists for ``name`` or the file
                cannot be executed.
        """
        module = self._cache.get(name)
        if module is not None:
            return module
        path = self.locate(name)
        if path is None:
            raise ControllerNotFound(name, str(self.base_dir / f"{name}.py"))
        module_name = f"{_NAMESPACE}.{_UNSAFE_CHARS.sub('_', name)}_{id(self):x}"
        spec = importlib.util.spec_from_file_location(module_name, path)
        if spec is None or spec.loader is None:
            raise ControllerNotFound(name, str(path))  # pragma: no cover
        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        try:
            spec.loader.exec_module(module)
        except (ImportError, OSError, SyntaxError) as exc:
            sys.modules.pop(module_name, None)
            raise ControllerNotFound(name, str(path)) from exc
        except BaseException:
            # Any other error from the controller body propagates unchanged.
            sys.modules.pop(module_name, None)
            raise
        logger.debug("Loaded controller %s from %s", name, path)
        self._cache[name] = module
        return module

    def resolve(self, name: str, method: str):
        """Return the callable ``method`` of controller ``name``."""
        module = self.load(name)
        handler = getattr(module, method, None)
        if handler is None or not callable(handler):
            raise MethodNotFound(name, method)
        return handler

    def clear(self) -> None:
        """Forget every loaded controller and drop it from ``sys.modules``."""
        for module in self._cache.values():
            sys.modules.pop(module.__name__, None)
        self._cache.clear()


def exported_callables(module: ModuleType) -> List[str]:
    """Names of the callables a controller module exports, in definition order.

    ``__all__`` wins when the module defines it. Otherwise every public name
    whose object was defined in the module itself counts, so helpers imported
    from elsewhere (``from json import dumps``) are not exposed as routes.
    """
    explicit = getattr(module, "__all__", None)
    if explicit is not None:
        names = [str(name) for name in explicit]
    else:
        names = [
            name
            for name, value in vars(module).items()
            if not name.startswith("_")
            and getattr(value, "__module__", None) == module.__name__
        ]
    return [name for name in names if callable(getattr(module, name, None))]
