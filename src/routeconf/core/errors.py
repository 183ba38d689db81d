"""Error taxonomy for route table construction and URL binding.

Every error derives from :class:`RouteConfError`. Each one also derives from
the builtin exception that describes the same situation, so callers that
already catch ``ValueError``/``LookupError``/``ImportError`` keep working.

None of these are retried. Configuration and wiring errors surface from
``get_routes()``/``bind_routes()`` at startup; binding errors surface from
``bind_url()``/``reverse()`` at call time.
"""

from __future__ import annotations

from typing import Optional

__all__ = [
    "RouteConfError",
    "UnrecognisedVerb",
    "MalformedRouteLine",
    "RoutesFileUnreadable",
    "ControllerNotFound",
    "MethodNotFound",
    "StaticPathInvalid",
    "InsufficientParameters",
    "UnserializableValue",
    "NoMatchingAction",
]


class RouteConfError(Exception):
    """Base class for every routeconf failure."""


class UnrecognisedVerb(RouteConfError, ValueError):
    def __init__(self, verb: str, path: str):
        self.verb = verb
        self.path = path
        super().__init__(f"Unrecognised HTTP verb '{verb}' for route: {path}")


class MalformedRouteLine(RouteConfError, ValueError):
    def __init__(self, line: str, reason: str, lineno: Optional[int] = None):
        self.line = line
        self.reason = reason
        self.lineno = lineno
        where = f" (line {lineno})" if lineno is not None else ""
        super().__init__(f"Malformed route line{where}: {line!r}: {reason}")


class RoutesFileUnreadable(RouteConfError, OSError):
    def __init__(self, path: str, reason: str = ""):
        self.path = path
        message = f"Unable to read routes file: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class ControllerNotFound(RouteConfError, ImportError):
    def __init__(self, controller: str, location: str = ""):
        self.controller = controller
        self.location = location
        message = f"Controller '{controller}' not found"
        if location:
            message = f"{message} at {location}"
        super().__init__(message)


class MethodNotFound(RouteConfError, AttributeError):
    def __init__(self, controller: str, method: str):
        self.controller = controller
        self.method = method
        super().__init__(f"Controller '{controller}' has no callable '{method}'")


class StaticPathInvalid(RouteConfError, ValueError):
    def __init__(self, directory: str):
        self.directory = directory
        super().__init__(f"Static path is missing or not a directory: {directory}")


class InsufficientParameters(RouteConfError, ValueError):
    """Raised when a placeholder is still unresolved after binding."""

    def __init__(self, placeholder: str, url: str = ""):
        self.placeholder = placeholder
        self.url = url
        super().__init__(f"Insufficient parameters passed. Unable to bind: {placeholder}")


class UnserializableValue(RouteConfError, TypeError):
    """Raised in strict mode when a bound object carries a non-scalar value."""

    def __init__(self, key: str, value: object):
        self.key = key
        self.value = value
        super().__init__(
            f"Value for '{key}' cannot be placed in a URL: {type(value).__name__}"
        )


class NoMatchingAction(RouteConfError, LookupError):
    def __init__(self, action: str):
        self.action = action
        super().__init__(f"No matching action was found: {action}")
