"""Placeholder substitution for URL patterns (source of truth).

A pattern is an opaque string holding zero or more ``:name`` placeholders
(``:`` followed by word characters), e.g. ``/demos/:foo/bar/:bar``.

Binding arguments
-----------------
``UrlBinder.bind(pattern, args)`` normalises ``args`` to a list: a list or
tuple is used as is, any other value becomes a one-element list. Elements are
consumed in order against the *current* state of the URL:

- key-value objects (any ``Mapping`` or a pydantic ``BaseModel``, read via
  ``model_dump()``) go through :meth:`UrlBinder.bind_object`;
- anything else replaces the first remaining placeholder, whatever its name,
  with ``str(value)``. Positional values bind purely by position; surplus
  values are ignored. ``None`` elements bind nothing. A nested list, set or
  callable is not serializable and is handled as described below.

When every element is consumed and a placeholder is still present, binding
fails with ``InsufficientParameters`` naming the first one left. A
placeholder is a ``:`` followed by word characters; a bare ``:`` (``12:``)
does not count. Substituted text is not escaped, so a value that itself
contains ``:name`` leaves a placeholder behind that later elements or the
final check will see.

Binding objects
---------------
``bind_object`` works on a shallow copy so the caller's object is never
touched. Every remaining placeholder whose name is a key of the copy is
substituted when the value is serializable; the key is removed from the copy
either way. Keys left over are appended as ``key=value`` query pairs in the
object's own key order, starting with ``?`` or with ``&`` when the URL
already holds a ``?``.

Serializable values
-------------------
A value is serializable unless it is ``None``, callable, a mapping, a list,
tuple or set, or a pydantic model. Non-serializable values are dropped
(leaving their placeholder unresolved) unless the binder was created with
``strict_values=True``, in which case ``UnserializableValue`` is raised.

Results
-------
``try_bind`` returns a :class:`BindResult` carrying either the URL or the
``InsufficientParameters`` failure; ``bind`` unwraps it. Strict-mode
``UnserializableValue`` is raised directly by both.

No URL-encoding is applied to substituted values.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from .errors import InsufficientParameters, UnserializableValue

__all__ = ["BindResult", "UrlBinder", "PLACEHOLDER", "is_serializable"]

PLACEHOLDER = re.compile(r":\w+")


@dataclass(frozen=True)
class BindResult:
    url: Optional[str] = None
    error: Optional[InsufficientParameters] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> str:
        if self.error is not None:
            raise self.error
        return self.url


def is_serializable(value: Any) -> bool:
    if value is None or callable(value):
        return False
    return not isinstance(value, (Mapping, BaseModel, list, tuple, set, frozenset))


def _as_mapping(value: Any) -> Optional[Dict[str, Any]]:
    if isinstance(value, BaseModel):
        return value.model_dump()
    if isinstance(value, Mapping):
        return dict(value)
    return None


def _normalize_args(args: Any) -> List[Any]:
    if isinstance(args, (list, tuple)):
        return list(args)
    return [args]


class UrlBinder:
    """Substitute values into ``:name`` placeholders."""

    __slots__ = ("strict_values",)

    def __init__(self, *, strict_values: bool = False) -> None:
        self.strict_values = strict_values

    def bind(self, pattern: str, args: Any = ()) -> str:
        return self.try_bind(pattern, args).unwrap()

    def try_bind(self, pattern: str, args: Any = ()) -> BindResult:
        url = pattern
        for value in _normalize_args(args):
            if value is None:
                continue
            fields = _as_mapping(value)
            if fields is not None:
                url = self._bind_fields(url, fields)
            else:
                url = self._bind_positional(url, value)
        missing = PLACEHOLDER.search(url)
        if missing is not None:
            return BindResult(error=InsufficientParameters(missing.group(0), url))
        return BindResult(url=url)

    def bind_object(self, url: str, obj: Any) -> str:
        """Bind the fields of ``obj`` by name; leftovers become query pairs."""
        fields = _as_mapping(obj)
        if fields is None:
            raise TypeError(f"bind_object() expects a mapping or model, got {type(obj).__name__}")
        return self._bind_fields(url, fields)

    def _bind_positional(self, url: str, value: Any) -> str:
        target = PLACEHOLDER.search(url)
        if target is None:
            return url
        if not self._accepts(target.group(0)[1:], value):
            return url
        text = str(value)
        return f"{url[: target.start()]}{text}{url[target.end() :]}"

    def _bind_fields(self, url: str, fields: Dict[str, Any]) -> str:
        # ``fields`` is already a private copy.
        for token in PLACEHOLDER.findall(url):
            key = token[1:]
            if key not in fields:
                continue
            value = fields.pop(key)
            if not self._accepts(key, value):
                continue
            text = str(value)
            url = re.sub(rf":{re.escape(key)}(?!\w)", lambda _match: text, url, count=1)
        for key, value in fields.items():
            if not self._accepts(key, value):
                continue
            joiner = "&" if "?" in url else "?"
            url = f"{url}{joiner}{key}={value}"
        return url

    def _accepts(self, key: str, value: Any) -> bool:
        if is_serializable(value):
            return True
        if self.strict_values:
            raise UnserializableValue(key, value)
        return False
