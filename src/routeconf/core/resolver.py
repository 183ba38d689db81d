"""Reverse resolution: action identifier + parameters -> URL.

Several routes may share one action (``demos.index`` with and without a
``:test`` placeholder). They are tried in table order, so configuration lists
the most specific variant first. The first successful bind wins; a failed
bind is remembered and the scan continues. When nothing binds, the last
failure is raised, or ``NoMatchingAction`` when the action never matched.
"""

from __future__ import annotations

from typing import Any, Optional

from .binder import BindResult, UrlBinder
from .errors import NoMatchingAction
from .table import RouteTable

__all__ = ["ReverseResolver"]


class ReverseResolver:
    __slots__ = ("table", "binder")

    def __init__(self, table: RouteTable, binder: UrlBinder) -> None:
        self.table = table
        self.binder = binder

    def reverse(self, action: str, *params: Any) -> str:
        last_failure: Optional[BindResult] = None
        for entry in self.table.matching(action):
            # Bind even without params: the pattern must need none.
            result = self.binder.try_bind(entry.pattern, list(params))
            if result.ok:
                return result.unwrap()
            last_failure = result
        if last_failure is not None:
            return last_failure.unwrap()
        raise NoMatchingAction(action)
