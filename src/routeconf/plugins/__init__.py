"""Plugin package initialiser.

Kept free of side effects: concrete plugins (``logging``) register themselves
with ``Router`` when imported, which ``routeconf/__init__.py`` does eagerly.
"""

__all__: list[str] = []
