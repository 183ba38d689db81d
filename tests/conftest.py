from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional

import pytest

from routeconf import Router

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def router() -> Router:
    return Router(
        root_path=str(FIXTURES),
        controllers_path="controllers",
        routes_file="config/routes.conf",
    )


@pytest.fixture
def make_router(tmp_path):
    """Build a router over a throwaway project: routes text + controller sources."""

    def factory(routes: str, controllers: Optional[Dict[str, str]] = None, **options) -> Router:
        (tmp_path / "config").mkdir(exist_ok=True)
        (tmp_path / "config" / "routes.conf").write_text(routes)
        controllers_dir = tmp_path / "controllers"
        controllers_dir.mkdir(exist_ok=True)
        for name, source in (controllers or {}).items():
            (controllers_dir / f"{name}.py").write_text(source)
        options.setdefault("root_path", str(tmp_path))
        options.setdefault("controllers_path", "controllers")
        return Router(**options)

    return factory
