from __future__ import annotations

import json
from pathlib import Path

import pytest

LAYOUT = "<style>/*THEME_CSS*/</style><title>{{SEO_TITLE}}</title>{{CONTENT}}"


@pytest.fixture
def make_site(tmp_path):
    """Write a throwaway site and return its root."""

    def _make_site(
        config: dict | str,
        components: dict[str, str] | None = None,
        layout: str | None = LAYOUT,
        assets: dict[str, str] | None = None,
    ) -> Path:
        root = tmp_path / "site"
        root.mkdir(exist_ok=True)
        text = config if isinstance(config, str) else json.dumps(config)
        (root / "data.json").write_text(text, encoding="utf-8")
        if layout is not None:
            (root / "src").mkdir(exist_ok=True)
            (root / "src" / "layout.html").write_text(layout, encoding="utf-8")
        components_dir = root / "src" / "components"
        components_dir.mkdir(parents=True, exist_ok=True)
        for name, html in (components or {}).items():
            (components_dir / f"{name}.html").write_text(html, encoding="utf-8")
        for rel, body in (assets or {}).items():
            path = root / "assets" / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(body, encoding="utf-8")
        return root

    return _make_site
