#!/usr/bin/env python3
from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Mapping

from landing_build import (
    BASE_DIR,
    COMPONENTS_DIR,
    CONFIG_FILE,
    BuildError,
    base_name,
    read_config,
    render_component,
)
from landing_verify import find_unresolved_tokens

PREFIX = "[landing]"


def resolve_data_key(name: str, content: Mapping[str, Any]) -> str | None:
    """Which ``content`` key feeds a section, if any."""
    data = content.get(name)
    if data is None:
        name = base_name(name).lower()
        data = content.get(name)
    if not isinstance(data, Mapping):
        return None
    return name


def _display_path(path: Path, root: Path) -> str:
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return path.as_posix()


def describe_sections(root: Path) -> list[dict[str, object]]:
    config = read_config(root / CONFIG_FILE)
    content = config.get("content") or {}
    results: list[dict[str, object]] = []
    for index, name in enumerate(config.get("sectionsOrder") or [], start=1):
        fragment = root / COMPONENTS_DIR / f"{name}.html"
        row: dict[str, object] = {
            "index": index,
            "name": name,
            "fragment": _display_path(fragment, root) if fragment.is_file() else None,
            "data_key": resolve_data_key(name, content),
            "unresolved": [],
        }
        if fragment.is_file():
            text = render_component(fragment.read_text(encoding="utf-8"), name, config)
            row["unresolved"] = find_unresolved_tokens(text)
        results.append(row)
    return results


def format_sections(rows: list[dict[str, object]]) -> str:
    lines: list[str] = [f"{PREFIX} Sections"]
    for row in rows:
        fragment = row["fragment"] or "(missing)"
        data_key = f"content.{row['data_key']}" if row["data_key"] else "(none)"
        lines.append(f"{PREFIX} {row['index']}. {row['name']} -> {fragment} [{data_key}]")
        unresolved = row["unresolved"]
        if unresolved:
            lines.append(f"{PREFIX}    unresolved: {', '.join(unresolved)}")  # type: ignore[arg-type]
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Show which fragment and data key feed each section.")
    parser.add_argument("--root", type=Path, default=BASE_DIR, help="Site directory holding data.json and src/.")
    args = parser.parse_args(argv)

    try:
        rows = describe_sections(args.root)
    except BuildError as exc:
        print(f"{PREFIX} {exc}")
        return 1
    print(format_sections(rows))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
