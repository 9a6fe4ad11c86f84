#!/usr/bin/env python3
"""
Build the landing page: assembles dist/index.html from data.json, the
layout shell and the section fragments, then mirrors assets/ into dist/.

Source layout:
  data.json             -- theme, seo, content and sectionsOrder
  src/layout.html       -- shell with /*THEME_CSS*/ and {{CONTENT}} markers
  src/components/*.html -- one fragment per section name
  assets/               -- copied verbatim to dist/assets/

Usage:
  python3 tools/landing_build.py
  python3 tools/landing_build.py --root path/to/site --out path/to/dist
"""
from __future__ import annotations

import argparse
import json
import os
import re
import shutil
import sys
import traceback
from pathlib import Path
from typing import Any, Mapping, TextIO

BASE_DIR = Path(__file__).resolve().parents[1]

CONFIG_FILE = "data.json"
LAYOUT_FILE = "src/layout.html"
COMPONENTS_DIR = "src/components"
ASSETS_DIR = "assets"
DIST_DIR = "dist"
INDEX_FILE = "index.html"

THEME_CSS_MARKER = "/*THEME_CSS*/"
CONTENT_MARKER = "{{CONTENT}}"

THEME_PROPERTIES = [
    ("--primary-color", "primaryColor"),
    ("--secondary-color", "secondaryColor"),
    ("--accent-color", "accentColor"),
    ("--dark-color", "darkColor"),
    ("--light-color", "lightColor"),
    ("--font-family", "fontFamily"),
]

COLORS = {
    "reset": "\033[0m",
    "bright": "\033[1m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "blue": "\033[34m",
    "red": "\033[31m",
}

RULE = "═" * 50


class BuildError(Exception):
    """Fatal build problem: bad configuration or missing layout."""


def _use_color(stream: TextIO) -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def log(message: str, color: str = "reset", stream: TextIO | None = None) -> None:
    stream = stream or sys.stdout
    if _use_color(stream):
        message = f"{COLORS[color]}{message}{COLORS['reset']}"
    print(message, file=stream)


def log_step(step: str, message: str) -> None:
    log(f"[{step}] {message}", "blue")


def log_success(message: str) -> None:
    log(f"✓ {message}", "green")


def log_warning(message: str) -> None:
    log(f"⚠ {message}", "yellow")


def log_error(message: str) -> None:
    log(f"✗ {message}", "red", stream=sys.stderr)


def _collect_tokens(data: Mapping[str, Any], prefix: str, tokens: dict[str, str]) -> None:
    for key, value in data.items():
        name = f"{prefix}_{str(key).upper()}" if prefix else str(key).upper()
        if isinstance(value, Mapping):
            _collect_tokens(value, name, tokens)
        elif isinstance(value, str):
            # first key to claim a token keeps it
            tokens.setdefault("{{" + name + "}}", value)


def replace_placeholders(template: str, data: Mapping[str, Any], prefix: str = "") -> str:
    """Replace every ``{{PREFIX_KEY}}`` token in ``template`` with its value.

    Nested mappings extend the prefix (``{"theme": {"primaryColor": "x"}}``
    fills ``{{THEME_PRIMARYCOLOR}}``). Only string values are substituted;
    numbers, booleans and lists are skipped and unknown tokens stay as they
    are. The template is scanned once, so text coming from a value is never
    expanded again within the same call.
    """
    tokens: dict[str, str] = {}
    _collect_tokens(data, prefix, tokens)
    if not tokens:
        return template
    # longest first so a token never loses to one of its own prefixes
    pattern = re.compile("|".join(re.escape(token) for token in sorted(tokens, key=len, reverse=True)))
    return pattern.sub(lambda match: tokens[match.group(0)], template)


def base_name(component_name: str) -> str:
    return re.sub(r"[0-9]+$", "", component_name)


def component_data(component_name: str, content: Mapping[str, Any]) -> Mapping[str, Any]:
    data = content.get(component_name)
    if data is None:
        data = content.get(base_name(component_name).lower())
    if not isinstance(data, Mapping):
        return {}
    return data


def process_component(component_name: str, config: Mapping[str, Any], components_dir: Path) -> str:
    """Render one section fragment; a missing fragment yields ``""``."""
    log_step("COMPONENT", f"Processing {component_name}.html")

    component_path = components_dir / f"{component_name}.html"
    if not component_path.is_file():
        log_error(f"Component {component_name}.html not found in {components_dir}")
        return ""

    component_html = render_component(component_path.read_text(encoding="utf-8"), component_name, config)

    log_success(f"{component_name}.html processed")
    return component_html


def render_component(component_html: str, component_name: str, config: Mapping[str, Any]) -> str:
    # variants such as hero2 share the hero data and {{HERO_*}} tokens
    prefix = base_name(component_name).upper()
    content = config.get("content") or {}
    component_html = replace_placeholders(component_html, component_data(component_name, content), prefix)

    # globals: theme, seo, content.*
    return replace_placeholders(component_html, config)


def generate_theme_css(theme: Mapping[str, Any]) -> str:
    lines = []
    for prop, key in THEME_PROPERTIES:
        value = theme.get(key)
        lines.append(f"      {prop}: {'' if value is None else value};")
    body = "\n".join(lines)
    return f"""
    :root {{
{body}
    }}
  """


def copy_directory(source: Path, destination: Path) -> int:
    destination.mkdir(parents=True, exist_ok=True)
    copied = 0
    for path in sorted(source.iterdir()):
        target = destination / path.name
        if path.is_dir():
            copied += copy_directory(path, target)
        else:
            shutil.copy2(path, target)
            copied += 1
    return copied


def read_config(config_path: Path) -> dict[str, Any]:
    if not config_path.is_file():
        raise BuildError(f"Missing configuration file: {config_path}")
    try:
        config = json.loads(config_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise BuildError(f"Could not decode {config_path.name}: {exc}") from exc
    if not isinstance(config, dict):
        raise BuildError(f"{config_path.name} must contain a JSON object")
    return config


def _read_layout(layout_path: Path) -> str:
    if not layout_path.is_file():
        raise BuildError(f"Missing layout file: {layout_path}")
    return layout_path.read_text(encoding="utf-8")


def build(root: Path, out_dir: Path | None = None) -> Path:
    root = Path(root)
    dist_dir = Path(out_dir) if out_dir is not None else root / DIST_DIR

    log("\n🚀 Starting build...", "bright")
    log(RULE, "blue")

    log_step("1/7", f"Loading {CONFIG_FILE}")
    config = read_config(root / CONFIG_FILE)
    log_success(f"{CONFIG_FILE} loaded")

    log_step("2/7", f"Loading {LAYOUT_FILE}")
    layout_html = _read_layout(root / LAYOUT_FILE)
    log_success("layout.html loaded")

    theme = config.get("theme") or {}
    seo = config.get("seo") or {}
    content = config.get("content") or {}

    log_step("3/7", "Generating theme CSS variables")
    layout_html = layout_html.replace(THEME_CSS_MARKER, generate_theme_css(theme), 1)
    log_success("Theme CSS applied")

    log_step("4/7", "Applying SEO settings")
    layout_html = replace_placeholders(layout_html, seo, "SEO")
    layout_html = replace_placeholders(layout_html, theme, "THEME")
    footer = content.get("footer")
    layout_html = replace_placeholders(layout_html, footer if isinstance(footer, Mapping) else {}, "FOOTER")
    log_success("SEO configured")

    log_step("5/7", "Processing components")
    sections_order = config.get("sectionsOrder") or []
    components_dir = root / COMPONENTS_DIR
    components_html = "".join(process_component(name, config, components_dir) for name in sections_order)
    layout_html = layout_html.replace(CONTENT_MARKER, components_html, 1)
    log_success(f"{len(sections_order)} components processed")

    log_step("6/7", f"Writing {INDEX_FILE} to {dist_dir}")
    dist_dir.mkdir(parents=True, exist_ok=True)
    index_path = dist_dir / INDEX_FILE
    index_path.write_text(layout_html, encoding="utf-8")
    log_success(f"{INDEX_FILE} written")

    log_step("7/7", f"Copying {ASSETS_DIR}/ to {dist_dir}")
    assets_source = root / ASSETS_DIR
    if assets_source.is_dir():
        copied = copy_directory(assets_source, dist_dir / ASSETS_DIR)
        log_success(f"{copied} asset file(s) copied")
    else:
        log_warning(f"{ASSETS_DIR}/ not found, skipping...")

    size_kb = index_path.stat().st_size / 1024
    log("\n" + RULE, "blue")
    log("✨ Build finished successfully!", "bright")
    log(f"📦 Output: {index_path}", "green")
    log(f"📊 Size: {size_kb:.2f} KB", "green")
    log(RULE + "\n", "blue")
    return index_path


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Build the landing page into dist/.")
    parser.add_argument("--root", type=Path, default=BASE_DIR, help="Site directory holding data.json, src/ and assets/.")
    parser.add_argument("--out", type=Path, default=None, help="Output directory (default: <root>/dist).")
    args = parser.parse_args(argv)

    try:
        build(args.root, args.out)
    except Exception as exc:
        log_error(f"Build failed: {exc}")
        traceback.print_exc()
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
