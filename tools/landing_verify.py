#!/usr/bin/env python3
from __future__ import annotations

import argparse
import re
import urllib.parse
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parents[1]
SITE_DIR = BASE_DIR / "dist"
PREFIX = "[landing]"

HREF_PATTERN = re.compile(r'(?:href|src)=["\']([^"\']+)["\']', re.IGNORECASE)
TOKEN_PATTERN = re.compile(r"\{\{[^{}\s]+\}\}")


def find_unresolved_tokens(text: str) -> list[str]:
    """Placeholder tokens left in built output, in order of first appearance."""
    seen: list[str] = []
    for token in TOKEN_PATTERN.findall(text):
        if token not in seen:
            seen.append(token)
    return seen


def is_internal_link(url: str) -> bool:
    if url.startswith(("http://", "https://", "mailto:", "#", "tel:", "//")):
        return False
    parsed = urllib.parse.urlparse(url)
    if parsed.scheme:
        return False
    return True


def target_exists(site_dir: Path, source_file: Path, url: str) -> bool:
    """
    Checks that a link target exists on disk.
    Absolute paths are taken relative to the site root; query strings and
    fragments are ignored and directories resolve to their index.html.
    """
    url_clean = urllib.parse.unquote(url.split("?")[0].split("#")[0])
    if not url_clean:
        return True

    if url_clean.startswith("/"):
        target_path = site_dir / url_clean.lstrip("/")
    else:
        target_path = source_file.parent / url_clean

    if target_path.is_dir():
        return (target_path / "index.html").exists()
    return target_path.exists()


def verify(site_dir: Path) -> int:
    if not site_dir.exists():
        print(f"{PREFIX} {site_dir} not found. Run python3 tools/landing_build.py first.")
        return 1

    broken_links: list[tuple[Path, str]] = []
    leftover_tokens: list[tuple[Path, str]] = []

    for path in sorted(site_dir.rglob("*.html")):
        text = path.read_text(encoding="utf-8", errors="ignore")

        for token in find_unresolved_tokens(text):
            leftover_tokens.append((path, token))

        for url in HREF_PATTERN.findall(text):
            url = url.strip()
            if "{{" in url:
                continue
            if is_internal_link(url) and not target_exists(site_dir, path, url):
                broken_links.append((path, url))

    exit_code = 0

    if leftover_tokens:
        print(f"{PREFIX} Unresolved placeholders found:")
        for path, token in leftover_tokens:
            print(f"  {path.relative_to(site_dir)}: {token}")
        exit_code = 1

    if broken_links:
        print(f"{PREFIX} Broken internal links found:")
        for path, url in broken_links:
            print(f"  {path.relative_to(site_dir)}: {url}")
        exit_code = 1

    if exit_code == 0:
        print(f"{PREFIX} Verification passed. No unresolved placeholders or broken internal links found.")

    return exit_code


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Check the built landing page for leftover placeholders and broken links.")
    parser.add_argument("--out", type=Path, default=SITE_DIR, help="Built output directory (default: dist/).")
    args = parser.parse_args(argv)
    return verify(args.out)


if __name__ == "__main__":
    raise SystemExit(main())
