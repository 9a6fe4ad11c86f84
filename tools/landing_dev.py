#!/usr/bin/env python3
from __future__ import annotations

import argparse
import functools
import http.server
import subprocess
import sys
from pathlib import Path

TOOLS_DIR = Path(__file__).resolve().parent
BASE_DIR = TOOLS_DIR.parent
PORT = 8787
PREFIX = "[landing]"


def run_build(root: Path) -> None:
    subprocess.run([sys.executable, str(TOOLS_DIR / "landing_build.py"), "--root", str(root)], check=True)


def serve(site_dir: Path, port: int = PORT) -> None:
    handler = functools.partial(http.server.SimpleHTTPRequestHandler, directory=str(site_dir))
    httpd = http.server.ThreadingHTTPServer(("localhost", port), handler)
    url = f"http://localhost:{port}/"
    print(f"{PREFIX} Serving {url} (site dir: {site_dir})")
    try:
        httpd.serve_forever()
    except KeyboardInterrupt:
        print(f"{PREFIX} Shutting down server.")
    finally:
        httpd.server_close()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Build and serve the landing page locally.")
    parser.add_argument("--root", type=Path, default=BASE_DIR, help="Site directory holding data.json, src/ and assets/.")
    parser.add_argument("--port", type=int, default=PORT, help="Port for the preview server.")
    parser.add_argument("--once", action="store_true", help="Build once and exit without serving.")
    args = parser.parse_args(argv)

    site_dir = args.root / "dist"
    try:
        run_build(args.root)
    except subprocess.CalledProcessError as exc:
        print(f"{PREFIX} Build failed with exit status {exc.returncode}.")
        return 1
    print(f"{PREFIX} Build complete. Preview at http://localhost:{args.port}/")
    if args.once:
        return 0
    if not site_dir.exists():
        print(f"{PREFIX} dist/ directory missing after build.")
        return 1
    serve(site_dir, args.port)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
