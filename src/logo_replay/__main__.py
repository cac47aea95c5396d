"""
Command-line entry point.

Usage:
    python -m logo_replay [--url "http://host/?play=true&showControls=false"]
                          [--history-url http://host:3000] [--port 8080]
"""

import argparse

import uvicorn

from logo_replay.config import settings


def main() -> None:
    parser = argparse.ArgumentParser(description="Logo history viewer")
    parser.add_argument(
        "--url",
        default=None,
        help="Viewer URL whose query string sets play / showControls",
    )
    parser.add_argument(
        "--history-url",
        default=None,
        help="Base URL of the history service",
    )
    parser.add_argument("--port", type=int, default=None, help="Bind port")
    args = parser.parse_args()

    if args.url is not None:
        settings.viewer.start_url = args.url
    if args.history_url is not None:
        settings.history.base_url = args.history_url
    port = args.port if args.port is not None else settings.server.port

    from logo_replay.main import app

    uvicorn.run(
        app,
        host=settings.server.host,
        port=port,
        reload=False,
    )


if __name__ == "__main__":
    main()
