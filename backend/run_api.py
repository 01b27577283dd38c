#!/usr/bin/env python
"""
Run the Patbin API server.

Usage:
    python run_api.py
    python run_api.py --reload  # Development mode
    python run_api.py --storage supabase
"""

import argparse
import os

import uvicorn

from shared.config import get_settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run Patbin API server")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    parser.add_argument("--host", type=str, help="Host to bind to")
    parser.add_argument("--port", type=int, help="Port to bind to")
    parser.add_argument(
        "--storage",
        choices=["memory", "supabase"],
        help="Storage backend (overrides STORAGE_BACKEND)",
    )
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    if args.storage:
        # Settings are read in the server process, which may be a reloader child
        os.environ["STORAGE_BACKEND"] = args.storage
        get_settings.cache_clear()

    settings = get_settings()

    uvicorn.run(
        "api:app",
        host=args.host or settings.host,
        port=args.port or settings.port,
        reload=args.reload or settings.reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
