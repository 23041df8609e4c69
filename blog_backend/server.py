"""Command that runs the blog server."""

from __future__ import annotations

import argparse
import logging
import os
import threading
from pathlib import Path

from werkzeug.serving import run_simple

from .app import BlogApp
from .background import backup_loop, tick_snapshot, watch_articles
from .ratelimit import RateLimiter
from .store import open_database


def create_app(data_dir: str | os.PathLike[str] = ".data") -> BlogApp:
    """Create the data directory and database, and return the application."""
    Path(data_dir).mkdir(parents=True, exist_ok=True)
    return BlogApp(open_database(Path(data_dir) / "blog.db"), RateLimiter())


def main(argv: list[str] | None = None) -> int:
    """Run the blog server with its background jobs."""
    parser = argparse.ArgumentParser(prog="blog-srv")
    parser.add_argument("--port", type=int, default=13333)
    parser.add_argument("--data-dir", default=".data")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(message)s")
    print("Starting blog server...")
    app = create_app(args.data_dir)
    stop = threading.Event()
    for job in (watch_articles, tick_snapshot, backup_loop):
        threading.Thread(target=job, args=(app.db, args.data_dir, stop), daemon=True).start()
    try:
        run_simple("0.0.0.0", args.port, app, threaded=True)
    finally:
        stop.set()
        logging.getLogger(__name__).info("server closed")
    return 0