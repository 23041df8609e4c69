"""Background jobs: article reloading, snapshots and backups."""

from __future__ import annotations

import logging
import os
import sqlite3
import threading
from pathlib import Path

from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from .addresses import parse_address
from .dto import load_articles
from .iou import write_json_to_file
from .store import backup_blog, create_articles, create_comments, get_clicks, get_comments

log = logging.getLogger(__name__)

SNAPSHOT_INTERVAL = 3600.0
BACKUP_INTERVAL = 24 * 3600.0


def create_tables(db: sqlite3.Connection, articles_path: str | os.PathLike[str]) -> None:
    """Load the article list and make sure every table exists."""
    try:
        articles = load_articles(articles_path)
        create_articles(db, articles)
        create_comments(db)
    except (OSError, ValueError, sqlite3.Error) as exc:
        log.error("error creating tables: %s", exc)


def _export(path: Path, read, db: sqlite3.Connection) -> list:
    try:
        rows = read(db)
    except sqlite3.Error as exc:
        log.error("error reading %s: %s", path.name, exc)
        rows = []
    _write(path, rows)
    return rows


def _write(path: Path, rows: list) -> None:
    try:
        write_json_to_file(path, rows or None)
    except (OSError, TypeError, ValueError) as exc:
        log.error("error write snapshot to file: %s", exc)


def write_snapshot(db: sqlite3.Connection, data_dir: str | os.PathLike[str] = ".data") -> None:
    """Export clicks and comments to ``data_dir``; public comments keep only the display name."""
    data = Path(data_dir)
    log.info("write clicks: %d", len(_export(data / "article-clicks.json", get_clicks, db)))
    comments = _export(data / "article-email-comments.json", get_comments, db)
    log.info("write comments: %d", len(comments))
    for comment in comments:
        try:
            comment.email = parse_address(comment.email).name
        except ValueError:
            comment.email = ""
    _write(data / "article-comments.json", comments)


class _ArticlesChanged(FileSystemEventHandler):
    def __init__(self, db: sqlite3.Connection, path: Path) -> None:
        self._db = db
        self._path = os.path.abspath(path)

    def on_modified(self, event) -> None:
        if not event.is_directory and os.path.abspath(event.src_path) == self._path:
            log.info("File modified: %s", event.src_path)
            create_tables(self._db, self._path)


def watch_articles(db: sqlite3.Connection, data_dir: str | os.PathLike[str] = ".data",
                   stop: threading.Event | None = None) -> None:
    """Create the tables, then reload them whenever the article list changes, until ``stop``."""
    path = Path(data_dir) / "articles.json"
    create_tables(db, path)
    if not path.is_file():
        log.error("error adding watcher: %s does not exist", path)
        return
    observer = Observer()
    observer.schedule(_ArticlesChanged(db, path), str(path.parent), recursive=False)
    observer.start()
    try:
        (stop or threading.Event()).wait()
    finally:
        observer.stop()
        observer.join()


def tick_snapshot(db: sqlite3.Connection, data_dir: str | os.PathLike[str] = ".data",
                  stop: threading.Event | None = None, interval: float = SNAPSHOT_INTERVAL) -> None:
    """Write a snapshot now and then every ``interval`` seconds until ``stop``."""
    stop = stop or threading.Event()
    while True:
        log.info("Snapshot...")
        write_snapshot(db, data_dir)
        if stop.wait(interval):
            return


def backup_loop(db: sqlite3.Connection, data_dir: str | os.PathLike[str] = ".data",
                stop: threading.Event | None = None, interval: float = BACKUP_INTERVAL) -> None:
    """Back the database up every ``interval`` seconds until ``stop``."""
    stop = stop or threading.Event()
    while not stop.wait(interval):
        log.info("Backing up...")
        try:
            backup_blog(db, data_dir)
        except (OSError, sqlite3.Error) as exc:
            log.error("error backup: %s", exc)