"""SQLite storage of article clicks and comments."""

from __future__ import annotations

import logging
import os
import platform
import sqlite3
import sys
from contextlib import ExitStack, closing
from datetime import datetime
from pathlib import Path
from typing import Iterable

from .dto import Article, ArticleClick, ArticleComment
from .iou import write_json_to_file

log = logging.getLogger(__name__)

_BACKUP_STAMP = "%Y-%m-%d_%H-%M-%S"


def open_database(path: str | os.PathLike[str]) -> sqlite3.Connection:
    """Open a SQLite database in autocommit mode, usable from any thread."""
    return sqlite3.connect(os.fspath(path), check_same_thread=False, isolation_level=None)


def backup(dest: sqlite3.Connection, src: sqlite3.Connection) -> None:
    """Copy the whole main database of ``src`` into ``dest``."""
    src.backup(dest)


def _build_info() -> dict[str, object]:
    return {
        "path": __package__ or "blog_backend",
        "python": platform.python_version(),
        "implementation": platform.python_implementation(),
        "platform": platform.platform(),
        "executable": sys.executable,
    }


def backup_blog(
    src: sqlite3.Connection | None = None,
    data_dir: str | os.PathLike[str] = ".data",
) -> Path:
    """Back the blog database up into ``<data_dir>/backup/<timestamp>``.

    When ``src`` is None the database ``<data_dir>/blog.db`` is opened.
    Returns the directory that holds the backup.
    """
    data = Path(data_dir)
    staging = data / "backup" / "tmp"
    staging.mkdir(parents=True, exist_ok=True)

    write_json_to_file(staging / "build-info.json", _build_info())

    with ExitStack() as stack:
        if src is None:
            src = stack.enter_context(closing(open_database(data / "blog.db")))
        with closing(open_database(staging / "blog.db")) as dest:
            backup(dest, src)

    target = data / "backup" / datetime.now().strftime(_BACKUP_STAMP)
    os.rename(staging, target)
    return target


def get_clicks(db: sqlite3.Connection) -> list[ArticleClick]:
    """Return the click count of every article."""
    rows = db.execute("SELECT id, click FROM articles")
    return [ArticleClick(id=article_id, click=click) for article_id, click in rows]


def get_comments(db: sqlite3.Connection) -> list[ArticleComment]:
    """Return every stored comment."""
    rows = db.execute("SELECT id, article_id, content, email, created_at FROM comments")
    return [
        ArticleComment(
            id=str(comment_id),
            article_id=article_id,
            content=content,
            email=email,
            created_at=created_at,
        )
        for comment_id, article_id, content, email, created_at in rows
    ]


def create_articles(db: sqlite3.Connection, articles: Iterable[Article]) -> int:
    """Create the articles table and add any articles not yet known.

    Returns the number of articles offered.
    """
    db.execute("CREATE TABLE IF NOT EXISTS articles (id TEXT PRIMARY KEY, click INTEGER DEFAULT 0)")
    count = 0
    with db:
        for article in articles:
            db.execute("INSERT OR IGNORE INTO articles (id) VALUES (?)", (article.id,))
            count += 1
    log.info("Articles loaded: %d", count)
    return count


def create_comments(db: sqlite3.Connection) -> None:
    """Create the comments table and its index on the article id."""
    db.execute(
        "CREATE TABLE IF NOT EXISTS comments (id INTEGER PRIMARY KEY AUTOINCREMENT, "
        "article_id TEXT, email TEXT, content TEXT, created_at INTEGER)"
    )
    db.execute("CREATE INDEX IF NOT EXISTS idx_article_id ON comments (article_id)")