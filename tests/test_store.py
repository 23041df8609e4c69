import json
import re
import sqlite3

import pytest

from blog_backend.dto import Article, ArticleClick
from blog_backend.store import (
    backup,
    backup_blog,
    create_articles,
    create_comments,
    get_clicks,
    get_comments,
    open_database,
)


@pytest.fixture
def db(tmp_path):
    connection = open_database(tmp_path / "blog.db")
    yield connection
    connection.close()


def test_create_articles_defaults_to_zero_clicks(db):
    count = create_articles(db, [Article(id="a"), Article(id="b")])
    assert count == 2
    assert sorted(get_clicks(db), key=lambda c: c.id) == [
        ArticleClick(id="a", click=0),
        ArticleClick(id="b", click=0),
    ]


def test_create_articles_keeps_existing_counts(db):
    create_articles(db, [Article(id="a")])
    db.execute("UPDATE articles SET click = click + 1 WHERE id=?", ("a",))
    create_articles(db, [Article(id="a"), Article(id="c")])
    clicks = {c.id: c.click for c in get_clicks(db)}
    assert clicks == {"a": 1, "c": 0}


def test_get_clicks_empty(db):
    create_articles(db, [])
    assert get_clicks(db) == []


def test_get_clicks_without_table_raises(db):
    with pytest.raises(sqlite3.OperationalError, match="no such table"):
        get_clicks(db)


def test_comments_round_trip(db):
    create_comments(db)
    db.execute(
        "INSERT INTO comments (article_id, content, email, created_at) VALUES (?, ?, ?, ?)",
        ("post", "hello", "reader@example.com", 1234),
    )
    comments = get_comments(db)
    assert len(comments) == 1
    comment = comments[0]
    assert comment.id == "1"
    assert (comment.article_id, comment.content, comment.email, comment.created_at) == (
        "post",
        "hello",
        "reader@example.com",
        1234,
    )


def test_create_comments_is_idempotent(db):
    create_comments(db)
    create_comments(db)
    indexes = [row[0] for row in db.execute("SELECT name FROM sqlite_master WHERE type='index'")]
    assert "idx_article_id" in indexes
    assert get_comments(db) == []


def test_backup_copies_data(db, tmp_path):
    create_articles(db, [Article(id="x")])
    dest = open_database(tmp_path / "copy.db")
    try:
        backup(dest, db)
        assert get_clicks(dest) == [ArticleClick(id="x", click=0)]
    finally:
        dest.close()


def test_backup_blog_with_connection(db, tmp_path):
    create_articles(db, [Article(id="kept")])
    data_dir = tmp_path / "data"
    target = backup_blog(db, data_dir)

    assert target.parent == data_dir / "backup"
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}_\d{2}-\d{2}-\d{2}", target.name)
    assert not (data_dir / "backup" / "tmp").exists()

    info = json.loads((target / "build-info.json").read_text(encoding="utf-8"))
    assert isinstance(info, dict) and "python" in info

    copy = open_database(target / "blog.db")
    try:
        assert get_clicks(copy) == [ArticleClick(id="kept", click=0)]
    finally:
        copy.close()


def test_backup_blog_opens_default_database(tmp_path):
    source = open_database(tmp_path / "blog.db")
    try:
        create_articles(source, [Article(id="from-file")])
    finally:
        source.close()

    target = backup_blog(None, tmp_path)
    copy = open_database(target / "blog.db")
    try:
        assert [c.id for c in get_clicks(copy)] == ["from-file"]
    finally:
        copy.close()