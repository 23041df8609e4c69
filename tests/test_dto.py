import json

import pytest

from blog_backend.dto import Article, ArticleClick, ArticleComment, load_articles


def test_article_to_json():
    assert Article(id="hello-world").to_json() == {"id": "hello-world"}


def test_click_to_json():
    assert ArticleClick(id="post", click=7).to_json() == {"id": "post", "click": 7}


def test_comment_to_json_uses_front_end_keys():
    comment = ArticleComment(
        id="3", article_id="post", content="nice", email="reader@example.com", created_at=1700
    )
    assert comment.to_json() == {
        "id": "3",
        "articleId": "post",
        "content": "nice",
        "email": "reader@example.com",
        "createdAt": 1700,
    }


def test_load_articles_reads_ids(tmp_path):
    path = tmp_path / "articles.json"
    path.write_text(json.dumps([{"id": "a"}, {"id": "b", "title": "ignored"}]), encoding="utf-8")
    assert load_articles(path) == [Article(id="a"), Article(id="b")]


def test_load_articles_missing_id_is_empty(tmp_path):
    path = tmp_path / "articles.json"
    path.write_text('[{"title": "x"}]', encoding="utf-8")
    assert load_articles(path) == [Article(id="")]


def test_load_articles_null_is_empty(tmp_path):
    path = tmp_path / "articles.json"
    path.write_text("null", encoding="utf-8")
    assert load_articles(path) == []


def test_load_articles_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_articles(tmp_path / "absent.json")


def test_load_articles_invalid_json(tmp_path):
    path = tmp_path / "articles.json"
    path.write_text("[{", encoding="utf-8")
    with pytest.raises(json.JSONDecodeError):
        load_articles(path)


@pytest.mark.parametrize("document", ['{"id": "a"}', '[{"id": 5}]', "[1]"])
def test_load_articles_wrong_shape(tmp_path, document):
    path = tmp_path / "articles.json"
    path.write_text(document, encoding="utf-8")
    with pytest.raises(ValueError):
        load_articles(path)