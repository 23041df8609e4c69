"""Data objects exchanged with the blog front end."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Article:
    id: str

    def to_json(self) -> dict[str, Any]:
        return {"id": self.id}


@dataclass
class ArticleClick:
    id: str
    click: int = 0

    def to_json(self) -> dict[str, Any]:
        return {"id": self.id, "click": self.click}


@dataclass
class ArticleComment:
    id: str
    article_id: str
    content: str
    email: str
    created_at: int

    def to_json(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "articleId": self.article_id,
            "content": self.content,
            "email": self.email,
            "createdAt": self.created_at,
        }


def load_articles(path: str | os.PathLike[str] = "./.data/articles.json") -> list[Article]:
    """Read the article list; a missing id reads as "" and null as no articles."""
    with open(path, encoding="utf-8") as file:
        raw = json.load(file)
    if not isinstance(raw, (list, type(None))):
        raise ValueError("articles must be a JSON array")
    articles = []
    for entry in raw or []:
        if not isinstance(entry, (dict, type(None))):
            raise ValueError("each article must be a JSON object")
        article_id = (entry or {}).get("id") or ""
        if not isinstance(article_id, str):
            raise ValueError("article id must be a string")
        articles.append(Article(article_id))
    return articles