"""The WSGI application serving article clicks and comments."""

from __future__ import annotations

import json
import logging
import sqlite3
import time
from typing import Any, Callable, Iterable

from werkzeug.wrappers import Request, Response

from .addresses import parse_address
from .ratelimit import RateLimiter

log = logging.getLogger(__name__)

_CORS_METHODS = frozenset({"GET", "POST", "HEAD"})
_CORS_HEADERS = frozenset({"accept", "content-type", "x-requested-with", "referrer-policy", "origin"})


def _error(message: str, status: int) -> Response:
    response = Response(message + "\n", status=status, content_type="text/plain; charset=utf-8")
    response.headers["X-Content-Type-Options"] = "nosniff"
    return response


def _json(payload: Any) -> Response:
    return Response(json.dumps(payload, separators=(",", ":")) + "\n", content_type="application/json")


def _form_value(request: Request, key: str) -> str:
    return request.form[key] if key in request.form else request.args.get(key, "")


def _preflight(request: Request) -> Response:
    response = Response(status=204)
    for name in ("Origin", "Access-Control-Request-Method", "Access-Control-Request-Headers"):
        response.vary.add(name)
    method = request.headers["Access-Control-Request-Method"].upper()
    raw = request.headers.get("Access-Control-Request-Headers", "")
    requested = [h.strip().lower() for h in raw.split(",") if h.strip()]
    if request.headers.get("Origin") and method in _CORS_METHODS and _CORS_HEADERS.issuperset(requested):
        response.headers["Access-Control-Allow-Origin"] = "*"
        response.headers["Access-Control-Allow-Methods"] = method
        if requested:
            response.headers["Access-Control-Allow-Headers"] = ", ".join(requested)
    return response


class BlogApp:
    """Routes ``/article/click`` and ``/article/comment`` behind a CORS layer."""

    def __init__(self, db: sqlite3.Connection, comment_limiter: RateLimiter | None = None,
                 clock: Callable[[], float] = time.time) -> None:
        self.db = db
        self.comment_limiter = comment_limiter or RateLimiter()
        self.clock = clock
        self._routes = {"/article/click": self.handle_click, "/article/comment": self.handle_comment}

    def __call__(self, environ: dict, start_response: Callable) -> Iterable[bytes]:
        request = Request(environ)
        if request.method == "OPTIONS" and request.headers.get("Access-Control-Request-Method"):
            response = _preflight(request)
        else:
            handler = self._routes.get(request.path)
            response = handler(request) if handler else _error("404 page not found", 404)
            response.vary.add("Origin")
            if request.headers.get("Origin") and request.method in _CORS_METHODS:
                response.headers["Access-Control-Allow-Origin"] = "*"
        return response(environ, start_response)

    def article_exists(self, article_id: str) -> bool:
        row = self.db.execute("SELECT EXISTS(SELECT 1 FROM articles WHERE id=?)", (article_id,)).fetchone()
        return bool(row[0])

    def handle_click(self, request: Request) -> Response:
        """GET reads an article's click count, POST adds one click."""
        try:
            if request.method == "GET":
                return self._click_get(request)
            if request.method == "POST":
                return self._click_post(request)
        except sqlite3.Error:
            return _error("Internal server error", 500)
        return _error("Method not allowed", 405)

    def _click_get(self, request: Request) -> Response:
        article_id = request.args.get("id", "")
        if not article_id:
            return _error("Bad request", 400)
        row = self.db.execute("SELECT click FROM articles WHERE id=?", (article_id,)).fetchone()
        if row is None:
            return _error("Not found", 404)
        return _json({"count": row[0] or 0})

    def _click_post(self, request: Request) -> Response:
        try:
            payload = json.loads(request.get_data())
        except ValueError:
            return _error("Bad request", 400)
        if not isinstance(payload, (dict, type(None))):
            return _error("Bad request", 400)
        article_id = (payload or {}).get("id") or ""
        if not article_id or not isinstance(article_id, str):
            return _error("Bad request", 400)
        if not self.article_exists(article_id):
            return _error("Article not found", 404)
        self.db.execute("UPDATE articles SET click = click + 1 WHERE id=?", (article_id,))
        log.info("Article clicked: %s, from %s", article_id, request.remote_addr)
        return _json({"message": "Successfully"})

    def handle_comment(self, request: Request) -> Response:
        """POST stores a comment, subject to the comment rate limit."""
        if request.method != "POST":
            return _error("Method not allowed", 405)
        if not self.comment_limiter.reserve():
            return Response(status=429)
        try:
            return self._comment_post(request)
        except sqlite3.Error:
            return _error("Internal server error", 500)

    def _comment_post(self, request: Request) -> Response:
        created_at = int(self.clock() * 1000)
        article_id = _form_value(request, "articleId")
        if not article_id:
            return _error("Empty articleId", 400)
        if not self.article_exists(article_id):
            return _error("Article not found", 404)
        content = _form_value(request, "content")
        if not content:
            return _error("Empty content", 400)
        email = _form_value(request, "email")
        if not email:
            return _error("Empty email", 400)
        for value, limit, message in ((content, 4096, "Comment too long"),
                                      (article_id, 64, "Article ID too long"),
                                      (email, 128, "Email too long")):
            if len(value.encode("utf-8")) > limit:
                return _error(message, 400)
        try:
            parse_address(email)
        except ValueError:
            return _error("Invalid email format", 400)
        self.db.execute(
            "INSERT INTO comments (article_id, content, email, created_at) VALUES (?, ?, ?, ?)",
            (article_id, content, email, created_at),
        )
        response = Response('{"status":"ok"}', content_type="application/json")
        response.headers["Access-Control-Allow-Headers"] = "Content-Type"
        log.info("Comment added to article: %s", article_id)
        return response