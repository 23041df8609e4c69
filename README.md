# blog-backend

A small HTTP backend for a statically generated blog. It keeps a click
counter for every article and accepts reader comments, storing both in a
SQLite database. In the background it keeps the article table in step with
the published article list, writes JSON snapshots of clicks and comments for
the site generator to pick up, and makes a daily backup of the database.

## Installation

```
pip install .
```

For running the test suite:

```
pip install ".[test]"
pytest
```

## Running the server

```
blog-srv
```

Options:

- `--port` – port to listen on (default `13333`, on all interfaces)
- `--data-dir` – directory holding the data files (default `.data`),
  created when it is missing

Besides the HTTP server, `blog-srv` starts three background jobs:

- it creates the tables from `articles.json` and reloads them whenever that
  file is modified;
- it writes the JSON snapshots at once and then every hour;
- it backs the database up every 24 hours (the first backup is made 24 hours
  after start).

### Data directory

| File                                  | Purpose |
|---------------------------------------|---------|
| `articles.json`                       | List of published articles, `[{"id": "..."}, ...]`. Watched for changes. |
| `blog.db`                             | SQLite database with the `articles` and `comments` tables. |
| `article-clicks.json`                 | Snapshot of click counts, `[{"id": ..., "click": ...}]`. |
| `article-email-comments.json`         | Snapshot of comments including the full e-mail addresses. |
| `article-comments.json`               | Snapshot of comments where `email` holds only the display name of the address (empty when there is none). |
| `backup/<YYYY-MM-DD_HH-MM-SS>/`       | Database backups, each with `blog.db` and `build-info.json`. |

Snapshots are written as single-line JSON; an empty table is written as
`null`. Whenever `articles.json` is rewritten, new article ids are added to
the database; existing counters are left as they are.

## HTTP API

### `GET /article/click?id=<article id>`

Returns the click count of an article:

```json
{"count":42}
```

Answers `400` when `id` is missing and `404` for an unknown article.

### `POST /article/click`

Body: `{"id": "<article id>"}`. Adds one to the article's counter and
answers `{"message":"Successfully"}`. Answers `400` for a malformed body or
missing id and `404` for an unknown article.

### `POST /article/comment`

Form fields (also accepted from the query string):

- `articleId` – an existing article, at most 64 bytes
- `content` – the comment text, at most 4096 bytes
- `email` – an RFC 5322 address such as `Jane Doe <jane@example.com>`, at
  most 128 bytes

Answers `{"status":"ok"}` on success, `400` for missing or invalid fields,
`404` for an unknown article, and `429` when the comment rate limiter has no
token to give. The server's default limiter refills one token per
nanosecond with a burst of one.

Other methods on either path answer `405`; other paths answer `404`.

Cross-origin requests are allowed from any origin for the methods `GET`,
`POST` and `HEAD` and the headers `accept`, `content-type`,
`x-requested-with`, `referrer-policy` and `origin`; preflight requests are
answered with `204`.

## Using it as a library

`blog_backend.server.create_app(data_dir)` creates the data directory and
database and returns a `BlogApp`, a WSGI application that any WSGI server
can run. Note that it does not start the background jobs.

The building blocks are available on their own:

- `blog_backend.app.BlogApp(db, comment_limiter=None, clock=time.time)` –
  the WSGI application
- `blog_backend.store` – `open_database`, `get_clicks`, `get_comments`,
  `create_articles`, `create_comments`, `backup`, `backup_blog`
- `blog_backend.background` – `create_tables`, `write_snapshot`, and the
  loops `watch_articles`, `tick_snapshot`, `backup_loop`, each running until
  the `threading.Event` passed as `stop` is set
- `blog_backend.dto` – `Article`, `ArticleClick`, `ArticleComment` and
  `load_articles`
- `blog_backend.iou.write_json_to_file` – writes JSON to a temporary file
  and renames it into place
- `blog_backend.addresses.parse_address` – parses an e-mail address into an
  `Address` with `name` and `address`, raising `ValueError` when invalid
- `blog_backend.ratelimit.RateLimiter(interval, burst, clock)` – a
  token-bucket limiter whose `reserve()` returns whether a token was taken

## Command-line tool

```
blog-cli
```

prints its help text; it has no subcommands.

## What it does not do

The package does not build, upload or deploy the site, and it does not copy
data to or from a remote server; moving `articles.json` into the data
directory and fetching the snapshots are left to the site's own tooling.