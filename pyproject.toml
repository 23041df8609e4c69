[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "blog-backend"
version = "0.1.0"
description = "Small WSGI backend for a static blog: article click counters, reader comments, JSON snapshots and SQLite backups."
requires-python = ">=3.10"
keywords = ["blog", "comments", "click-counter", "wsgi", "sqlite"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Web Environment",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: Dynamic Content :: News/Diary",
    "Topic :: Internet :: WWW/HTTP :: WSGI :: Application",
]
dependencies = [
    "werkzeug",
    "watchdog",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
blog-srv = "blog_backend.server:main"
blog-cli = "blog_backend.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["blog_backend"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]
