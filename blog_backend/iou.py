"""Atomic JSON file output."""

from __future__ import annotations

import dataclasses
import json
import os
from typing import Any

_ESCAPES = {"<": "\\u003c", ">": "\\u003e", "&": "\\u0026", "\u2028": "\\u2028", "\u2029": "\\u2029"}


def _default(obj: Any) -> Any:
    if callable(getattr(obj, "to_json", None)):
        return obj.to_json()
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    raise TypeError(f"object of type {type(obj).__name__} is not JSON serializable")


def write_json_to_file(file_path: str | os.PathLike[str], data: Any) -> None:
    """Write ``data`` as one line of JSON via ``file_path + ".tmp"``, then move it into place."""
    text = json.dumps(data, default=_default, ensure_ascii=False, allow_nan=False, separators=(",", ":"))
    # These characters only occur inside JSON strings, so replacing them everywhere is safe.
    text = "".join(_ESCAPES.get(char, char) for char in text) + "\n"
    target = os.fspath(file_path)
    with open(target + ".tmp", "w", encoding="utf-8", newline="") as file:
        file.write(text)
    os.replace(target + ".tmp", target)