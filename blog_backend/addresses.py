"""Parsing of single e-mail addresses."""

from __future__ import annotations

import string
from dataclasses import dataclass

_ATEXT = frozenset(string.ascii_letters + string.digits + "!#$%&'*+-/=?^_`{|}~")


@dataclass(frozen=True)
class Address:
    name: str
    address: str


def _atext(word: str, extra: str = "") -> bool:
    return all(c in _ATEXT or c in extra or ord(c) > 127 for c in word)


def _dot_atom(text: str) -> bool:
    return all(part and _atext(part) for part in text.split("."))


def _unquote(text: str) -> str:
    if len(text) < 2 or text[0] != '"' or text[-1] != '"':
        raise ValueError("mail: bad quoted-string")
    chars, escaped = [], False
    for char in text[1:-1]:
        if escaped or char not in '\\"':
            chars.append(char)
            escaped = False
        elif char == "\\":
            escaped = True
        else:
            raise ValueError("mail: bad quoted-string")
    if escaped:
        raise ValueError("mail: bad quoted-string")
    return "".join(chars)


def _phrase(text: str) -> str:
    if text.startswith('"'):
        return _unquote(text)
    words = text.split()
    if not all(_atext(word, ".") for word in words):
        raise ValueError(f"mail: invalid display name {text!r}")
    return " ".join(words)


def _check_spec(spec: str) -> None:
    at = spec.rfind("@")
    if at < 0:
        raise ValueError("mail: missing @ in addr-spec")
    local, domain = spec[:at], spec[at + 1:]
    if not local or not domain:
        raise ValueError("mail: invalid addr-spec")
    if local.startswith('"'):
        _unquote(local)
    elif not _dot_atom(local):
        raise ValueError("mail: invalid local part")
    if domain.startswith("["):
        if not domain.endswith("]") or any(c in "[]\\" for c in domain[1:-1]):
            raise ValueError("mail: invalid domain literal")
    elif not _dot_atom(domain):
        raise ValueError("mail: invalid domain")


def parse_address(text: str) -> Address:
    """Parse ``Name <user@host>`` or ``user@host``; raise ValueError when invalid."""
    stripped = text.strip()
    if not stripped:
        raise ValueError("mail: no address")
    name, spec = "", stripped
    if stripped.endswith(">"):
        start = stripped.rfind("<")
        if start < 0:
            raise ValueError("mail: unclosed angle-addr")
        name, spec = _phrase(stripped[:start].strip()), stripped[start + 1:-1].strip()
    elif "<" in stripped or ">" in stripped:
        raise ValueError("mail: unclosed angle-addr")
    _check_spec(spec)
    return Address(name, spec)