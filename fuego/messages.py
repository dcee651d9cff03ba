"""Minimal HTTP request and response objects."""

from __future__ import annotations

from dataclasses import dataclass, field
from http.cookies import SimpleCookie
from typing import Any
from urllib.parse import parse_qs, urlsplit


def _canonical(key: str) -> str:
    return "-".join(part.capitalize() for part in key.split("-"))


@dataclass
class Request:
    """An incoming HTTP request."""

    method: str = "GET"
    url: str = "/"
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    path_params: dict[str, str] = field(default_factory=dict)
    context: Any = None

    def __post_init__(self) -> None:
        self.headers = {_canonical(k): v for k, v in self.headers.items()}
        if isinstance(self.body, str):
            self.body = self.body.encode()

    @property
    def raw_query(self) -> str:
        return urlsplit(self.url).query

    @property
    def path(self) -> str:
        return urlsplit(self.url).path or "/"

    def query(self) -> dict[str, list[str]]:
        """Parsed query string: each name maps to all its values."""
        return parse_qs(self.raw_query, keep_blank_values=True)

    def header(self, key: str) -> str:
        """Header value, or "" when absent."""
        return self.headers.get(_canonical(key), "")

    def cookie(self, name: str) -> str:
        """Value of a request cookie; KeyError when absent."""
        jar = SimpleCookie()
        jar.load(self.header("Cookie"))
        if name not in jar:
            raise KeyError(f"named cookie not present: {name}")
        return jar[name].value


@dataclass
class Response:
    """An outgoing HTTP response being built."""

    status: int = 200
    headers: dict[str, list[str]] = field(default_factory=dict)
    body: bytearray = field(default_factory=bytearray)

    def header(self, key: str) -> str:
        values = self.headers.get(_canonical(key))
        return values[0] if values else ""

    def set_header(self, key: str, value: str) -> None:
        self.headers[_canonical(key)] = [value]

    def add_header(self, key: str, value: str) -> None:
        self.headers.setdefault(_canonical(key), []).append(value)

    def set_cookie(
        self,
        name: str,
        value: str,
        path: str = "",
        max_age: int | None = None,
        http_only: bool = False,
    ) -> None:
        jar = SimpleCookie()
        jar[name] = value
        morsel = jar[name]
        if path:
            morsel["path"] = path
        if max_age is not None:
            morsel["max-age"] = str(max_age)
        if http_only:
            morsel["httponly"] = True
        self.add_header("Set-Cookie", morsel.OutputString())

    def write(self, data: bytes | str) -> int:
        if isinstance(data, str):
            data = data.encode()
        self.body.extend(data)
        return len(data)