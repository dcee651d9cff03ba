"""Per-request context handed to controllers."""

from __future__ import annotations

import logging
import posixpath
import re
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlsplit

from .deserialization import (
    DEFAULT_READ_OPTIONS,
    ReadOptions,
    parse_bool,
    read_json,
    read_string,
    read_urlencoded,
    read_xml,
    read_yaml,
)
from .errors import status_text
from .messages import Request, Response

logger = logging.getLogger(__name__)

_BODY_TOO_LARGE = "http: request body too large"
_INT_RE = re.compile(r"[+-]?[0-9]+")
_YAML_TYPES = ("application/x-yaml", "text/yaml; charset=utf-8", "application/yaml")
_FORM_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")
_UNSET = object()


class QueryParamNotFoundError(LookupError):
    """A query parameter is missing and has no default."""

    def __init__(self, param_name: str) -> None:
        super().__init__(f"param {param_name} not found")
        self.param_name = param_name


class QueryParamInvalidTypeError(ValueError):
    """A query parameter cannot be read as the expected type."""

    def __init__(self, param_name: str, param_value: str, expected_type: str, err: Exception) -> None:
        super().__init__(f"param {param_name}={param_value} is not of type {expected_type}: {err}")
        self.param_name = param_name
        self.param_value = param_value
        self.expected_type = expected_type
        self.err = err


@dataclass
class QueryParamSpec:
    """A query parameter declared for a route."""

    default: Any = None
    description: str = ""
    required: bool = False
    nullable: bool = False
    examples: dict[str, Any] = field(default_factory=dict)


class _LimitedBody:
    """File-like view of a body that refuses to be read past a size limit."""

    def __init__(self, data: bytes, limit: int) -> None:
        self._data = data
        self._limit = limit

    def read(self) -> bytes:
        if self._limit and len(self._data) > self._limit:
            raise OSError(_BODY_TOO_LARGE)
        return self._data


def _html_escape(text: str) -> str:
    for old, new in (("&", "&amp;"), ("<", "&lt;"), (">", "&gt;"), ('"', "&#34;"), ("'", "&#39;")):
        text = text.replace(old, new)
    return text


class Context:
    """The request, the response being built, and helpers to read and write them."""

    def __init__(
        self,
        request: Request,
        response: Response | None = None,
        body_type: Any = None,
        options: ReadOptions | None = None,
        params: dict[str, QueryParamSpec] | None = None,
    ) -> None:
        self.request = request
        self.response = response if response is not None else Response()
        self.body_type = body_type
        self.options = options if options is not None else DEFAULT_READ_OPTIONS
        self.params = dict(params or {})
        self._url_values = request.query()
        self._cached: Any = _UNSET

    @property
    def context(self) -> Any:
        return self.request.context

    # Body -----------------------------------------------------------------

    def body(self) -> Any:
        """Decode the request body according to its Content-Type; cached."""
        if self._cached is _UNSET:
            try:
                self._cached = (self._decode_body(), None)
            except Exception as exc:
                self._cached = (None, exc)
        value, error = self._cached
        if error is not None:
            raise error
        return value

    def must_body(self) -> Any:
        """Like body(); any decoding error propagates."""
        return self.body()

    def _decode_body(self) -> Any:
        raw = self.request.body
        limit = self.options.max_body_size
        source = _LimitedBody(raw, limit)
        ctx = self.request.context
        content_type = self.request.header("Content-Type")

        if content_type == "text/plain":
            return read_string(source, self._string_type(), self.options, ctx)
        if content_type in _FORM_TYPES:
            if limit and len(raw) > limit:
                raise ValueError(f"cannot parse form: {_BODY_TOO_LARGE}")
            return read_urlencoded(self.request, self.body_type, self.options)
        if content_type == "application/xml":
            return read_xml(source, self.body_type, self.options, ctx)
        if content_type in _YAML_TYPES:
            return read_yaml(source, self.body_type, self.options, ctx)
        if content_type == "application/octet-stream":
            data = source.read()
            if self.body_type not in (None, Any, object, bytes):
                name = getattr(self.body_type, "__name__", repr(self.body_type))
                raise TypeError(
                    f"could not convert bytes to {name}. "
                    "To read binary data from the request, use bytes as the body type"
                )
            return bytes(data)
        return read_json(source, self.body_type, self.options, ctx)

    def _string_type(self) -> type:
        if self.body_type in (None, Any, object):
            return str
        if isinstance(self.body_type, type) and issubclass(self.body_type, str):
            return self.body_type
        raise TypeError(f"cannot read a text/plain body into {self.body_type!r}")

    # Parameters -----------------------------------------------------------

    def path_param(self, name: str) -> str:
        return self.request.path_params.get(name, "")

    def query_params(self) -> dict[str, list[str]]:
        return self._url_values

    def _warn_unexpected(self, name: str) -> None:
        if name not in self.params:
            logger.warning(
                "query parameter not expected in OpenAPI spec: param=%s expected_one_of=%s",
                name,
                list(self.params),
            )

    def _default(self, name: str) -> Any:
        spec = self.params.get(name)
        return spec.default if spec is not None else None

    def query_param_arr(self, name: str) -> list[str]:
        self._warn_unexpected(name)
        return list(self._url_values.get(name, []))

    def query_param(self, name: str) -> str:
        """First value of a query parameter, else its declared string default, else ""."""
        self._warn_unexpected(name)
        if name not in self._url_values:
            default = self._default(name)
            return default if isinstance(default, str) else ""
        values = self._url_values[name]
        return values[0] if values else ""

    def query_param_int_err(self, name: str) -> int:
        value = self.query_param(name)
        if value == "":
            default = self._default(name)
            if isinstance(default, int) and not isinstance(default, bool):
                return default
            raise QueryParamNotFoundError(name)
        if not _INT_RE.fullmatch(value):
            raise QueryParamInvalidTypeError(name, value, "int", ValueError(f"invalid syntax: {value!r}"))
        return int(value)

    def query_param_int(self, name: str) -> int:
        try:
            return self.query_param_int_err(name)
        except (QueryParamNotFoundError, QueryParamInvalidTypeError):
            return 0

    def query_param_bool_err(self, name: str) -> bool:
        value = self.query_param(name)
        if value == "":
            default = self._default(name)
            if isinstance(default, bool):
                return default
            raise QueryParamNotFoundError(name)
        try:
            return parse_bool(value)
        except ValueError as exc:
            raise QueryParamInvalidTypeError(name, value, "bool", exc) from exc

    def query_param_bool(self, name: str) -> bool:
        try:
            return self.query_param_bool_err(name)
        except (QueryParamNotFoundError, QueryParamInvalidTypeError):
            return False

    # Locale ---------------------------------------------------------------

    def main_locale(self) -> str:
        return self.request.header("Accept-Language").split(",")[0]

    def main_lang(self) -> str:
        return self.main_locale().split("-")[0]

    # Headers and cookies --------------------------------------------------

    def header(self, key: str) -> str:
        return self.request.header(key)

    def has_header(self, key: str) -> bool:
        return self.header(key) != ""

    def set_header(self, key: str, value: str) -> None:
        self.response.set_header(key, value)

    def cookie(self, name: str) -> str:
        return self.request.cookie(name)

    def has_cookie(self, name: str) -> bool:
        try:
            self.cookie(name)
        except KeyError:
            return False
        return True

    def set_cookie(self, name: str, value: str) -> None:
        self.response.set_cookie(name, value)

    # Response -------------------------------------------------------------

    def set_status(self, code: int) -> None:
        self.response.status = code

    def redirect(self, code: int, url: str) -> None:
        """Answer with a redirection to url."""
        location = self._resolve_location(url)
        method = self.request.method.upper()
        self.response.set_header("Location", location)
        if method in ("GET", "HEAD") and not self.response.header("Content-Type"):
            self.response.set_header("Content-Type", "text/html; charset=utf-8")
        self.response.status = code
        if method == "GET":
            self.response.write(f'<a href="{_html_escape(location)}">{status_text(code)}</a>.\n\n')
        return None

    def _resolve_location(self, url: str) -> str:
        parts = urlsplit(url)
        if parts.scheme or parts.netloc:
            return url
        if not url:
            url = "/"
        if not url.startswith("/"):
            old = self.request.path
            url = old[: old.rfind("/") + 1] + url
        path, sep, query = url.partition("?")
        trailing = path.endswith("/")
        cleaned = posixpath.normpath(path)
        if cleaned.startswith("//"):
            cleaned = "/" + cleaned.lstrip("/")
        if trailing and not cleaned.endswith("/"):
            cleaned += "/"
        return cleaned + sep + query