"""HTTP error types and the default error handler."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any, Iterator

logger = logging.getLogger(__name__)


def status_text(code: int) -> str:
    """Return the standard reason phrase for an HTTP status code, or ""."""
    try:
        return HTTPStatus(code).phrase
    except ValueError:
        return ""


@dataclass
class ErrorItem:
    """One item of detail attached to an HTTP error."""

    name: str
    reason: str
    more: dict[str, Any] = field(default_factory=dict)


class HTTPError(Exception):
    """Error response used by the serialization part of the framework."""

    def __init__(
        self,
        err: BaseException | None = None,
        *,
        type: str = "",
        title: str = "",
        status: int = 0,
        detail: str = "",
        instance: str = "",
        errors: list[ErrorItem] | None = None,
    ) -> None:
        super().__init__()
        self.err = err
        self.type = type
        self.title = title
        self.status = status
        self.detail = detail
        self.instance = instance
        self.errors = list(errors or [])

    def status_code(self) -> int:
        return self.status or HTTPStatus.INTERNAL_SERVER_ERROR

    def detail_msg(self) -> str:
        return self.detail

    def to_dict(self) -> dict[str, Any]:
        """Serializable form, omitting empty fields."""
        out: dict[str, Any] = {}
        for key in ("type", "title", "status", "detail", "instance"):
            value = getattr(self, key)
            if value:
                out[key] = value
        if self.errors:
            out["errors"] = [
                {"name": e.name, "reason": e.reason, **({"more": e.more} if e.more else {})}
                for e in self.errors
            ]
        return out

    def __str__(self) -> str:
        code = self.status_code()
        title = self.title or status_text(code) or "HTTP Error"
        return f"{code} {title}: {self.detail_msg()}"


class _StatusError(HTTPError):
    _code = HTTPStatus.INTERNAL_SERVER_ERROR

    def status_code(self) -> int:
        return int(self._code)

    def __str__(self) -> str:
        if self.err is not None:
            return str(self.err)
        return super().__str__()


class BadRequestError(_StatusError):
    """Error answered with a 400 status."""

    _code = HTTPStatus.BAD_REQUEST


class NotFoundError(_StatusError):
    """Error answered with a 404 status."""

    _code = HTTPStatus.NOT_FOUND


class UnauthorizedError(_StatusError):
    """Error answered with a 401 status."""

    _code = HTTPStatus.UNAUTHORIZED


class ForbiddenError(_StatusError):
    """Error answered with a 403 status."""

    _code = HTTPStatus.FORBIDDEN


class ConflictError(_StatusError):
    """Error answered with a 409 status."""

    _code = HTTPStatus.CONFLICT


class NotAcceptableError(_StatusError):
    """Error answered with a 406 status."""

    _code = HTTPStatus.NOT_ACCEPTABLE


InternalServerError = HTTPError


def _chain(err: BaseException | None) -> Iterator[BaseException]:
    seen: set[int] = set()
    while err is not None and id(err) not in seen:
        seen.add(id(err))
        yield err
        nxt = getattr(err, "err", None) if isinstance(err, HTTPError) else None
        if nxt is None:
            nxt = getattr(err, "unwrap", lambda: None)() if callable(getattr(err, "unwrap", None)) else None
        if nxt is None:
            nxt = err.__cause__
        err = nxt


def _has_status(err: BaseException) -> bool:
    return callable(getattr(err, "status_code", None))


def error_handler(err: BaseException) -> BaseException:
    """Turn errors carrying HTTP information into a plain HTTPError."""
    if any(isinstance(e, HTTPError) or _has_status(e) for e in _chain(err)):
        return _handle_http_error(err)
    return err


def _handle_http_error(err: BaseException) -> HTTPError:
    response = HTTPError(err)
    chain = list(_chain(err))

    info = next((e for e in chain if isinstance(e, HTTPError)), None)
    if info is not None:
        response = HTTPError(
            info.err,
            type=info.type,
            title=info.title,
            status=info.status,
            detail=info.detail,
            instance=info.instance,
            errors=info.errors,
        )

    with_status = next((e for e in chain if _has_status(e)), None)
    if with_status is not None:
        response.status = with_status.status_code()

    with_detail = next((e for e in chain if callable(getattr(e, "detail_msg", None))), None)
    if with_detail is not None:
        response.detail = with_detail.detail_msg()

    if not response.title:
        response.title = status_text(response.status)

    logger.error(
        "Error %s status=%s detail=%s error=%r",
        response.title,
        response.status_code(),
        response.detail_msg(),
        response.err,
    )
    return response