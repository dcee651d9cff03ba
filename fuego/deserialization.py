"""Reading request bodies as JSON, XML, YAML, strings and forms."""

from __future__ import annotations

import dataclasses
import json
import logging
import typing
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

import yaml

from .errors import BadRequestError, ErrorItem
from .messages import Request

logger = logging.getLogger(__name__)

MAX_BODY_SIZE = 1048576


@dataclass
class ReadOptions:
    """Options for reading a request body."""

    disallow_unknown_fields: bool = True
    max_body_size: int = MAX_BODY_SIZE
    log_body: bool = False


DEFAULT_READ_OPTIONS = ReadOptions()


@runtime_checkable
class InTransformer(Protocol):
    """A body that transforms itself after decoding.

    It may mutate itself or return a replacement value.
    """

    def in_transform(self, context: Any) -> Any: ...


_TRUE = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE = {"0", "f", "F", "FALSE", "false", "False"}

_NAMED_TYPES: dict[str, Any] = {
    "str": str,
    "int": int,
    "float": float,
    "bool": bool,
    "bytes": bytes,
    "dict": dict,
    "list": list,
    "Any": Any,
    "object": object,
}


def parse_bool(value: str) -> bool:
    """Parse a boolean the way common HTTP tooling does."""
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"invalid syntax: {value!r}")


def convert_null_string(value: str) -> str | None:
    return value


def convert_null_bool(value: str) -> bool | None:
    try:
        return parse_bool(value)
    except ValueError:
        return None


def _read_all(data: Any) -> bytes:
    if data is None:
        return b""
    if isinstance(data, str):
        return data.encode()
    if isinstance(data, (bytes, bytearray)):
        return bytes(data)
    chunk = data.read()
    return chunk.encode() if isinstance(chunk, str) else bytes(chunk)


def _resolve(tp: Any) -> Any:
    """Resolve a field annotation; unknown string annotations are treated as Any."""
    if isinstance(tp, str):
        return _NAMED_TYPES.get(tp.strip(), Any)
    return tp


def _hints(body_type: type) -> dict[str, Any]:
    return {f.name: _resolve(f.type) for f in dataclasses.fields(body_type)}


def _field_key(f: dataclasses.Field) -> str:
    return f.metadata.get("alias", f.name)


def _zero(tp: Any) -> Any:
    if dataclasses.is_dataclass(tp):
        hints = _hints(tp)
        kwargs = {}
        for f in dataclasses.fields(tp):
            if f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING:
                kwargs[f.name] = _zero(hints.get(f.name))
        return tp(**kwargs)
    origin = typing.get_origin(tp) or tp
    for kind, value in ((bool, False), (int, 0), (float, 0.0), (str, ""), (bytes, b"")):
        if origin is kind:
            return value
    if origin in (dict, list):
        return origin()
    if isinstance(tp, type) and issubclass(tp, str):
        return tp("")
    return None


def _plain(body_type: Any) -> bool:
    return body_type in (None, Any, object, dict) or typing.get_origin(body_type) is dict


def _coerce(value: Any, tp: Any, name: str, from_text: bool) -> Any:
    origin = typing.get_origin(tp) or tp
    if tp in (None, Any, object):
        return value
    if from_text and isinstance(value, str):
        try:
            if origin is bool:
                return parse_bool(value)
            if origin is int:
                return int(value)
            if origin is float:
                return float(value)
        except ValueError as exc:
            raise ValueError(f"field {name}: {exc}") from exc
    if dataclasses.is_dataclass(tp) and isinstance(value, dict):
        return _build(tp, value, strict=False, from_text=from_text)
    if origin is float and isinstance(value, int) and not isinstance(value, bool):
        return float(value)
    if origin is int and isinstance(value, bool):
        raise ValueError(f"field {name}: expected int, got bool")
    if isinstance(origin, type) and not isinstance(value, origin):
        raise ValueError(f"field {name}: expected {origin.__name__}, got {type(value).__name__}")
    return value


def _build(body_type: type, data: Any, strict: bool, from_text: bool = False) -> Any:
    if not isinstance(data, dict):
        raise ValueError(f"cannot decode {type(data).__name__} into {body_type.__name__}")
    hints = _hints(body_type)
    fields = {_field_key(f): f for f in dataclasses.fields(body_type)}
    unknown = [k for k in data if k not in fields]
    if strict and unknown:
        raise ValueError(f"unknown field {unknown[0]!r}")
    body = _zero(body_type)
    for key, f in fields.items():
        if key in data:
            setattr(body, f.name, _coerce(data[key], hints.get(f.name), key, from_text))
    return body


def _validate(body: Any) -> None:
    check = getattr(body, "validate", None)
    if not callable(check) or isinstance(body, str):
        return
    try:
        check()
    except ValueError as exc:
        raise BadRequestError(exc, title="Validation Error", detail=str(exc)) from exc


def transform(body: Any, context: Any = None) -> Any:
    """Run the body's in_transform hook if it has one."""
    hook = getattr(body, "in_transform", None)
    if not callable(hook):
        return body
    try:
        result = hook(context)
    except Exception as exc:
        raise BadRequestError(exc, detail=f"cannot transform request body: {exc}") from exc
    return body if result is None else result


def _finish(body: Any, context: Any) -> Any:
    logger.debug("Decoded body: %r", body)
    try:
        body = transform(body, context)
    except BadRequestError as exc:
        raise BadRequestError(
            exc,
            title="Transformation Failed",
            detail=f"cannot transform request body: {exc}",
        ) from exc
    _validate(body)
    return body


def _decoding_failed(exc: Exception) -> BadRequestError:
    return BadRequestError(exc, title="Decoding Failed", detail=f"cannot decode request body: {exc}")


def read_json(data: Any, body_type: Any = None, options: ReadOptions | None = None, context: Any = None) -> Any:
    """Decode a JSON body into body_type (a dataclass, a scalar or plain data)."""
    options = options or DEFAULT_READ_OPTIONS
    try:
        raw = _read_all(data).decode()
        if not raw.strip():
            body = _zero(body_type)
        else:
            parsed = json.loads(raw)
            if dataclasses.is_dataclass(body_type):
                body = _build(body_type, parsed, options.disallow_unknown_fields)
            elif _plain(body_type):
                body = parsed
            else:
                body = _coerce(parsed, body_type, "body", False)
    except (ValueError, OSError) as exc:
        raise _decoding_failed(exc) from exc
    return _finish(body, context)


def read_yaml(data: Any, body_type: Any = None, options: ReadOptions | None = None, context: Any = None) -> Any:
    """Decode a YAML body into body_type."""
    options = options or DEFAULT_READ_OPTIONS
    try:
        parsed = yaml.safe_load(_read_all(data).decode())
        if parsed is None:
            body = _zero(body_type)
        elif dataclasses.is_dataclass(body_type):
            body = _build(body_type, parsed, options.disallow_unknown_fields)
        elif _plain(body_type):
            body = parsed
        else:
            body = _coerce(parsed, body_type, "body", False)
    except (ValueError, OSError, yaml.YAMLError) as exc:
        raise _decoding_failed(exc) from exc
    return _finish(body, context)


def read_xml(data: Any, body_type: Any = None, options: ReadOptions | None = None, context: Any = None) -> Any:
    """Decode an XML body; the root element must be named after body_type."""
    options = options or DEFAULT_READ_OPTIONS
    try:
        raw = _read_all(data)
        if not raw.strip():
            body = _zero(body_type)
        else:
            root = ET.fromstring(raw)
            children = {child.tag: (child.text or "").strip() for child in root}
            if dataclasses.is_dataclass(body_type):
                expected = getattr(body_type, "xml_name", body_type.__name__)
                if root.tag != expected:
                    raise ValueError(f"expected element type <{expected}> but have <{root.tag}>")
                body = _build(body_type, children, strict=False, from_text=True)
            else:
                body = children
    except (ValueError, OSError, ET.ParseError) as exc:
        raise _decoding_failed(exc) from exc
    return _finish(body, context)


def read_string(data: Any, body_type: type = str, options: ReadOptions | None = None, context: Any = None) -> Any:
    """Read the whole body as text, converted to body_type (a str type)."""
    try:
        raw = _read_all(data)
    except OSError as exc:
        raise BadRequestError(exc, detail=f"cannot read request body: {exc}") from exc
    body = body_type(raw.decode())
    logger.debug("Read body: %r", body)
    return transform(body, context)


def read_urlencoded(request: Request, body_type: Any = None, options: ReadOptions | None = None) -> Any:
    """Decode an HTML form body into body_type."""
    options = options or DEFAULT_READ_OPTIONS
    if ";" in request.raw_query:
        raise ValueError("cannot parse form: invalid semicolon separator in query")
    form = Request(url="/?" + request.body.decode(errors="replace")).query()
    if ";" in request.body.decode(errors="replace"):
        raise ValueError("cannot parse form: invalid semicolon separator in query")
    values = {key: vals[0] for key, vals in form.items() if vals}

    try:
        if dataclasses.is_dataclass(body_type):
            body = _build(body_type, values, options.disallow_unknown_fields, from_text=True)
        else:
            body = values
    except ValueError as exc:
        raise BadRequestError(
            exc,
            detail=f"cannot decode x-www-form-urlencoded request body: {exc}",
            errors=[ErrorItem("form", "check that the form is valid, and that the content-type is correct")],
        ) from exc
    logger.debug("Decoded body: %r", body)

    try:
        body = transform(body, request.context)
    except BadRequestError as exc:
        raise BadRequestError(
            exc,
            title="Transformation Failed",
            detail=f"cannot transform x-www-form-urlencoded request body: {exc}",
            errors=[ErrorItem("transformation", "transformation failed")],
        ) from exc

    try:
        _validate(body)
    except BadRequestError as exc:
        raise ValueError(f"cannot validate request body: {exc}") from exc
    return body