# fuego

Building blocks for HTTP APIs: a per-request context, request body
deserialization, problem-details style errors, and a command that
scaffolds entity domains.

## Modules

- `fuego.messages`: the `Request` and `Response` objects. A `Request`
  holds the method, URL, headers, body, path parameters and an optional
  context value. `query()`, `header()` and `cookie()` read from it.
  `Response` collects the status, headers and body. It has
  `set_header()`, `add_header()`, `set_cookie()` and `write()`.
- `fuego.context`: `Context` wraps a `Request` and a `Response`.
  - `body()` decodes the body according to `Content-Type` and caches the
    result. The supported types are JSON (also the fallback), XML, YAML,
    `text/plain`, form-encoded and `application/octet-stream`.
    `must_body()` does the same.
  - `path_param()` reads path parameters.
  - `query_param()`, `query_param_arr()`, `query_param_int()`,
    `query_param_int_err()`, `query_param_bool()`,
    `query_param_bool_err()` and `query_params()` read query parameters.
  - `main_locale()` and `main_lang()` read the first entry of
    `Accept-Language`.
  - `header()`, `has_header()`, `set_header()`, `cookie()`,
    `has_cookie()` and `set_cookie()` handle headers and cookies.
  - `set_status()` sets the response status and `redirect()` answers
    with a redirection.
- `fuego.deserialization`: `read_json`, `read_xml`, `read_yaml`,
  `read_string` and `read_urlencoded` decode into a dataclass, a scalar
  or plain data.
  - `ReadOptions` sets whether unknown fields are rejected and the
    maximum body size.
  - A body with an `in_transform(context)` method (see `InTransformer`)
    is transformed after decoding.
  - A body with a `validate()` method is validated, and a `ValueError`
    from it becomes a `BadRequestError`.
  - The helpers are `parse_bool`, `convert_null_string`,
    `convert_null_bool` and `transform`.
- `fuego.errors`: `HTTPError` and the fixed-status errors
  `BadRequestError` (400), `UnauthorizedError` (401), `ForbiddenError`
  (403), `NotFoundError` (404), `NotAcceptableError` (406) and
  `ConflictError` (409). `ErrorItem` holds one item of error detail.
  `status_text(code)` returns the standard reason phrase, and
  `error_handler(err)` turns errors that carry HTTP information into a
  plain `HTTPError`.
- `fuego.templates`: the text of the scaffolding templates. The names
  are `entity.py`, `controller.py` and `service.py`. Use
  `template_names()`, `get_template()` and `render_template()`.
- `fuego.cli`: the `fuego` command. It offers `create_entity_file`,
  `controller_command`, `service_command` and `main`.

## Installation

```
pip install fuego
```

For the test suite:

```
pip install "fuego[test]"
```

## Reading a request body

```python
from dataclasses import dataclass
from fuego.deserialization import ReadOptions, read_json

@dataclass
class Book:
    name: str = ""
    age: int = 0

book = read_json(b'{"name": "Dune", "age": 30}', Book, ReadOptions(), None)
```

If a body cannot be decoded, transformed or validated, a
`BadRequestError` is raised. By default, unknown fields are rejected.

## Using a context

```python
from fuego.context import Context, QueryParamSpec
from fuego.messages import Request

request = Request(url="/books?page=2", headers={"Accept-Language": "fr-CH, en;q=0.8"})
ctx = Context(request, params={"page": QueryParamSpec(default=1)})

ctx.query_param_int("page")   # 2; the default 1 when "page" is absent
ctx.main_lang()               # "fr"
```

`query_param_int_err` raises `QueryParamNotFoundError` when the parameter
is missing and has no integer default. It raises
`QueryParamInvalidTypeError` when the value is not an integer, as in
`page=abc`.

## Errors

```python
from fuego.errors import NotFoundError, error_handler

err = error_handler(NotFoundError(title="Book not found"))
err.status_code()   # 404
str(err)            # "404 Book not found: "
```

## Command line

Create `domains/books/books.py` and `domains/books/books_controller.py`:

```
fuego controller books
```

Also create `domains/books/books_service.py`:

```
fuego controller books --with-service
```

Create only `domains/books/books.py` and `domains/books/books_service.py`:

```
fuego service books
```

`c` and `s` are short forms of the two subcommands. With no name, the
entity is called `newEntity` for `controller` and `newController` for
`service`. With no subcommand, `fuego` prints a greeting and exits.

## What this package does not do

The package has no HTTP server and no router. Nothing registers routes
or serves requests. You build a `Context` yourself from a `Request` and a
`Response`, and send the response by your own means. It does not render
HTML templates, and it does not generate OpenAPI documents.