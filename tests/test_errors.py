import pytest

from fuego.errors import (
    BadRequestError,
    ConflictError,
    ErrorItem,
    ForbiddenError,
    HTTPError,
    NotFoundError,
    UnauthorizedError,
    error_handler,
    status_text,
)


class MyError(Exception):
    def __init__(self, status=0, detail="", inner=None):
        super().__init__("test error")
        self.status = status
        self.detail = detail
        self.inner = inner if inner is not None else HTTPError()

    def status_code(self):
        return self.status

    def detail_msg(self):
        return self.detail

    def unwrap(self):
        return self.inner


def test_basic():
    err = ValueError("test error")
    assert "test error" in str(error_handler(err))


def test_not_found():
    err = NotFoundError(ValueError("Not Found :c"))
    res = error_handler(err)
    assert isinstance(res, HTTPError)
    assert "Not Found :c" in str(err)
    assert "Not Found" in str(res)
    assert "404" in str(res)
    assert res.status_code() == 404


def test_not_duplicate_http_error():
    err = HTTPError(ValueError("HTTPError"))
    res = error_handler(err)
    assert isinstance(res, HTTPError)
    assert not isinstance(res.err, HTTPError)
    assert "Internal Server Error" in str(err)


def test_error_with_status():
    res = error_handler(MyError(status=404))
    assert isinstance(res, HTTPError)
    assert "Not Found" in str(res)
    assert "404" in str(res)
    assert res.status_code() == 404


def test_error_with_detail():
    res = error_handler(MyError(detail="my detail"))
    assert "Internal Server Error" in str(res)
    assert "500" in str(res)
    assert "my detail" in str(res)
    assert res.status_code() == 500


@pytest.mark.parametrize(
    "cls,message,word,code",
    [
        (ConflictError, "Conflict", "Conflict", 409),
        (UnauthorizedError, "coucou", "Unauthorized", 401),
        (ForbiddenError, "Forbidden", "Forbidden", 403),
    ],
)
def test_status_errors(cls, message, word, code):
    err = cls(ValueError(message))
    res = error_handler(err)
    assert message in str(err)
    assert word in str(res)
    assert str(code) in str(res)
    assert res.status_code() == code


def test_titles():
    assert "Custom Title" in str(HTTPError(title="Custom Title"))
    assert "Not Found" in str(HTTPError(status=404))
    assert "Internal Server Error" in str(HTTPError())


def test_unwrap_keeps_inner():
    inner = MyError(status=999)
    assert HTTPError(inner).err.status == 999


def test_bad_request_status():
    assert BadRequestError(ValueError("x")).status_code() == 400
    assert status_text(404) == "Not Found"
    assert status_text(999) == ""


def test_to_dict_omits_empty():
    err = HTTPError(title="T", status=400, errors=[ErrorItem("form", "bad")])
    assert err.to_dict() == {
        "title": "T",
        "status": 400,
        "errors": [{"name": "form", "reason": "bad"}],
    }