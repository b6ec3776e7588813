# pyright: reportUnknownParameterType=false, reportMissingParameterType=false
import pytest
import requests

from conduit.networking.errors import (
    ApiError,
    CustomError,
    EmptyDataError,
    InvalidJSONError,
    InvalidURLError,
    MissingKeyError,
    NetworkError,
    NotConfiguredError,
    RequestTimeoutError,
    ServerError,
    StatusCodeError,
    flatten_error_payload,
    to_api_error,
)


def test_descriptions():
    assert InvalidURLError().message == "The URL is invalid."
    assert EmptyDataError().message == "The response data is empty."
    assert MissingKeyError().message == "Missing key"
    assert "configure()" in NotConfiguredError().message
    assert CustomError("boom").message == "boom"


def test_every_error_is_an_api_error():
    for error in (
        InvalidURLError(),
        CustomError("x"),
        NetworkError(OSError("down")),
        StatusCodeError(500, CustomError("x")),
    ):
        assert isinstance(error, ApiError)


def test_equality_by_kind_and_payload():
    assert InvalidJSONError() == InvalidJSONError("different text")
    assert InvalidJSONError() != EmptyDataError()
    assert CustomError("a") == CustomError("a")
    assert CustomError("a") != CustomError("b")


def test_status_code_error_equality():
    first = StatusCodeError(404, ServerError("error - x"), {"a": 1})
    same = StatusCodeError(404, ServerError("error - x"), {"a": 1})
    other_code = StatusCodeError(500, ServerError("error - x"), {"a": 1})
    other_meta = StatusCodeError(404, ServerError("error - x"), {"a": 2})

    assert first == same
    assert hash(first) == hash(same)
    assert first != other_code
    assert first != other_meta


def test_network_error_equality_uses_cause():
    assert NetworkError(OSError("down")) == NetworkError(OSError("down"))
    assert NetworkError(OSError("down")) != NetworkError(ValueError("down"))


def test_status_code_error_exposes_payload():
    server_error = ServerError("field - bad", {"x": 1})
    error = StatusCodeError(422, server_error, {"x": 1})

    assert error.status_code == 422
    assert error.meta == {"x": 1}
    assert error.message == "field - bad"
    assert repr(error) == "StatusCodeError(422, 'field - bad')"


def test_flatten_skips_meta_and_joins_arrays():
    payload = {
        "error": "invalid",
        "email": ["taken", "too short"],
        "meta": {"request_id": "abc"},
    }

    assert flatten_error_payload(payload) == (
        "error - invalid\nemail - taken,too short"
    )


def test_flatten_recurses_into_objects():
    payload = {"errors": {"name": "required", "age": 3}, "ok": False}

    assert flatten_error_payload(payload) == (
        "name - required\nage - 3\nok - false"
    )


def test_flatten_empty_object():
    assert flatten_error_payload({}) == ""


@pytest.mark.parametrize(
    ("raised", "expected"),
    [
        (requests.exceptions.ReadTimeout("slow"), RequestTimeoutError),
        (requests.exceptions.ConnectionError("down"), NetworkError),
        (ValueError("bad"), CustomError),
    ],
)
def test_to_api_error_maps_foreign_exceptions(raised, expected):
    mapped = to_api_error(raised)

    assert type(mapped) is expected


def test_to_api_error_passes_api_errors_through():
    error = InvalidURLError()

    assert to_api_error(error) is error


def test_server_error_from_object_body(make_response):
    response = make_response(status=400)

    error = ServerError.from_response(b'{"error":"bad"}', response)

    assert error is not None
    assert error.description == "error - bad"
    assert error.meta is None


def test_server_error_from_non_object_body(make_response):
    response = make_response(status=400)

    assert ServerError.from_response(b"[1,2]", response) is None
    assert ServerError.from_response(b"", response) is None


@pytest.mark.parametrize(
    ("status", "hint"),
    [
        (401, "Unauthorized"),
        (403, "Forbidden"),
        (422, "Validation Error"),
        (500, "Internal Server"),
        (418, "Error"),
    ],
)
def test_debug_descriptions_carry_status_hints(make_response, status, hint):
    response = make_response(status=status, url="https://api.example.com/x")

    error = ServerError.from_response(b"not json", response, debug=True)

    assert error is not None
    assert error.description.startswith(
        f"DEBUG\nStatus code: {status}\nURL: https://api.example.com/x\n"
    )
    assert hint in error.description.splitlines()


def test_debug_description_includes_error_body(make_response):
    response = make_response(status=404)

    error = ServerError.from_response(
        b'{"error":"not found"}', response, debug=True
    )

    assert error is not None
    assert "Error body:\nerror - not found\n" in error.description
