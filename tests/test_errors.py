"""Tests for error classification of service responses."""

from __future__ import annotations

import pytest
import requests

from challonge.errors import (
    ChallongeError,
    DecodeError,
    EncodeError,
    JsonSyntaxError,
    StatusError,
    TransportError,
    ValidationError,
    check_response,
    error_from_response,
    parse_json,
    transport_error,
)


def make_response(status: int, body: str) -> requests.Response:
    response = requests.Response()
    response.status_code = status
    response._content = body.encode("utf-8")
    response.encoding = "utf-8"
    response.url = "https://api.challonge.com/v1/tournaments.json"
    return response


class TestCheckResponse:
    def test_success_returns_json(self) -> None:
        assert check_response(make_response(200, '{"tournament": {"id": 1}}')) == {
            "tournament": {"id": 1}
        }

    def test_empty_success(self) -> None:
        assert check_response(make_response(200, "")) is None

    def test_malformed_json(self) -> None:
        with pytest.raises(JsonSyntaxError) as exc:
            check_response(make_response(200, "<html>oops</html>"))
        assert exc.value.text == "<html>oops</html>"

    def test_validation_errors(self) -> None:
        response = make_response(422, '{"errors": ["Name can\'t be blank", "URL is taken"]}')
        with pytest.raises(ValidationError) as exc:
            check_response(response)
        assert exc.value.status_code == 422
        assert exc.value.messages == ["Name can't be blank", "URL is taken"]
        assert "URL is taken" in str(exc.value)

    def test_generic_status(self) -> None:
        with pytest.raises(StatusError) as exc:
            check_response(make_response(404, '{"error": "not found"}'))
        assert not isinstance(exc.value, ValidationError)
        assert exc.value.status_code == 404
        assert exc.value.body == {"error": "not found"}

    def test_status_with_text_body(self) -> None:
        error = error_from_response(make_response(500, "Internal Server Error"))
        assert error.body == "Internal Server Error"

    def test_redirect_is_not_success(self) -> None:
        with pytest.raises(StatusError):
            check_response(make_response(302, ""))

    def test_errors_must_be_strings(self) -> None:
        error = error_from_response(make_response(422, '{"errors": [{"field": "name"}]}'))
        assert not isinstance(error, ValidationError)


class TestTaxonomy:
    def test_all_errors_share_base(self) -> None:
        for cls in (
            TransportError,
            StatusError,
            ValidationError,
            JsonSyntaxError,
            DecodeError,
            EncodeError,
        ):
            assert issubclass(cls, ChallongeError)

    def test_transport_wraps_cause(self) -> None:
        cause = requests.ConnectionError("connection aborted")
        error = transport_error(cause)
        assert isinstance(error, TransportError)
        assert error.cause is cause

    def test_decode_error_carries_value(self) -> None:
        error = DecodeError("Expected object", [1])
        assert error.description == "Expected object"
        assert error.value == [1]
        assert "Expected object" in str(error)

    def test_parse_json(self) -> None:
        assert parse_json("[1, 2]") == [1, 2]
        with pytest.raises(JsonSyntaxError):
            parse_json("{")
