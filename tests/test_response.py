"""Tests for interpreting transport results."""

from __future__ import annotations

import json

import pytest

from phonegap_build.config import LEGACY_SUCCESS_CODES
from phonegap_build.response import (
    Failure,
    ResponseInterpreter,
    Success,
    decode_body,
    flatten_error,
)
from phonegap_build.transport import TransportResult


def completed(status: int, payload: object) -> TransportResult:
    return TransportResult.completed(status, json.dumps(payload).encode())


@pytest.fixture
def interpreter() -> ResponseInterpreter:
    return ResponseInterpreter()


class TestFlattenError:
    """Tests for flatten_error."""

    def test_single_pair(self):
        assert flatten_error({"keystore_pw": "invalid"}) == "keystore_pw - invalid"

    def test_pairs_keep_insertion_order(self):
        error = {"key_pw": "invalid", "keystore_pw": "missing", "alias": "unknown"}

        assert (
            flatten_error(error)
            == "key_pw - invalid; keystore_pw - missing; alias - unknown"
        )

    def test_custom_separators(self):
        assert flatten_error({"a": 1, "b": 2}, ": ", ", ") == "a: 1, b: 2"

    def test_string_is_returned_as_is(self):
        assert flatten_error("Key already unlocked") == "Key already unlocked"

    def test_only_one_level_is_flattened(self):
        assert flatten_error({"keys": {"ios": "locked"}}) == "keys - {'ios': 'locked'}"

    def test_empty_mapping(self):
        assert flatten_error({}) == ""


class TestDecodeBody:
    def test_json(self):
        assert decode_body(b'{"id": 1}') == {"id": 1}

    @pytest.mark.parametrize("body", [b"", b"<html>502</html>", b"\xff\xfe\x00"])
    def test_not_json(self, body):
        assert decode_body(body) is None


class TestInterpret:
    """Tests for ResponseInterpreter.interpret."""

    def test_created_is_success(self, interpreter):
        outcome = interpreter.interpret(completed(201, {"id": 42, "title": "App"}))

        assert outcome == Success({"id": 42, "title": "App"})
        assert outcome.ok
        assert outcome.error == ""

    @pytest.mark.parametrize("status", [200, 201, 202, 302])
    def test_success_codes(self, interpreter, status):
        assert interpreter.interpret(completed(status, {"ok": True})).ok

    def test_in_body_error_with_success_status(self, interpreter):
        outcome = interpreter.interpret(completed(200, {"error": {"keystore_pw": "invalid"}}))

        assert outcome == Failure("keystore_pw - invalid", status_code=200)
        assert not outcome.ok
        assert outcome.payload is None

    def test_in_body_string_error(self, interpreter):
        outcome = interpreter.interpret(completed(200, {"error": "key is already unlocked"}))

        assert outcome.error == "key is already unlocked"

    def test_in_body_error_beats_status_message(self, interpreter):
        outcome = interpreter.interpret(completed(404, {"error": "app not found"}))

        assert outcome == Failure("app not found", status_code=404)

    @pytest.mark.parametrize("error", ["", None, {}, []])
    def test_empty_error_value_is_ignored(self, interpreter, error):
        outcome = interpreter.interpret(completed(200, {"error": error, "id": 1}))

        assert outcome == Success({"error": error, "id": 1})

    def test_not_found_with_empty_body(self, interpreter):
        outcome = interpreter.interpret(completed(404, {}))

        assert outcome == Failure("Request failed with status 404", status_code=404)
        assert not outcome.ok

    def test_server_error_without_json(self, interpreter):
        outcome = interpreter.interpret(TransportResult.completed(502, b"Bad Gateway"))

        assert outcome.error == "Request failed with status 502"

    def test_success_without_json(self, interpreter):
        outcome = interpreter.interpret(TransportResult.completed(200, b"OK"))

        assert outcome == Success(None)

    def test_non_mapping_payload(self, interpreter):
        outcome = interpreter.interpret(completed(200, [{"id": 1}]))

        assert outcome == Success([{"id": 1}])

    def test_transport_failure_wins(self, interpreter):
        result = TransportResult(status_code=200, body=b'{"id": 1}', error="Connection refused")

        outcome = interpreter.interpret(result)

        assert outcome == Failure("Connection refused")

    def test_transport_failure(self, interpreter):
        outcome = interpreter.interpret(TransportResult.failed("SSL handshake failed"))

        assert outcome.error == "SSL handshake failed"
        assert outcome.status_code is None

    def test_empty_transport_message_is_replaced(self, interpreter):
        outcome = interpreter.interpret(TransportResult.failed(""))

        assert outcome == Failure("Transport error")

    @pytest.mark.parametrize(
        "result",
        [
            completed(201, {"id": 42}),
            completed(200, {"error": {"a": "b"}}),
            completed(500, {}),
            TransportResult.failed("timed out"),
        ],
    )
    def test_interpret_is_idempotent(self, interpreter, result):
        assert interpreter.interpret(result) == interpreter.interpret(result)


class TestSuccessCodes:
    """Tests for configurable success codes."""

    @pytest.mark.parametrize("status", [201, 202])
    def test_legacy_codes_reject_created_and_accepted(self, status):
        interpreter = ResponseInterpreter(LEGACY_SUCCESS_CODES)

        outcome = interpreter.interpret(completed(status, {"id": 1}))

        assert outcome == Failure(f"Request failed with status {status}", status_code=status)

    def test_custom_codes(self):
        interpreter = ResponseInterpreter([204])

        assert interpreter.interpret(TransportResult.completed(204)).ok
        assert not interpreter.interpret(completed(200, {})).ok
