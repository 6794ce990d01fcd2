"""
Normalizer tests: every branch of the invocation result decision ladder.
"""

import io
import json

import pytest
from pydantic import ValidationError

from lambda_envelope.core.exceptions import PayloadParseError
from lambda_envelope.models.invocation import RawInvocationResult
from lambda_envelope.models.response import Encoding, Response
from lambda_envelope.services.normalizer import normalize_raw_result


def _raw(payload, function_error=None):
    result = {"Payload": json.dumps(payload)}
    if function_error is not None:
        result["FunctionError"] = function_error
    return result


class TestPayloadParsing:
    def test_raises_when_payload_is_not_json(self):
        with pytest.raises(PayloadParseError, match="failed to parse response payload") as exc:
            normalize_raw_result({"Payload": ""})

        assert isinstance(exc.value.cause, json.JSONDecodeError)
        assert exc.value.__cause__ is exc.value.cause

    def test_raises_when_payload_is_missing(self):
        with pytest.raises(PayloadParseError):
            normalize_raw_result({})

    def test_raises_when_payload_bytes_are_not_utf8(self):
        with pytest.raises(PayloadParseError, match="failed to parse response payload") as exc:
            normalize_raw_result({"Payload": b"\xff\xfe"})

        assert isinstance(exc.value.cause, ValidationError)
        assert exc.value.__cause__ is exc.value.cause

    @pytest.mark.parametrize("payload", [123, ["x"], {"body": "x"}])
    def test_raises_when_payload_is_not_text(self, payload):
        with pytest.raises(PayloadParseError) as exc:
            normalize_raw_result({"Payload": payload})

        assert isinstance(exc.value.cause, ValidationError)

    def test_accepts_model_instance(self):
        raw = RawInvocationResult(Payload='{"body": "x"}')

        assert normalize_raw_result(raw) == Response(body="x")

    def test_accepts_streaming_payload(self):
        raw = RawInvocationResult.from_invoke_response(
            {"StatusCode": 200, "Payload": io.BytesIO(b'{"statusCode": 201, "body": 1}')}
        )

        assert normalize_raw_result(raw) == Response(statusCode=201, body=1)

    def test_accepts_bytes_payload(self):
        assert normalize_raw_result({"Payload": b'"data"'}).body == "data"


class TestNonObjectPayload:
    @pytest.mark.parametrize("payload", ["data", 42, True, None])
    def test_payload_is_body(self, payload):
        response = normalize_raw_result(_raw(payload))

        assert response == Response(statusCode=200, encoding=Encoding.IDENTITY, body=payload)

    def test_function_error_is_ignored_for_scalars(self):
        response = normalize_raw_result(_raw("boom", function_error="Handled"))

        assert response.statusCode == 200
        assert response.body == "boom"


class TestFunctionError:
    def test_unhandled_error_uses_payload_as_body(self):
        payload = {"data": "test data"}

        response = normalize_raw_result(_raw(payload, function_error="Unhandled"))

        assert response.statusCode == 500
        assert response.encoding == Encoding.IDENTITY
        assert response.body == payload

    def test_unhandled_error_with_error_message_uses_payload_as_body(self):
        payload = {"errorMessage": '{"statusCode": 400}'}

        response = normalize_raw_result(_raw(payload, function_error="Unhandled"))

        assert response == Response(statusCode=500, body=payload)

    def test_handled_error_with_more_than_one_field(self):
        payload = {"errorMessage": "message", "data": "test data"}

        response = normalize_raw_result(_raw(payload, function_error="Handled"))

        assert response == Response(statusCode=500, body=payload)

    def test_handled_error_without_error_message(self):
        payload = {"data": "test data"}

        response = normalize_raw_result(_raw(payload, function_error="Handled"))

        assert response == Response(statusCode=500, body=payload)

    def test_handled_error_with_array_payload(self):
        response = normalize_raw_result(_raw(["errorMessage"], function_error="Handled"))

        assert response == Response(statusCode=500, body=["errorMessage"])

    def test_unparseable_error_message_is_body(self):
        response = normalize_raw_result(_raw({"errorMessage": "abc"}, function_error="Handled"))

        assert response == Response(statusCode=500, encoding=Encoding.IDENTITY, body="abc")

    def test_empty_error_message_is_body(self):
        response = normalize_raw_result(_raw({"errorMessage": ""}, function_error="Handled"))

        assert response == Response(statusCode=500, body="")

    def test_parsed_error_message_without_body(self):
        message_data = {"data": "some data"}
        payload = {"errorMessage": json.dumps(message_data)}

        response = normalize_raw_result(_raw(payload, function_error="Handled"))

        assert response == Response(statusCode=500, encoding=Encoding.IDENTITY, body=message_data)

    def test_parsed_error_message_with_body_and_encoding(self):
        message_data = {"body": {"data": "some data"}, "encoding": "gzip"}
        payload = {"errorMessage": json.dumps(message_data)}

        response = normalize_raw_result(_raw(payload, function_error="Handled"))

        assert response.statusCode == 500
        assert response.encoding == Encoding.GZIP
        assert response.body == {"data": "some data"}

    def test_parsed_error_message_full_triple(self):
        message_data = {"statusCode": 201, "encoding": "gzip", "body": {"d": 1}}
        payload = {"errorMessage": json.dumps(message_data)}

        response = normalize_raw_result(_raw(payload, function_error="Handled"))

        assert response.to_dict() == {"statusCode": 201, "encoding": "gzip", "body": {"d": 1}}

    def test_parsed_error_message_with_false_body(self):
        payload = {"errorMessage": json.dumps({"statusCode": 409, "body": False})}

        response = normalize_raw_result(_raw(payload, function_error="Handled"))

        assert response.statusCode == 409
        assert response.body is False

    def test_parsed_error_message_scalar(self):
        payload = {"errorMessage": json.dumps("oops")}

        response = normalize_raw_result(_raw(payload, function_error="Handled"))

        assert response == Response(statusCode=500, body="oops")

    def test_non_string_error_message(self):
        payload = {"errorMessage": {"statusCode": 403, "body": "denied"}}

        response = normalize_raw_result(_raw(payload, function_error="Handled"))

        assert response == Response(statusCode=403, body="denied")

    def test_empty_function_error_is_not_an_error(self):
        response = normalize_raw_result(_raw({"errorMessage": "abc"}, function_error=""))

        assert response == Response(statusCode=200, body={"errorMessage": "abc"})


class TestSuccessfulPayload:
    def test_payload_without_body_is_body(self):
        payload = {"data": "test data"}

        response = normalize_raw_result(_raw(payload))

        assert response == Response(statusCode=200, encoding=Encoding.IDENTITY, body=payload)

    def test_array_payload_is_body(self):
        assert normalize_raw_result(_raw([1, 2])) == Response(body=[1, 2])

    def test_canonical_payload(self):
        payload = {"statusCode": 201, "encoding": "gzip", "body": {"data": "test data"}}

        response = normalize_raw_result(_raw(payload))

        assert response.statusCode == 201
        assert response.encoding == Encoding.GZIP
        assert response.body == {"data": "test data"}

    def test_canonical_payload_with_false_body(self):
        payload = {"statusCode": 201, "encoding": "identity", "body": False}

        response = normalize_raw_result(_raw(payload))

        assert response.statusCode == 201
        assert response.encoding == Encoding.IDENTITY
        assert response.body is False

    def test_canonical_payload_defaults(self):
        response = normalize_raw_result(_raw({"body": None}))

        assert response == Response(statusCode=200, encoding=Encoding.IDENTITY, body=None)

    def test_unknown_encoding_raises_parse_error(self):
        with pytest.raises(PayloadParseError):
            normalize_raw_result(_raw({"encoding": "test", "body": "x"}))
