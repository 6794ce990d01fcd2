"""
Invocation result normalizer.

lambda.invoke conflates "the function threw" with "the function returned an
error value", and structured error objects with arbitrary payloads. The
rules below map every combination onto a single Response:

1. Payload is not an object/array: it is the body (200).
2. FunctionError is set:
   a. Unhandled, or the payload is not exactly {"errorMessage": ...}:
      the whole payload is the body (500).
   b. errorMessage is not JSON: the raw message is the body (500).
   c. errorMessage is JSON: use its statusCode/encoding/body, falling back
      to 500/identity/the parsed value itself.
3. Payload has no "body" key: the whole payload is the body (200).
4. Payload already has the canonical shape.
"""

import json
import logging
from typing import Any, Mapping, Union

from pydantic import ValidationError

from ..core.exceptions import PayloadParseError
from ..models.invocation import RawInvocationResult
from ..models.response import Encoding, Response

logger = logging.getLogger("envelope.normalizer")

ERROR_STATUS_CODE = 500
ERROR_MESSAGE_FIELD = "errorMessage"


def _is_structured(value: Any) -> bool:
    return isinstance(value, (dict, list))


def _field(value: Any, name: str) -> Any:
    return value.get(name) if isinstance(value, dict) else None


def _has_field(value: Any, name: str) -> bool:
    return isinstance(value, dict) and name in value


def _from_handled_error(payload: dict) -> Response:
    error_message = payload[ERROR_MESSAGE_FIELD]

    if isinstance(error_message, str):
        try:
            error_details = json.loads(error_message)
        except json.JSONDecodeError:
            return Response(
                statusCode=ERROR_STATUS_CODE, encoding=Encoding.IDENTITY, body=error_message
            )
    else:
        error_details = error_message

    if _has_field(error_details, "body"):
        body = error_details["body"]
    else:
        body = error_details

    return Response(
        statusCode=_field(error_details, "statusCode") or ERROR_STATUS_CODE,
        encoding=_field(error_details, "encoding") or Encoding.IDENTITY,
        body=body,
    )


def _normalize(payload: Any, function_error: bool, unhandled: bool) -> Response:
    if not _is_structured(payload):
        return Response(statusCode=200, encoding=Encoding.IDENTITY, body=payload)

    if function_error:
        if unhandled or len(payload) != 1 or not _has_field(payload, ERROR_MESSAGE_FIELD):
            return Response(
                statusCode=ERROR_STATUS_CODE, encoding=Encoding.IDENTITY, body=payload
            )
        return _from_handled_error(payload)

    if not _has_field(payload, "body"):
        return Response(statusCode=200, encoding=Encoding.IDENTITY, body=payload)

    return Response.from_options(
        {key: payload[key] for key in ("statusCode", "encoding", "body") if key in payload}
    )


def normalize_raw_result(
    raw_result: Union[RawInvocationResult, Mapping[str, Any]],
) -> Response:
    """
    Convert a raw invocation result into a Response envelope.

    The returned envelope may still be in the gzip or s3 tier; use
    ResponseResolver to recover the original response.

    Raises:
        PayloadParseError: Payload is not UTF-8 JSON text or describes an
            envelope with an unknown encoding
    """
    if not isinstance(raw_result, RawInvocationResult):
        try:
            raw_result = RawInvocationResult.model_validate(raw_result)
        except ValidationError as e:
            logger.error(
                "Invocation result is not readable",
                extra={"error_type": type(e).__name__, "error_detail": str(e)},
            )
            raise PayloadParseError(e) from e

    try:
        payload = json.loads(raw_result.payload)
    except json.JSONDecodeError as e:
        logger.error(
            "Invocation payload is not valid JSON",
            extra={
                "snippet": raw_result.payload[:200],
                "function_error": raw_result.function_error,
            },
        )
        raise PayloadParseError(e) from e

    try:
        response = _normalize(
            payload, raw_result.has_function_error, raw_result.is_unhandled
        )
    except ValidationError as e:
        logger.error(
            "Invocation payload is not a valid response envelope",
            extra={"function_error": raw_result.function_error},
        )
        raise PayloadParseError(e) from e

    if raw_result.has_function_error:
        logger.info(
            f"Invocation returned {raw_result.function_error} error",
            extra={"status_code": response.statusCode},
        )
    return response
