"""
Envelope Checks

Checks every response goes through before field-level parsing:
HTTP status, JSON decoding, and platform-reported errors.

The platform sometimes answers HTTP 200 with an error in the body, so a
2xx status alone does not mean success.
"""

import json
from typing import Any, Dict, Mapping, Union

from ganjing.constants import SUCCESS_RESULT_CODES, ParseErrorKind
from ganjing.errors import ApplicationError, ParseError, TransportError
from ganjing.interfaces.transport_interface import TransportResponse

# How much of an error body to keep in exception messages
BODY_EXCERPT_LENGTH = 200

RawBody = Union[str, bytes, bytearray, Mapping[str, Any]]


def check_http_status(response: TransportResponse, context: str) -> None:
    """
    Raise TransportError for non-2xx responses.

    Args:
        response: Raw transport response
        context: Short description of the call, used in the message

    Raises:
        TransportError: If status is outside 200-299
    """
    if response.ok:
        return

    excerpt = response.text[:BODY_EXCERPT_LENGTH]
    raise TransportError(
        f"{context} failed with HTTP {response.status_code}: {excerpt}",
        status_code=response.status_code,
        url=response.url or None,
    )


def load_payload(body: RawBody, context: str = "response") -> Dict[str, Any]:
    """
    Decode a response body into a JSON object.

    Mappings are passed through unchanged, so parsers accept both raw
    bodies and payloads that were already decoded.

    Raises:
        ParseError: INVALID_JSON if the body is not a JSON object
    """
    if isinstance(body, Mapping):
        return dict(body)

    try:
        payload = json.loads(body)
    except (TypeError, ValueError) as e:
        raise ParseError(
            f"Invalid JSON in {context}: {e}",
            ParseErrorKind.INVALID_JSON,
        ) from e

    if not isinstance(payload, dict):
        raise ParseError(
            f"Invalid JSON in {context}: expected an object, "
            f"got {type(payload).__name__}",
            ParseErrorKind.INVALID_JSON,
        )

    return payload


def raise_for_application_error(payload: Mapping[str, Any]) -> None:
    """
    Raise ApplicationError if the body encodes a platform failure.

    Detected shapes:
    - non-null "error" (code taken from "status_code")
    - "result.result_code" outside the success codes
    - "message" together with "code"
    - "msg" other than "success"
    - neither "data" nor "body" present
    - "data" present but null

    Raises:
        ApplicationError: If any of the above matches
    """
    error = payload.get("error")
    if error is not None:
        if isinstance(error, Mapping):
            message = error.get("message") or error.get("msg") or json.dumps(error)
        else:
            message = str(error)
        raise ApplicationError(message, code=payload.get("status_code"))

    result = payload.get("result")
    if isinstance(result, Mapping) and "result_code" in result:
        result_code = result["result_code"]
        if result_code not in SUCCESS_RESULT_CODES:
            raise ApplicationError(
                str(result.get("message") or "request rejected"),
                code=result_code,
            )

    if "message" in payload and "code" in payload:
        raise ApplicationError(str(payload["message"]), code=payload["code"])

    if "msg" in payload and payload["msg"] != "success":
        raise ApplicationError(str(payload["msg"]), code=payload.get("code"))

    if "data" not in payload and "body" not in payload:
        raise ApplicationError("Response has neither 'data' nor 'body'")

    if "data" in payload and payload["data"] is None:
        raise ApplicationError("Response 'data' is null", code=payload.get("code"))


def decode_response(response: TransportResponse, context: str) -> Dict[str, Any]:
    """
    Run all envelope checks and return the decoded payload.

    Raises:
        TransportError: Non-2xx status
        ParseError: Body is not a JSON object
        ApplicationError: Platform-reported failure
    """
    check_http_status(response, context)
    payload = load_payload(response.body, context)
    raise_for_application_error(payload)
    return payload
