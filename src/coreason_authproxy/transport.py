# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_authproxy

"""
JSON-over-HTTP helpers used by identity providers.
"""

import json
from typing import Any

import httpx

from coreason_authproxy.exceptions import OversizedResponseError, ParseError, TransportError
from coreason_authproxy.utils.logger import logger

MAX_RESPONSE_BYTES = 1024 * 1024


def parse_json_object(body: bytes | str, what: str) -> dict[str, Any]:
    """
    Parses a JSON document that must be an object.

    Args:
        body: The raw document.
        what: Short description of the document, used in error messages.

    Returns:
        dict[str, Any]: The decoded object.

    Raises:
        ParseError: If the document is not valid JSON or not a JSON object.
    """
    try:
        data = json.loads(body)
    except ValueError as e:
        raise ParseError(f"{what} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ParseError(f"{what} is not a JSON object")
    return data


def api_request(
    client: httpx.Client,
    request: httpx.Request,
    max_bytes: int = MAX_RESPONSE_BYTES,
) -> dict[str, Any]:
    """
    Sends a request and decodes its JSON object response.

    The response body is streamed and capped at `max_bytes`. The connection is
    released before returning, on success and on error.

    Args:
        client: The HTTP client to send through. Timeouts are the client's concern.
        request: The prepared request.
        max_bytes: Maximum accepted body size. Defaults to 1 MiB.

    Returns:
        dict[str, Any]: The decoded response body.

    Raises:
        TransportError: On network failure or a non-success status.
        OversizedResponseError: If the body exceeds `max_bytes`.
        ParseError: If the body is not a JSON object.
    """
    # Query strings may carry credentials; keep them out of messages
    target = str(request.url).split("?", 1)[0]

    try:
        response = client.send(request, stream=True)
    except httpx.HTTPError as e:
        raise TransportError(f"{request.method} {target} failed: {e}") from e

    try:
        if not response.is_success:
            raise TransportError(f"got {response.status_code} from {request.method} {target}")

        body = bytearray()
        for chunk in response.iter_bytes():
            body.extend(chunk)
            if len(body) > max_bytes:
                raise OversizedResponseError(f"Response from {target} exceeds {max_bytes} bytes")
    except httpx.HTTPError as e:
        raise TransportError(f"reading response from {target} failed: {e}") from e
    finally:
        response.close()

    logger.debug(f"{request.method} {target} -> {response.status_code} ({len(body)} bytes)")
    return parse_json_object(bytes(body), f"response from {target}")
