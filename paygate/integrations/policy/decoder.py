from __future__ import annotations

import json

from paygate.integrations.contracts.interfaces import DecodedBody


def decode(raw: bytes) -> DecodedBody:
    """
    Parse a gateway response body as a JSON object or array.

    Never raises: empty, malformed, non-UTF-8 and scalar bodies come back as a
    decode error that still carries the original bytes.
    """
    if not raw or not raw.strip():
        return DecodedBody(decode_error="empty response body", raw=raw or b"")

    try:
        data = json.loads(raw.decode("utf-8"))
    except UnicodeDecodeError:
        return DecodedBody(decode_error="response body is not valid UTF-8", raw=raw)
    except json.JSONDecodeError as exc:
        return DecodedBody(decode_error=f"response is not valid JSON ({exc.msg})", raw=raw)

    if not isinstance(data, (dict, list)):
        return DecodedBody(decode_error="expected a JSON object or array", raw=raw)
    return DecodedBody(data=data, raw=raw)
