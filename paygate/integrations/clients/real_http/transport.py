"""
Gateway HTTP transport.

Purpose:
- Issues one HTTP request per call against the payment gateway
- Encodes params by the action's encoding (JSON, form, query, XML, multipart)
- Returns a RawOutcome: the status line and body as received, or a transport failure

Implementation notes:
- 4xx/5xx responses are returned, not raised: most gateway endpoints carry their
  real status inside the body
- Connection, DNS and timeout errors become RawOutcome.transport_failure
- No retries; a fresh AsyncClient per request keeps calls independent
"""

from __future__ import annotations

import json
import logging
from decimal import Decimal
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

import httpx

from paygate.integrations.contracts.interfaces import Encoding, HttpMethod, RawOutcome

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0

MultipartFile = Tuple[str, Tuple[str, Any, str]]


def flatten_form(params: Mapping[str, Any], prefix: Optional[str] = None) -> Dict[str, str]:
    """
    Flatten params into form/query pairs with bracketed keys.

    `{"cardholder": {"name": "Wang"}, "ids": [1, 2]}` becomes
    `cardholder[name]=Wang&ids[0]=1&ids[1]=2`. None values are skipped and
    booleans are sent as 1/0. Raises TypeError for values with no text form.
    """
    flat: Dict[str, str] = {}
    for key, value in params.items():
        name = f"{prefix}[{key}]" if prefix is not None else str(key)
        if value is None:
            continue
        if isinstance(value, Mapping):
            flat.update(flatten_form(value, name))
        elif isinstance(value, (list, tuple)):
            flat.update(flatten_form(dict(enumerate(value)), name))
        elif isinstance(value, bool):
            flat[name] = "1" if value else "0"
        elif isinstance(value, (str, int, float, Decimal)):
            flat[name] = str(value)
        else:
            raise TypeError(f"field '{name}' has unsupported type {type(value).__name__}")
    return flat


def encoding_error(encoding: Encoding, params: Mapping[str, Any]) -> Optional[str]:
    """Return why params cannot be encoded for this encoding, or None."""
    try:
        if encoding is Encoding.JSON:
            json.dumps(dict(params), allow_nan=False)
        elif encoding in (Encoding.FORM, Encoding.QUERY):
            flatten_form(params)
    except (TypeError, ValueError) as exc:
        return str(exc)
    return None


class GatewayTransport:
    def __init__(
        self,
        base_url: str,
        api_key: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = httpx.Timeout(DEFAULT_TIMEOUT_SECONDS)
        self._transport = transport

    def _headers(self, encoding: Encoding) -> Dict[str, str]:
        headers: Dict[str, str] = {"Accept": "application/json"}
        if encoding is Encoding.XML:
            headers["Content-Type"] = "application/xml"
            headers["Accept"] = "*/*"
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def _request_kwargs(
        self,
        encoding: Encoding,
        params: Mapping[str, Any],
        files: Optional[Sequence[MultipartFile]],
    ) -> Dict[str, Any]:
        if encoding is Encoding.JSON:
            return {"json": dict(params)}
        if encoding is Encoding.FORM:
            return {"data": flatten_form(params)}
        if encoding is Encoding.QUERY:
            return {"params": flatten_form(params)}
        if encoding is Encoding.XML:
            return {"content": str(params.get("body", "")).encode("utf-8")}
        if encoding is Encoding.MULTIPART:
            return {"data": dict(params), "files": list(files or [])}
        raise ValueError(f"Unsupported encoding: {encoding!r}")

    async def send(
        self,
        method: HttpMethod,
        path: str,
        encoding: Encoding,
        params: Mapping[str, Any],
        files: Optional[Sequence[MultipartFile]] = None,
    ) -> RawOutcome:
        url = f"{self.base_url}{path}"
        kwargs = self._request_kwargs(encoding, params, files)
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.request(method.value, url, headers=self._headers(encoding), **kwargs)
        except httpx.RequestError as e:
            cause = f"{type(e).__name__}: {e}" if str(e) else type(e).__name__
            logger.error(f"Request error connecting to payment gateway at {url}: {cause}")
            return RawOutcome.transport_failure(cause)

        logger.debug("Gateway answered %s %s with HTTP %s", method.value, path, response.status_code)
        return RawOutcome.response(response.status_code, response.content)
