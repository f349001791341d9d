from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Union


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"


class Encoding(str, Enum):
    JSON = "JSON"
    FORM = "FORM"
    QUERY = "QUERY"
    MULTIPART = "MULTIPART"
    XML = "XML"                          # raw text body, application/xml


class RuleKind(str, Enum):
    """Normalization rule variants. Every registered action names exactly one."""
    STATUS_ZERO = "STATUS_ZERO"
    STATUS_TWO = "STATUS_TWO"
    STATUS_ZERO_OR_TWO = "STATUS_ZERO_OR_TWO"
    OK_BOOLEAN = "OK_BOOLEAN"
    SUCCESS_BOOLEAN = "SUCCESS_BOOLEAN"
    HTTP_200_PASSTHROUGH = "HTTP_200_PASSTHROUGH"
    RAW_TEXT = "RAW_TEXT"


class FailureLayer(str, Enum):
    UNSUPPORTED = "UNSUPPORTED"
    PRECONDITION = "PRECONDITION"
    TRANSPORT = "TRANSPORT"
    DECODE = "DECODE"
    HTTP = "HTTP"
    UPSTREAM = "UPSTREAM"


# ---------------------------------------------------------------------------
# Request side
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ActionDescriptor:
    name: str                            # registry key, e.g. "tappay.refund"
    method: HttpMethod
    path: str
    encoding: Encoding
    rule: RuleKind
    group: str                           # dispatch family, e.g. "tappay"
    kind: str                            # action name inside the family


@dataclass(frozen=True)
class RequestEnvelope:
    action: str
    params: Mapping[str, Any] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Response side
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RawOutcome:
    """Either an HTTP response (status + body) or a transport failure."""
    http_status: Optional[int] = None
    body: bytes = b""
    transport_error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.transport_error is not None

    @classmethod
    def response(cls, http_status: int, body: bytes) -> "RawOutcome":
        return cls(http_status=http_status, body=body)

    @classmethod
    def transport_failure(cls, cause: str) -> "RawOutcome":
        return cls(transport_error=cause)


JsonValue = Union[Dict[str, Any], List[Any]]


@dataclass(frozen=True)
class DecodedBody:
    data: Optional[JsonValue] = None
    decode_error: Optional[str] = None
    raw: bytes = b""

    @property
    def ok(self) -> bool:
        return self.decode_error is None

    @property
    def raw_text(self) -> str:
        return self.raw.decode("utf-8", errors="replace")
