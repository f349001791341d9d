"""
Gateway contracts.

Request/response structures shared by the registry, the transport, the
normalizer and the upload orchestrator. Nothing in here performs I/O.
"""

from .interfaces import (
    ActionDescriptor,
    DecodedBody,
    Encoding,
    FailureLayer,
    HttpMethod,
    RawOutcome,
    RequestEnvelope,
    RuleKind,
)
from .results import FAILURE_STATUS, SUCCESS_STATUS, NormalizedResult
from .uploads import FileRef, ResolvedFile, UploadSpec

__all__ = [
    "ActionDescriptor",
    "DecodedBody",
    "Encoding",
    "FailureLayer",
    "FileRef",
    "HttpMethod",
    "NormalizedResult",
    "RawOutcome",
    "RequestEnvelope",
    "ResolvedFile",
    "RuleKind",
    "UploadSpec",
    "FAILURE_STATUS",
    "SUCCESS_STATUS",
]
