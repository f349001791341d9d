"""Error types and failure-result helpers for the gateway client."""
import json
import logging
from typing import Any, Dict, Optional

from paygate.integrations.contracts.interfaces import FailureLayer
from paygate.integrations.contracts.results import NormalizedResult

logger = logging.getLogger(__name__)


class PaygateError(Exception):
    def __init__(self, message: str, *, payload: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.payload = payload or {}


class RegistryConfigurationError(PaygateError):
    """Raised at startup when the action registry is malformed."""


class FileResolutionError(PaygateError):
    def __init__(self, field_name: str, reason: str) -> None:
        super().__init__(f"file '{field_name}' {reason}", payload={"field": field_name})
        self.field_name = field_name
        self.reason = reason


class ErrorHandler:
    def unsupported_action(self, action_name: str, *, method: bool = True) -> NormalizedResult:
        label = "method" if method else "action"
        logger.warning("Rejected unsupported %s %r", label, action_name)
        return NormalizedResult.failed(f"Unsupported {label}: {action_name}", layer=FailureLayer.UNSUPPORTED)

    def missing_group_action(self, group: str, value: Any) -> NormalizedResult:
        logger.warning("Missing or invalid 'action' parameter for %s dispatch: %r", group, value)
        return NormalizedResult.failed(
            f"Precondition failure: missing or invalid 'action' parameter for {group}",
            layer=FailureLayer.PRECONDITION,
        )

    def precondition_failure(self, reason: str, context: Optional[Dict[str, Any]] = None) -> NormalizedResult:
        logger.warning("Precondition failed: %s", reason)
        return NormalizedResult.failed(
            f"Precondition failure: {reason}",
            layer=FailureLayer.PRECONDITION,
            payload=context,
        )

    def transport_failure(self, action_name: str, cause: str) -> NormalizedResult:
        logger.error("Transport failure for %s: %s", action_name, cause)
        return NormalizedResult.failed(f"Transport failure: {cause}", layer=FailureLayer.TRANSPORT)

    def decode_failure(self, action_name: str, reason: str, raw_text: str) -> NormalizedResult:
        logger.error("Could not decode response for %s (%s): %r", action_name, reason, raw_text[:500])
        return NormalizedResult.failed(
            f"Decode failure: {reason}: {raw_text}",
            layer=FailureLayer.DECODE,
        )

    def http_failure(self, action_name: str, http_status: Optional[int], raw_text: str = "") -> NormalizedResult:
        logger.error("HTTP %s from gateway for %s", http_status, action_name)
        return NormalizedResult.failed(
            f"HTTP failure: status {http_status}",
            layer=FailureLayer.HTTP,
            payload={"http_status": http_status, "body": raw_text} if raw_text else {"http_status": http_status},
        )

    def upstream_failure(self, action_name: str, body: Any) -> NormalizedResult:
        serialized = json.dumps(body, ensure_ascii=False, default=str)
        logger.info("Gateway rejected %s: %s", action_name, serialized)
        return NormalizedResult.failed(
            f"Upstream failure: {serialized}",
            layer=FailureLayer.UPSTREAM,
            payload=body if isinstance(body, dict) else {"data": body},
        )


error_handler = ErrorHandler()
