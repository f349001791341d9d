"""
Lifecycle hooks for gateway calls.

The client reports three points in every call: the request has been built,
a response (or transport failure) has come back, and a call was refused
before sending. Callers pass a hook in; nothing here touches global state.
"""

import logging
from typing import Optional

from paygate.integrations.contracts.interfaces import ActionDescriptor, RawOutcome, RequestEnvelope


class GatewayEventHook:
    """No-op base hook. Subclass and override what you need."""

    def request_built(self, envelope: RequestEnvelope, descriptor: ActionDescriptor) -> None:
        pass

    def response_received(self, descriptor: ActionDescriptor, outcome: RawOutcome) -> None:
        pass

    def validation_failed(self, action: str, reason: str) -> None:
        pass


NullEventHook = GatewayEventHook


class LoggingEventHook(GatewayEventHook):
    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger or logging.getLogger("paygate.gateway")

    def request_built(self, envelope: RequestEnvelope, descriptor: ActionDescriptor) -> None:
        self.logger.info(
            "Sending %s %s %s (%s)",
            descriptor.name,
            descriptor.method.value,
            descriptor.path,
            descriptor.encoding.value,
        )
        self.logger.debug("Request params for %s: %s", descriptor.name, sorted(envelope.params))

    def response_received(self, descriptor: ActionDescriptor, outcome: RawOutcome) -> None:
        if outcome.failed:
            self.logger.warning("No response for %s: %s", descriptor.name, outcome.transport_error)
            return
        self.logger.info(
            "Received response for %s: status=%s bytes=%d",
            descriptor.name,
            outcome.http_status,
            len(outcome.body),
        )

    def validation_failed(self, action: str, reason: str) -> None:
        self.logger.warning("Refused %s before sending: %s", action, reason)
