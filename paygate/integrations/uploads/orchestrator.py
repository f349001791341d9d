"""
Qualification upload orchestrator.

Stages: VALIDATING -> ASSEMBLING -> SENDING -> DECODING -> NORMALIZING.
Every file reference is resolved before anything is sent; one bad reference
aborts the whole upload. Streams opened while resolving are closed on every
exit path.
"""

from __future__ import annotations

import logging
from contextlib import ExitStack
from enum import Enum
from typing import List, Optional

from paygate.error_handler import FileResolutionError, error_handler
from paygate.integrations.clients.real_http.transport import GatewayTransport
from paygate.integrations.contracts.interfaces import ActionDescriptor, RequestEnvelope
from paygate.integrations.contracts.results import NormalizedResult
from paygate.integrations.contracts.uploads import ResolvedFile, UploadSpec
from paygate.integrations.observability import GatewayEventHook, LoggingEventHook
from paygate.integrations.policy.decoder import decode
from paygate.integrations.policy.status_rules import normalize
from paygate.integrations.registry import ACTION_REGISTRY, UPLOAD_ACTION
from paygate.integrations.uploads.resolvers import FileReferenceResolver

logger = logging.getLogger(__name__)


class UploadStage(str, Enum):
    VALIDATING = "VALIDATING"
    ASSEMBLING = "ASSEMBLING"
    SENDING = "SENDING"
    DECODING = "DECODING"
    NORMALIZING = "NORMALIZING"


class UploadOrchestrator:
    def __init__(
        self,
        transport: GatewayTransport,
        resolver: FileReferenceResolver,
        hook: Optional[GatewayEventHook] = None,
        descriptor: Optional[ActionDescriptor] = None,
    ) -> None:
        self.transport = transport
        self.resolver = resolver
        self.hook = hook or LoggingEventHook()
        self.descriptor = descriptor or ACTION_REGISTRY[UPLOAD_ACTION]

    def _refuse(self, reason: str, field: Optional[str] = None) -> NormalizedResult:
        self.hook.validation_failed(self.descriptor.name, reason)
        return error_handler.precondition_failure(reason, {"field": field} if field else None)

    async def upload(self, spec: UploadSpec) -> NormalizedResult:
        stage = UploadStage.VALIDATING
        logger.debug("Upload stage %s", stage.value)

        if not spec.files:
            return self._refuse("no files to upload")
        for label, value in (("partner_account", spec.partner_account), ("platform_key", spec.platform_key)):
            if not isinstance(value, str) or not value.strip():
                return self._refuse(f"{label} is required", label)

        with ExitStack() as stack:
            resolved: List[ResolvedFile] = []
            for field_name, ref in spec.files.items():
                if not isinstance(field_name, str) or not field_name:
                    return self._refuse(f"invalid field name {field_name!r}")
                try:
                    item = self.resolver.resolve(field_name, ref)
                except FileResolutionError as exc:
                    return self._refuse(str(exc), field_name)
                stack.callback(item.stream.close)
                resolved.append(item)

            stage = UploadStage.ASSEMBLING
            logger.debug("Upload stage %s with %d files", stage.value, len(resolved))
            metadata = {"platform_key": spec.platform_key, "partner_account": spec.partner_account}
            parts = [item.as_multipart_part() for item in resolved]
            envelope = RequestEnvelope(
                action=self.descriptor.name,
                params={**metadata, **{item.field_name: item.filename for item in resolved}},
            )
            self.hook.request_built(envelope, self.descriptor)

            stage = UploadStage.SENDING
            outcome = await self.transport.send(
                self.descriptor.method,
                self.descriptor.path,
                self.descriptor.encoding,
                metadata,
                files=parts,
            )
            self.hook.response_received(self.descriptor, outcome)

        if outcome.failed:
            return error_handler.transport_failure(self.descriptor.name, outcome.transport_error)

        stage = UploadStage.DECODING
        logger.debug("Upload stage %s (%d bytes)", stage.value, len(outcome.body))
        decoded = decode(outcome.body)

        stage = UploadStage.NORMALIZING
        logger.debug("Upload stage %s (HTTP %s)", stage.value, outcome.http_status)
        return normalize(self.descriptor.name, self.descriptor.rule, outcome.http_status, decoded)
