import logging

from paygate.integrations.contracts.interfaces import RawOutcome, RequestEnvelope
from paygate.integrations.observability import LoggingEventHook
from paygate.integrations.registry import ACTION_REGISTRY


def test_logging_hook_reports_each_lifecycle_point(caplog):
    descriptor = ACTION_REGISTRY["tappay.refund"]
    hook = LoggingEventHook(logging.getLogger("paygate.test"))

    with caplog.at_level(logging.DEBUG, logger="paygate.test"):
        hook.request_built(RequestEnvelope(action=descriptor.name, params={"rec_trade_id": "D1"}), descriptor)
        hook.response_received(descriptor, RawOutcome.response(200, b'{"status": 0}'))
        hook.response_received(descriptor, RawOutcome.transport_failure("ReadTimeout"))
        hook.validation_failed("tappay.nope", "unsupported action")

    messages = [record.getMessage() for record in caplog.records]
    assert "Sending tappay.refund POST /tappay/api/transaction/refund (JSON)" in messages
    assert "Received response for tappay.refund: status=200 bytes=13" in messages
    assert "No response for tappay.refund: ReadTimeout" in messages
    assert "Refused tappay.nope before sending: unsupported action" in messages
