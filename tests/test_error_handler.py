from paygate.error_handler import ErrorHandler, FileResolutionError
from paygate.integrations.contracts.interfaces import FailureLayer


def test_upstream_failure_serializes_body():
    eh = ErrorHandler()
    out = eh.upstream_failure("tappay.refund", {"status": 10005, "msg": "退款失敗"})
    assert out.success is False
    assert out.layer is FailureLayer.UPSTREAM
    assert out.message == 'Upstream failure: {"status": 10005, "msg": "退款失敗"}'
    assert out.payload == {"status": 10005, "msg": "退款失敗"}


def test_each_layer_is_named_in_the_message():
    eh = ErrorHandler()
    assert eh.transport_failure("a.b", "ConnectError").message.startswith("Transport failure:")
    assert eh.decode_failure("a.b", "empty response body", "").message.startswith("Decode failure:")
    assert eh.http_failure("a.b", 500).message == "HTTP failure: status 500"
    assert eh.precondition_failure("file 'x' missing").message == "Precondition failure: file 'x' missing"
    assert eh.unsupported_action("nope").message == "Unsupported method: nope"
    assert eh.unsupported_action("nope", method=False).message == "Unsupported action: nope"


def test_file_resolution_error_names_the_field():
    err = FileResolutionError("license", "does not exist: docs/license.pdf")
    assert str(err) == "file 'license' does not exist: docs/license.pdf"
    assert err.payload == {"field": "license"}
