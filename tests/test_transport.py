from decimal import Decimal

import httpx
import pytest

from paygate.integrations.clients.real_http.transport import (
    DEFAULT_TIMEOUT_SECONDS,
    GatewayTransport,
    encoding_error,
    flatten_form,
)
from paygate.integrations.contracts.interfaces import Encoding


def test_requests_use_a_ten_second_timeout():
    transport = GatewayTransport("https://gateway.test/")

    assert DEFAULT_TIMEOUT_SECONDS == 10.0
    assert transport.timeout == httpx.Timeout(10.0)
    assert transport.base_url == "https://gateway.test"


def test_flatten_form_brackets_nested_keys():
    flat = flatten_form(
        {
            "filters": {"time": {"start": 1, "end": 2}, "ids": ["a", "b"]},
            "amount": Decimal("10.50"),
            "remember": False,
            "note": None,
        }
    )

    assert flat == {
        "filters[time][start]": "1",
        "filters[time][end]": "2",
        "filters[ids][0]": "a",
        "filters[ids][1]": "b",
        "amount": "10.50",
        "remember": "0",
    }


def test_flatten_form_rejects_values_without_text_form():
    with pytest.raises(TypeError, match=r"field 'meta\[when\]' has unsupported type set"):
        flatten_form({"meta": {"when": {1}}})


@pytest.mark.parametrize(
    "encoding, params, expected",
    [
        (Encoding.JSON, {"amount": 10}, None),
        (Encoding.JSON, {"amount": Decimal("1")}, "Decimal"),
        (Encoding.JSON, {"amount": float("nan")}, "Out of range float values"),
        (Encoding.FORM, {"cardholder": {"name": "Wang"}}, None),
        (Encoding.QUERY, {"from": object()}, "unsupported type object"),
        (Encoding.XML, {"body": "<xml/>"}, None),
    ],
)
def test_encoding_error_reports_unencodable_params(encoding, params, expected):
    problem = encoding_error(encoding, params)

    if expected is None:
        assert problem is None
    else:
        assert expected in problem
