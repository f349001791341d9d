import json
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "scripts"))

import run_gateway_action  # noqa: E402
from paygate.integrations.contracts.interfaces import FailureLayer
from paygate.integrations.contracts.results import NormalizedResult


class StubClient:
    def __init__(self, result):
        self.result = result
        self.calls = []

    async def dispatch(self, action, params):
        self.calls.append(("dispatch", action, params))
        return self.result

    async def upload(self, files, partner_account, platform_key):
        self.calls.append(("upload", files, partner_account, platform_key))
        return self.result


@pytest.fixture
def stub(monkeypatch):
    holder = {}

    def install(result):
        client = StubClient(result)
        monkeypatch.setattr(
            run_gateway_action.PaymentGatewayClient,
            "from_env",
            classmethod(lambda cls, env_file=None, **kwargs: client),
        )
        holder["client"] = client
        return client

    return install


def test_dispatch_prints_result_and_exits_zero(stub, capsys):
    client = stub(NormalizedResult.succeeded({"status": 0}))

    code = run_gateway_action.main(["--action", "tappay.refund", "--params", '{"rec_trade_id": "D1"}'])

    assert code == 0
    assert client.calls == [("dispatch", "tappay.refund", {"rec_trade_id": "D1"})]
    assert json.loads(capsys.readouterr().out)["status"] == 1


def test_failure_exits_one(stub, capsys):
    stub(NormalizedResult.failed("Unsupported method: nope", layer=FailureLayer.UNSUPPORTED))

    assert run_gateway_action.main(["--action", "nope"]) == 1
    assert "Unsupported method: nope" in capsys.readouterr().out


def test_files_switch_to_upload(stub):
    client = stub(NormalizedResult.succeeded())

    code = run_gateway_action.main(
        ["--file", "license=docs/license.pdf", "--partner-account", "acme", "--platform-key", "pk_1"]
    )

    assert code == 0
    assert client.calls == [("upload", {"license": "docs/license.pdf"}, "acme", "pk_1")]


def test_bad_arguments_exit_two(stub):
    stub(NormalizedResult.succeeded())

    assert run_gateway_action.main(["--action", "tappay.refund", "--params", "[1]"]) == 2
    assert run_gateway_action.main(["--file", "license"]) == 2
    assert run_gateway_action.main([]) == 2
