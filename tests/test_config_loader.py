import pytest
from pydantic import ValidationError

from paygate.utils.config_loader import DEFAULT_BASE_URL, GatewayConfig, load_gateway_config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    # setenv first so monkeypatch also undoes whatever load_dotenv writes
    for name in ("PAYGATE_API_URL", "PAYGATE_API_KEY", "PAYGATE_UPLOAD_ROOT"):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


def test_defaults_to_the_production_gateway(tmp_path):
    config = load_gateway_config(tmp_path / "none.env")
    assert config.base_url == DEFAULT_BASE_URL
    assert config.api_key is None
    assert config.upload_root is None


def test_reads_dotenv_file(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("PAYGATE_API_URL=https://sandbox.gateway.test/\nPAYGATE_API_KEY=  \n", encoding="utf-8")

    config = load_gateway_config(env_file)

    assert config.base_url == "https://sandbox.gateway.test"
    assert config.api_key is None


@pytest.mark.parametrize("url", ["", "ftp://gateway.test", "gateway.test"])
def test_rejects_unusable_base_url(url):
    with pytest.raises(ValidationError):
        GatewayConfig(base_url=url)
