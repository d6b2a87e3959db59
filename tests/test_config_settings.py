import pytest
from pydantic import ValidationError

from txmanager.config import Settings


def test_defaults_match_polling_policy(monkeypatch):
    """Receipt polling defaults to 40 attempts at the nominal block interval."""

    monkeypatch.delenv("RECEIPT_POLLING_ATTEMPTS", raising=False)
    monkeypatch.delenv("BLOCK_TIME_SECONDS", raising=False)

    settings = Settings(_env_file=None)

    assert settings.receipt_polling_attempts == 40
    assert settings.block_time_seconds == 15.0
    assert settings.incentive_address_method == "eth_getIncentiveAddress"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("RPC_URL", "http://node.internal:8545")
    monkeypatch.setenv("FROM_ADDRESS", "0x1111111111111111111111111111111111111111")
    monkeypatch.setenv("chain_id", "71")
    monkeypatch.setenv("RECEIPT_POLLING_ATTEMPTS", "5")

    settings = Settings(_env_file=None)

    assert settings.rpc_url == "http://node.internal:8545"
    assert settings.has_from_address
    assert settings.chain_id == 71
    assert settings.receipt_polling_attempts == 5


def test_polling_attempts_must_be_positive(monkeypatch):
    monkeypatch.setenv("RECEIPT_POLLING_ATTEMPTS", "0")

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_log_format_choices(monkeypatch):
    monkeypatch.setenv("LOG_FORMAT", "console")
    assert Settings(_env_file=None).log_format == "console"

    monkeypatch.setenv("LOG_FORMAT", "xml")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)
