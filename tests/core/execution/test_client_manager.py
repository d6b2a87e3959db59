"""
Tests for ClientTransactionSender request shapes and manager construction.
"""

import pytest
from unittest.mock import AsyncMock

from txmanager.config import settings
from txmanager.core.execution.client_manager import (
    ClientTransactionSender,
    create_client_transaction_manager,
)
from txmanager.core.execution.errors import TransactionSubmitError, TransactionTimeoutError
from txmanager.core.execution.models import (
    CallResponse,
    GetCodeResponse,
    SendTransactionResponse,
)
from txmanager.core.execution.receipt_processor import PollingTransactionReceiptProcessor


SENDER = "0x1111111111111111111111111111111111111111"
TARGET = "0x2222222222222222222222222222222222222222"
INCENTIVE_A = "0x3333333333333333333333333333333333333333"
INCENTIVE_B = "0x4444444444444444444444444444444444444444"


class DummyProvider:
    """Records requests instead of talking to a node."""

    def __init__(self, incentive_addresses=(INCENTIVE_A,)):
        self.send_transaction = AsyncMock(return_value=SendTransactionResponse(transaction_hash="0xabc"))
        self.call = AsyncMock(return_value=CallResponse(value="0x01"))
        self.get_code = AsyncMock(return_value=GetCodeResponse(code="0x60"))
        self.get_transaction_receipt = AsyncMock(return_value=None)
        self.get_incentive_address = AsyncMock(side_effect=list(incentive_addresses))

    def sent_payload(self, index=-1):
        request = self.send_transaction.await_args_list[index].args[0]
        return request.to_rpc_dict()


@pytest.mark.asyncio
async def test_legacy_send_payload():
    provider = DummyProvider()
    sender = ClientTransactionSender(provider, SENDER)

    response = await sender.send_transaction(10, 21_000, TARGET, "a0b1", 5)

    assert response.transaction_hash == "0xabc"
    assert provider.sent_payload() == {
        "from": SENDER,
        "to": TARGET,
        "gas": "0x5208",
        "gasPrice": "0xa",
        "value": "0x5",
        "data": "0xa0b1",
    }
    provider.get_incentive_address.assert_not_awaited()


@pytest.mark.asyncio
async def test_eip1559_send_payload():
    provider = DummyProvider()
    sender = ClientTransactionSender(provider, SENDER)

    await sender.send_eip1559_transaction(1, 2, 3, 21_000, TARGET, None, None)

    assert provider.sent_payload() == {
        "from": SENDER,
        "to": TARGET,
        "gas": "0x5208",
        "chainId": "0x1",
        "maxPriorityFeePerGas": "0x2",
        "maxFeePerGas": "0x3",
    }
    provider.get_incentive_address.assert_not_awaited()


@pytest.mark.asyncio
async def test_incentive_send_resolves_address_once_per_send():
    provider = DummyProvider(incentive_addresses=(INCENTIVE_A, INCENTIVE_B))
    sender = ClientTransactionSender(provider, SENDER)

    await sender.send_incentive_transaction(1, 2, 3, None, TARGET, "0x", 7)
    assert provider.get_incentive_address.await_count == 1

    await sender.send_incentive_transaction(1, 2, 3, None, TARGET, "0x", 7)
    assert provider.get_incentive_address.await_count == 2

    first, second = provider.sent_payload(0), provider.sent_payload(1)
    assert first["incentiveAddress"] == INCENTIVE_A
    assert second["incentiveAddress"] == INCENTIVE_B
    assert "gasPrice" not in first
    assert first["maxFeePerGas"] == "0x3"


@pytest.mark.asyncio
async def test_incentive_lookup_precedes_submission():
    provider = DummyProvider()
    order = []
    provider.get_incentive_address = AsyncMock(side_effect=lambda: order.append("lookup") or INCENTIVE_A)
    provider.send_transaction = AsyncMock(
        side_effect=lambda request: order.append("send") or SendTransactionResponse(transaction_hash="0x1"),
    )
    sender = ClientTransactionSender(provider, SENDER)

    await sender.send_incentive_transaction(1, 2, 3, None, TARGET, None, None)

    assert order == ["lookup", "send"]


@pytest.mark.asyncio
async def test_call_builds_call_only_request():
    provider = DummyProvider()
    sender = ClientTransactionSender(provider, SENDER)

    response = await sender.call(TARGET, "70a08231", "latest")

    assert response.value == "0x01"
    request, block = provider.call.await_args.args
    assert request.to_rpc_dict() == {"from": SENDER, "to": TARGET, "data": "0x70a08231"}
    assert block == "latest"


@pytest.mark.asyncio
async def test_get_code_passthrough():
    provider = DummyProvider()
    sender = ClientTransactionSender(provider, SENDER)

    response = await sender.get_code(TARGET, 100)

    assert response.code == "0x60"
    provider.get_code.assert_awaited_once_with(TARGET, 100)


def test_sender_requires_from_address():
    with pytest.raises(ValueError):
        ClientTransactionSender(DummyProvider(), "")


def test_create_manager_uses_settings_defaults(monkeypatch):
    monkeypatch.setattr(settings, "from_address", SENDER)
    monkeypatch.setattr(settings, "receipt_polling_attempts", 40)
    monkeypatch.setattr(settings, "block_time_seconds", 15.0)

    manager = create_client_transaction_manager(DummyProvider())

    assert manager.from_address == SENDER
    assert isinstance(manager.receipt_processor, PollingTransactionReceiptProcessor)
    assert manager.receipt_processor.attempts == 40
    assert manager.receipt_processor.sleep_duration == 15.0


def test_create_manager_with_custom_processor():
    processor = AsyncMock()

    manager = create_client_transaction_manager(DummyProvider(), SENDER, receipt_processor=processor)

    assert manager.receipt_processor is processor


@pytest.mark.asyncio
async def test_manager_times_out_after_single_attempt():
    provider = DummyProvider()
    provider.send_transaction = AsyncMock(return_value=SendTransactionResponse(transaction_hash="0xdeadbeef"))
    manager = create_client_transaction_manager(provider, SENDER, attempts=1, sleep_duration=0)

    with pytest.raises(TransactionTimeoutError) as exc_info:
        await manager.execute_eip1559_transaction(1, 2, 3, 21_000, TARGET, None, 1)

    assert exc_info.value.tx_hash == "0xdeadbeef"
    provider.get_transaction_receipt.assert_awaited_once_with("0xdeadbeef")


@pytest.mark.asyncio
async def test_null_hash_from_node_fails_before_polling():
    provider = DummyProvider()
    provider.send_transaction = AsyncMock(
        return_value=SendTransactionResponse.from_rpc({"jsonrpc": "2.0", "id": 1, "result": None})
    )
    manager = create_client_transaction_manager(provider, SENDER, attempts=3, sleep_duration=0)

    with pytest.raises(TransactionSubmitError):
        await manager.execute_transaction(10, 21_000, TARGET, None, 1)

    provider.get_transaction_receipt.assert_not_awaited()
