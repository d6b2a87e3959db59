"""
TransactionSender backed by a node that holds the sending account.

The account must be unlocked on the node: transactions go out through
eth_sendTransaction and are signed node-side.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from ...config import settings
from .encoding import BlockParameter
from .manager import TransactionManager, TransactionSender
from .models import CallResponse, GetCodeResponse, SendTransactionResponse
from .receipt_processor import PollingTransactionReceiptProcessor, TransactionReceiptProcessor
from .tx_builder import TransactionBuilder

if TYPE_CHECKING:
    from ...providers.base import NodeProvider


logger = logging.getLogger(__name__)


class ClientTransactionSender(TransactionSender):
    """Builds requests for ``from_address`` and sends them through the provider."""

    def __init__(self, provider: NodeProvider, from_address: str):
        if not from_address:
            raise ValueError("ClientTransactionSender requires a from address")
        self.provider = provider
        self._from_address = from_address

    @property
    def from_address(self) -> str:
        return self._from_address

    async def send_transaction(
        self,
        gas_price: int,
        gas_limit: Optional[int],
        to: Optional[str],
        data: Optional[str],
        value: Optional[int],
        constructor: bool = False,
    ) -> SendTransactionResponse:
        request = TransactionBuilder.build_legacy(
            from_address=self._from_address,
            nonce=None,
            gas_price=gas_price,
            gas_limit=gas_limit,
            to=to,
            value=value,
            data=data,
        )
        return await self.provider.send_transaction(request)

    async def send_eip1559_transaction(
        self,
        chain_id: int,
        max_priority_fee_per_gas: int,
        max_fee_per_gas: int,
        gas_limit: Optional[int],
        to: Optional[str],
        data: Optional[str],
        value: Optional[int],
        constructor: bool = False,
    ) -> SendTransactionResponse:
        request = TransactionBuilder.build_eip1559(
            from_address=self._from_address,
            nonce=None,
            gas_limit=gas_limit,
            to=to,
            value=value,
            data=data,
            chain_id=chain_id,
            max_priority_fee_per_gas=max_priority_fee_per_gas,
            max_fee_per_gas=max_fee_per_gas,
        )
        return await self.provider.send_transaction(request)

    async def send_incentive_transaction(
        self,
        chain_id: int,
        max_priority_fee_per_gas: int,
        max_fee_per_gas: int,
        gas_limit: Optional[int],
        to: Optional[str],
        data: Optional[str],
        value: Optional[int],
        constructor: bool = False,
    ) -> SendTransactionResponse:
        # Looked up on every send; the recipient can rotate between blocks
        incentive_address = await self.provider.get_incentive_address()
        logger.debug(f"Using incentive address {incentive_address}")

        request = TransactionBuilder.build_incentive(
            from_address=self._from_address,
            nonce=None,
            gas_limit=gas_limit,
            to=to,
            value=value,
            data=data,
            chain_id=chain_id,
            max_priority_fee_per_gas=max_priority_fee_per_gas,
            max_fee_per_gas=max_fee_per_gas,
            incentive_address=incentive_address,
        )
        return await self.provider.send_transaction(request)

    async def call(self, to: str, data: Optional[str], block_parameter: BlockParameter) -> CallResponse:
        request = TransactionBuilder.build_eth_call(self._from_address, to, data)
        return await self.provider.call(request, block_parameter)

    async def get_code(self, address: str, block_parameter: BlockParameter) -> GetCodeResponse:
        return await self.provider.get_code(address, block_parameter)


def create_client_transaction_manager(
    provider: NodeProvider,
    from_address: Optional[str] = None,
    attempts: Optional[int] = None,
    sleep_duration: Optional[float] = None,
    receipt_processor: Optional[TransactionReceiptProcessor] = None,
) -> TransactionManager:
    """
    Build a TransactionManager that sends through ``provider``.

    Args:
        provider: Node provider holding the unlocked account
        from_address: Sender (default: settings.from_address)
        attempts: Receipt polling attempts (default: settings.receipt_polling_attempts)
        sleep_duration: Seconds between polls (default: settings.block_time_seconds)
        receipt_processor: Custom processor; overrides attempts/sleep_duration

    Returns:
        TransactionManager ready to execute transactions
    """
    sender = ClientTransactionSender(provider, from_address or settings.from_address)

    if receipt_processor is None:
        receipt_processor = PollingTransactionReceiptProcessor(
            provider,
            sleep_duration=settings.block_time_seconds if sleep_duration is None else sleep_duration,
            attempts=settings.receipt_polling_attempts if attempts is None else attempts,
        )

    return TransactionManager(sender, receipt_processor)
