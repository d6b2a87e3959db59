"""
Transaction manager: submits transactions and waits for their receipts.

The manager is the single place that decides what a node response means:
- a rejected submission fails immediately, without polling for a receipt
- an accepted submission is handed to the receipt processor
- a reverted call fails with the node's revert reason
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from .encoding import BlockParameter
from .errors import TransactionRevertError, TransactionSubmitError
from .models import (
    INTERNAL_ERROR_CODE,
    CallResponse,
    GetCodeResponse,
    RpcError,
    SendTransactionResponse,
    TransactionReceipt,
)
from .receipt_processor import TransactionReceiptProcessor


logger = logging.getLogger(__name__)


# Nominal block interval in seconds; the default receipt polling interval
DEFAULT_BLOCK_TIME = 15.0
DEFAULT_POLLING_ATTEMPTS_PER_TX_HASH = 40
DEFAULT_POLLING_FREQUENCY = DEFAULT_BLOCK_TIME


class TransactionSender(ABC):
    """
    Sending capability used by TransactionManager.

    Each method performs one request against the node and returns the raw
    response. Implementations never retry.
    """

    @property
    @abstractmethod
    def from_address(self) -> str:
        pass

    @abstractmethod
    async def send_transaction(
        self,
        gas_price: int,
        gas_limit: Optional[int],
        to: Optional[str],
        data: Optional[str],
        value: Optional[int],
        constructor: bool = False,
    ) -> SendTransactionResponse:
        """Submit a legacy (gasPrice) transaction."""
        pass

    @abstractmethod
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
        """Submit an EIP-1559 transaction."""
        pass

    @abstractmethod
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
        """Submit an EIP-1559 transaction naming the current incentive recipient."""
        pass

    @abstractmethod
    async def call(self, to: str, data: Optional[str], block_parameter: BlockParameter) -> CallResponse:
        pass

    @abstractmethod
    async def get_code(self, address: str, block_parameter: BlockParameter) -> GetCodeResponse:
        pass


class TransactionManager:
    """
    Executes transactions through a TransactionSender.

    Responsibilities:
    - Submit legacy, EIP-1559 and incentive transactions
    - Fail fast on rejected submissions
    - Wait for receipts via the receipt processor
    - Surface call reverts with their reason

    Holds no per-call state, so one instance can serve concurrent callers.
    """

    def __init__(
        self,
        sender: TransactionSender,
        receipt_processor: TransactionReceiptProcessor,
    ):
        self.sender = sender
        self.receipt_processor = receipt_processor

    @property
    def from_address(self) -> str:
        return self.sender.from_address

    async def execute_transaction(
        self,
        gas_price: int,
        gas_limit: Optional[int],
        to: Optional[str],
        data: Optional[str],
        value: Optional[int],
        constructor: bool = False,
    ) -> TransactionReceipt:
        """
        Submit a legacy transaction and wait for its receipt.

        Raises:
            TransactionSubmitError: the node rejected the transaction
            TransactionTimeoutError: no receipt within the polling budget
        """
        response = await self.sender.send_transaction(
            gas_price, gas_limit, to, data, value, constructor,
        )
        return await self.process_response(response)

    async def execute_eip1559_transaction(
        self,
        chain_id: int,
        max_priority_fee_per_gas: int,
        max_fee_per_gas: int,
        gas_limit: Optional[int],
        to: Optional[str],
        data: Optional[str],
        value: Optional[int],
        constructor: bool = False,
    ) -> TransactionReceipt:
        """Submit an EIP-1559 transaction and wait for its receipt."""
        response = await self.sender.send_eip1559_transaction(
            chain_id,
            max_priority_fee_per_gas,
            max_fee_per_gas,
            gas_limit,
            to,
            data,
            value,
            constructor,
        )
        return await self.process_response(response)

    async def execute_incentive_transaction(
        self,
        chain_id: int,
        max_priority_fee_per_gas: int,
        max_fee_per_gas: int,
        gas_limit: Optional[int],
        to: Optional[str],
        data: Optional[str],
        value: Optional[int],
        constructor: bool = False,
    ) -> TransactionReceipt:
        """Submit an incentive transaction and wait for its receipt."""
        response = await self.sender.send_incentive_transaction(
            chain_id,
            max_priority_fee_per_gas,
            max_fee_per_gas,
            gas_limit,
            to,
            data,
            value,
            constructor,
        )
        return await self.process_response(response)

    async def send_transaction(
        self,
        gas_price: int,
        gas_limit: Optional[int],
        to: Optional[str],
        data: Optional[str],
        value: Optional[int],
        constructor: bool = False,
    ) -> SendTransactionResponse:
        return await self.sender.send_transaction(gas_price, gas_limit, to, data, value, constructor)

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
        return await self.sender.send_eip1559_transaction(
            chain_id, max_priority_fee_per_gas, max_fee_per_gas, gas_limit, to, data, value, constructor,
        )

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
        return await self.sender.send_incentive_transaction(
            chain_id, max_priority_fee_per_gas, max_fee_per_gas, gas_limit, to, data, value, constructor,
        )

    async def send_call(
        self,
        to: str,
        data: Optional[str],
        block_parameter: BlockParameter = "latest",
    ) -> Optional[str]:
        """
        Execute a read-only call.

        Returns the call result, or the error data the node attached when
        there is no result.

        Raises:
            TransactionRevertError: the call reverted
        """
        response = await self.sender.call(to, data, block_parameter)
        assert_call_not_reverted(response)

        if response.value is not None:
            return response.value
        if response.error is not None:
            return response.error.data
        return None

    async def get_code(self, address: str, block_parameter: BlockParameter = "latest") -> GetCodeResponse:
        return await self.sender.get_code(address, block_parameter)

    async def process_response(self, response: SendTransactionResponse) -> TransactionReceipt:
        if response.has_error:
            logger.warning(f"Transaction rejected by node: {response.error}")
            raise TransactionSubmitError(response.error)

        tx_hash = response.transaction_hash
        if not tx_hash:
            logger.warning("Node accepted the transaction without returning a hash")
            raise TransactionSubmitError(
                RpcError(code=INTERNAL_ERROR_CODE, message="Missing transaction hash in response"),
            )

        logger.info(f"Transaction submitted: {tx_hash}")
        return await self.receipt_processor.wait_for_transaction_receipt(tx_hash)


def assert_call_not_reverted(response: CallResponse) -> None:
    if response.reverted:
        logger.warning(f"Call reverted: {response.revert_reason}")
        raise TransactionRevertError(response.revert_reason)
