"""
Receipt processors wait for a submitted transaction to be mined.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from .errors import TransactionTimeoutError
from .models import TransactionReceipt

if TYPE_CHECKING:
    from ...providers.base import NodeProvider


logger = logging.getLogger(__name__)


class TransactionReceiptProcessor(ABC):
    """Resolves a transaction hash into its receipt."""

    @abstractmethod
    async def wait_for_transaction_receipt(self, tx_hash: str) -> TransactionReceipt:
        pass


class PollingTransactionReceiptProcessor(TransactionReceiptProcessor):
    """
    Polls eth_getTransactionReceipt at a fixed interval.

    Makes at most ``attempts`` queries and sleeps ``sleep_duration`` seconds
    between them. Raises TransactionTimeoutError once the attempts are used
    up. Cancelling the awaiting task stops polling.
    """

    def __init__(self, provider: NodeProvider, sleep_duration: float, attempts: int):
        if attempts < 1:
            raise ValueError("Polling attempts must be at least 1")
        if sleep_duration < 0:
            raise ValueError("Polling interval must be non-negative")

        self.provider = provider
        self.sleep_duration = sleep_duration
        self.attempts = attempts

    async def wait_for_transaction_receipt(self, tx_hash: str) -> TransactionReceipt:
        for attempt in range(1, self.attempts + 1):
            receipt = await self.provider.get_transaction_receipt(tx_hash)
            if receipt is not None:
                logger.debug(f"Receipt for {tx_hash} found on attempt {attempt}")
                return receipt

            logger.debug(f"No receipt for {tx_hash} yet (attempt {attempt}/{self.attempts})")
            if attempt < self.attempts:
                await asyncio.sleep(self.sleep_duration)

        waited = self.sleep_duration * self.attempts
        logger.warning(f"Gave up waiting for receipt of {tx_hash} after {self.attempts} attempts")
        raise TransactionTimeoutError(
            f"Transaction receipt was not generated after {waited:g} seconds "
            f"for transaction: {tx_hash}",
            tx_hash=tx_hash,
            attempts=self.attempts,
        )
