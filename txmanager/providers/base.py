from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from ..core.execution.encoding import BlockParameter
from ..core.execution.models import (
    CallResponse,
    GetCodeResponse,
    SendTransactionResponse,
    TransactionReceipt,
    TransactionRequest,
)


class Provider(ABC):
    """Base provider interface"""

    name: str
    timeout_s: int = 10

    @abstractmethod
    async def ready(self) -> bool:
        """Check if provider is ready to serve requests"""
        pass

    @abstractmethod
    async def health_check(self) -> Dict[str, Any]:
        """Return provider health status"""
        pass


class NodeProvider(Provider):
    """Provider for a node that signs and executes transactions (one request per method)"""

    @abstractmethod
    async def send_transaction(self, request: TransactionRequest) -> SendTransactionResponse:
        """eth_sendTransaction; a rejected submission comes back in the response"""
        pass

    @abstractmethod
    async def call(self, request: TransactionRequest, block: BlockParameter = "latest") -> CallResponse:
        """eth_call"""
        pass

    @abstractmethod
    async def get_code(self, address: str, block: BlockParameter = "latest") -> GetCodeResponse:
        """eth_getCode"""
        pass

    @abstractmethod
    async def get_transaction_receipt(self, tx_hash: str) -> Optional[TransactionReceipt]:
        """eth_getTransactionReceipt; None while the transaction is pending"""
        pass

    @abstractmethod
    async def get_incentive_address(self) -> str:
        """Current incentive recipient for incentive transactions"""
        pass
