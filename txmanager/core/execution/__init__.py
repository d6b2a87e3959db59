"""
Transaction Execution Layer

Submits transactions to a node and waits for their receipts:
- TransactionManager: executes transactions through a TransactionSender
- ClientTransactionSender: sends from an account unlocked on the node
- TransactionBuilder: builds TransactionRequest objects
- PollingTransactionReceiptProcessor: bounded receipt polling

Usage:
    from txmanager.core.execution import create_client_transaction_manager
    from txmanager.providers.rpc import get_rpc_provider

    manager = create_client_transaction_manager(get_rpc_provider(), "0x...")

    # Legacy, EIP-1559 or incentive pricing
    receipt = await manager.execute_eip1559_transaction(
        chain_id=1,
        max_priority_fee_per_gas=1_000_000_000,
        max_fee_per_gas=30_000_000_000,
        gas_limit=21_000,
        to="0x...",
        data=None,
        value=10**18,
    )

    # Read-only call
    result = await manager.send_call("0x...", "0x70a08231...")
"""

from .models import (
    DEFAULT_GAS,
    TransactionRequest,
    RpcError,
    SendTransactionResponse,
    CallResponse,
    GetCodeResponse,
    TransactionReceipt,
)

from .errors import (
    REVERT_ERR_STR,
    ExecutionError,
    JsonRpcError,
    TransactionSubmitError,
    TransactionRevertError,
    TransactionTimeoutError,
    TransportError,
)

from .tx_builder import (
    TransactionBuilder,
)

from .receipt_processor import (
    TransactionReceiptProcessor,
    PollingTransactionReceiptProcessor,
)

from .manager import (
    DEFAULT_BLOCK_TIME,
    DEFAULT_POLLING_ATTEMPTS_PER_TX_HASH,
    DEFAULT_POLLING_FREQUENCY,
    TransactionSender,
    TransactionManager,
)

from .client_manager import (
    ClientTransactionSender,
    create_client_transaction_manager,
)

__all__ = [
    # Models
    "DEFAULT_GAS",
    "TransactionRequest",
    "RpcError",
    "SendTransactionResponse",
    "CallResponse",
    "GetCodeResponse",
    "TransactionReceipt",
    # Errors
    "REVERT_ERR_STR",
    "ExecutionError",
    "JsonRpcError",
    "TransactionSubmitError",
    "TransactionRevertError",
    "TransactionTimeoutError",
    "TransportError",
    # Transaction Builder
    "TransactionBuilder",
    # Receipt processing
    "TransactionReceiptProcessor",
    "PollingTransactionReceiptProcessor",
    # Manager
    "DEFAULT_BLOCK_TIME",
    "DEFAULT_POLLING_ATTEMPTS_PER_TX_HASH",
    "DEFAULT_POLLING_FREQUENCY",
    "TransactionSender",
    "TransactionManager",
    "ClientTransactionSender",
    "create_client_transaction_manager",
]
