"""
Execution error types.

Callers can tell the failure modes apart by type:
- TransactionSubmitError: the node rejected the submission, nothing was polled
- TransactionRevertError: a call executed and reverted
- TransactionTimeoutError: submission accepted, no receipt within the polling budget
- TransportError: the request/response round trip itself failed
"""

from typing import Optional

from .models import RpcError


REVERT_ERR_STR = "Contract Call has been reverted by the EVM with the reason: '{}'."


class ExecutionError(Exception):
    """Base exception for execution errors."""
    pass


class JsonRpcError(ExecutionError):
    """The node answered with a JSON-RPC error object."""

    def __init__(self, rpc_error: RpcError, message: Optional[str] = None):
        super().__init__(message or rpc_error.message)
        self.rpc_error = rpc_error

    @property
    def code(self) -> int:
        return self.rpc_error.code

    @property
    def data(self):
        return self.rpc_error.data


class TransactionSubmitError(JsonRpcError):
    """Transaction submission was rejected by the node."""
    pass


class TransactionRevertError(ExecutionError):
    """Contract call reverted."""

    def __init__(self, revert_reason: Optional[str]):
        super().__init__(REVERT_ERR_STR.format(revert_reason))
        self.revert_reason = revert_reason


class TransactionTimeoutError(ExecutionError):
    """No receipt was produced within the polling budget."""

    def __init__(self, message: str, tx_hash: str, attempts: int):
        super().__init__(message)
        self.tx_hash = tx_hash
        self.attempts = attempts


class TransportError(ExecutionError):
    """The RPC round trip failed before a JSON-RPC response was received."""
    pass
