"""
Transaction request and JSON-RPC response models.
"""

from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional

from .encoding import decode_quantity, decode_revert_reason, encode_quantity, prepend_hex_prefix


# Node-side default gas for eth_sendTransaction when none is supplied
DEFAULT_GAS = 9000

# Node error code for "execution reverted"
EXECUTION_REVERTED_CODE = 3

# JSON-RPC "internal error", used when the node sends a malformed reply
INTERNAL_ERROR_CODE = -32603


# dataclass field -> JSON-RPC key; int fields are encoded as quantities
_WIRE_KEYS = {
    "from_address": "from",
    "to": "to",
    "gas": "gas",
    "gas_price": "gasPrice",
    "value": "value",
    "data": "data",
    "nonce": "nonce",
    "chain_id": "chainId",
    "max_priority_fee_per_gas": "maxPriorityFeePerGas",
    "max_fee_per_gas": "maxFeePerGas",
    "incentive_address": "incentiveAddress",
}


@dataclass(frozen=True)
class TransactionRequest:
    """
    Request object for eth_sendTransaction, eth_call and eth_estimateGas.

    Exactly one fee model may be populated: ``gas_price`` (legacy) or
    ``chain_id`` + ``max_priority_fee_per_gas`` + ``max_fee_per_gas`` (EIP-1559). Call-only
    requests carry neither. Unset fields are left out of the RPC payload.
    """
    from_address: str
    to: Optional[str] = None                    # None = contract creation
    gas: Optional[int] = None                   # Gas limit
    gas_price: Optional[int] = None
    value: Optional[int] = None
    data: Optional[str] = None
    nonce: Optional[int] = None                 # Never set on eth_call
    chain_id: Optional[int] = None
    max_priority_fee_per_gas: Optional[int] = None
    max_fee_per_gas: Optional[int] = None
    incentive_address: Optional[str] = None

    def __post_init__(self):
        if not self.from_address:
            raise ValueError("Transaction request requires a from address")

        fee_market = (self.chain_id, self.max_priority_fee_per_gas, self.max_fee_per_gas)
        if self.gas_price is not None and any(fee is not None for fee in fee_market):
            raise ValueError("gasPrice cannot be combined with chainId or EIP-1559 fee fields")
        if (fee_market[1] is None) != (fee_market[2] is None):
            raise ValueError("maxPriorityFeePerGas and maxFeePerGas must be set together")
        if self.is_eip1559 and self.chain_id is None:
            raise ValueError("EIP-1559 fee fields require a chainId")
        if self.incentive_address is not None and not self.is_eip1559:
            raise ValueError("incentiveAddress requires EIP-1559 fee fields")

        if self.data is not None:
            object.__setattr__(self, "data", prepend_hex_prefix(self.data))

    @property
    def is_legacy(self) -> bool:
        return self.gas_price is not None

    @property
    def is_eip1559(self) -> bool:
        return self.max_fee_per_gas is not None

    @property
    def is_incentive(self) -> bool:
        return self.incentive_address is not None

    @property
    def is_call_only(self) -> bool:
        return not self.is_legacy and not self.is_eip1559 and self.nonce is None

    @property
    def is_contract_creation(self) -> bool:
        return self.to is None

    def to_rpc_dict(self) -> Dict[str, Any]:
        """Serialize to a JSON-RPC transaction object, omitting unset fields."""
        tx: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            tx[_WIRE_KEYS[f.name]] = encode_quantity(value) if isinstance(value, int) else value
        return tx


@dataclass(frozen=True)
class RpcError:
    """JSON-RPC error object."""
    code: int
    message: str
    data: Optional[Any] = None

    @classmethod
    def from_rpc(cls, error: Any) -> "RpcError":
        if not isinstance(error, dict):
            return cls(code=INTERNAL_ERROR_CODE, message=str(error))
        return cls(
            code=int(error.get("code") or INTERNAL_ERROR_CODE),
            message=str(error.get("message") or ""),
            data=error.get("data"),
        )

    def __str__(self) -> str:
        return f"{self.message} (code {self.code})"


@dataclass(frozen=True)
class SendTransactionResponse:
    """Outcome of eth_sendTransaction: a transaction hash or an error."""
    transaction_hash: Optional[str] = None
    error: Optional[RpcError] = None

    @property
    def has_error(self) -> bool:
        return self.error is not None

    @classmethod
    def from_rpc(cls, envelope: Dict[str, Any]) -> "SendTransactionResponse":
        if envelope.get("error") is not None:
            return cls(error=RpcError.from_rpc(envelope["error"]))
        tx_hash = envelope.get("result")
        if not isinstance(tx_hash, str) or not tx_hash:
            return cls(error=RpcError(code=INTERNAL_ERROR_CODE, message="Missing transaction hash in response"))
        return cls(transaction_hash=tx_hash)


@dataclass(frozen=True)
class CallResponse:
    """Outcome of eth_call."""
    value: Optional[str] = None
    error: Optional[RpcError] = None
    reverted: bool = False
    revert_reason: Optional[str] = None

    @property
    def has_error(self) -> bool:
        return self.error is not None

    @classmethod
    def from_rpc(cls, envelope: Dict[str, Any]) -> "CallResponse":
        error = RpcError.from_rpc(envelope["error"]) if envelope.get("error") is not None else None
        value = envelope.get("result")

        if error is not None and error.code == EXECUTION_REVERTED_CODE:
            return cls(value=value, error=error, reverted=True, revert_reason=error.message)

        reason = decode_revert_reason(value)
        if reason is not None:
            return cls(value=value, error=error, reverted=True, revert_reason=reason)

        return cls(value=value, error=error)


@dataclass(frozen=True)
class GetCodeResponse:
    """Outcome of eth_getCode."""
    code: Optional[str] = None
    error: Optional[RpcError] = None

    @property
    def has_error(self) -> bool:
        return self.error is not None

    @classmethod
    def from_rpc(cls, envelope: Dict[str, Any]) -> "GetCodeResponse":
        if envelope.get("error") is not None:
            return cls(error=RpcError.from_rpc(envelope["error"]))
        return cls(code=envelope.get("result"))


@dataclass(frozen=True)
class TransactionReceipt:
    """Mined transaction receipt as returned by the node."""
    transaction_hash: str
    block_number: Optional[int] = None
    block_hash: Optional[str] = None
    gas_used: Optional[int] = None
    status: Optional[int] = None                # 1 = success, 0 = revert
    contract_address: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_status_ok(self) -> bool:
        return self.status is None or self.status == 1

    @classmethod
    def from_rpc(cls, data: Dict[str, Any]) -> "TransactionReceipt":
        return cls(
            transaction_hash=data.get("transactionHash", ""),
            block_number=decode_quantity(data.get("blockNumber")),
            block_hash=data.get("blockHash"),
            gas_used=decode_quantity(data.get("gasUsed")),
            status=decode_quantity(data.get("status")),
            contract_address=data.get("contractAddress"),
            raw=dict(data),
        )
