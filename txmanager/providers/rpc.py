"""
JSON-RPC node provider.
"""

import itertools
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx

from .base import NodeProvider
from ..config import settings
from ..core.execution.encoding import BlockParameter, decode_quantity, encode_block_parameter
from ..core.execution.errors import JsonRpcError, TransportError
from ..core.execution.models import (
    CallResponse,
    GetCodeResponse,
    RpcError,
    SendTransactionResponse,
    TransactionReceipt,
    TransactionRequest,
)


logger = logging.getLogger(__name__)


@dataclass
class RpcConfig:
    rpc_url: str
    timeout_s: float = 30
    incentive_address_method: str = "eth_getIncentiveAddress"


class JsonRpcProvider(NodeProvider):
    """
    Talks JSON-RPC 2.0 over HTTP to a single node.

    Methods that return a response object hand JSON-RPC errors back inside
    it; only transport failures raise (TransportError).
    """

    name = "jsonrpc"

    def __init__(
        self,
        config: Optional[RpcConfig] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._config = config or RpcConfig(
            rpc_url=settings.rpc_url,
            timeout_s=settings.request_timeout_seconds,
            incentive_address_method=settings.incentive_address_method,
        )
        self.timeout_s = self._config.timeout_s
        self._client = client
        self._ids = itertools.count(1)

    @property
    def rpc_url(self) -> str:
        return self._config.rpc_url

    async def ready(self) -> bool:
        return bool(self._config.rpc_url)

    async def health_check(self) -> Dict[str, Any]:
        if not await self.ready():
            return {"status": "disabled", "reason": "RPC URL not configured"}

        try:
            chain_id = await self.chain_id()
            return {"status": "healthy", "chainId": chain_id}
        except Exception as exc:
            return {"status": "error", "reason": str(exc)}

    async def send_transaction(self, request: TransactionRequest) -> SendTransactionResponse:
        envelope = await self._rpc_request("eth_sendTransaction", [request.to_rpc_dict()])
        return SendTransactionResponse.from_rpc(envelope)

    async def call(self, request: TransactionRequest, block: BlockParameter = "latest") -> CallResponse:
        envelope = await self._rpc_request(
            "eth_call",
            [request.to_rpc_dict(), encode_block_parameter(block)],
        )
        return CallResponse.from_rpc(envelope)

    async def get_code(self, address: str, block: BlockParameter = "latest") -> GetCodeResponse:
        envelope = await self._rpc_request("eth_getCode", [address, encode_block_parameter(block)])
        return GetCodeResponse.from_rpc(envelope)

    async def get_transaction_receipt(self, tx_hash: str) -> Optional[TransactionReceipt]:
        envelope = await self._rpc_request("eth_getTransactionReceipt", [tx_hash])
        if envelope.get("error") is not None:
            rpc_error = RpcError.from_rpc(envelope["error"])
            raise JsonRpcError(rpc_error, f"Error processing request: {rpc_error.message}")

        result = envelope.get("result")
        if not result:
            return None
        return TransactionReceipt.from_rpc(result)

    async def get_incentive_address(self) -> str:
        result = await self._rpc_call(self._config.incentive_address_method, [])
        if not isinstance(result, str) or not result:
            raise JsonRpcError(
                RpcError(code=-32603, message="Invalid incentive address response"),
            )
        return result

    async def estimate_gas(self, request: TransactionRequest) -> int:
        result = await self._rpc_call("eth_estimateGas", [request.to_rpc_dict()])
        return decode_quantity(result)

    async def chain_id(self) -> int:
        result = await self._rpc_call("eth_chainId", [])
        return decode_quantity(result)

    async def _rpc_call(self, method: str, params: List[Any]) -> Any:
        """Make an RPC call and return its result, raising on a JSON-RPC error."""
        envelope = await self._rpc_request(method, params)
        if envelope.get("error") is not None:
            raise JsonRpcError(RpcError.from_rpc(envelope["error"]))
        return envelope.get("result")

    async def _rpc_request(self, method: str, params: List[Any]) -> Dict[str, Any]:
        """Perform one request/response exchange and return the raw envelope."""
        if not self._client or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.timeout_s)

        payload = {
            "jsonrpc": "2.0",
            "id": next(self._ids),
            "method": method,
            "params": params,
        }
        logger.debug(f"RPC {method} {params}")

        try:
            response = await self._client.post(self._config.rpc_url, json=payload)
            response.raise_for_status()
            envelope = response.json()
        except httpx.HTTPError as exc:
            logger.error(f"RPC {method} failed: {exc}")
            raise TransportError(f"RPC {method} failed: {exc}") from exc
        except ValueError as exc:
            raise TransportError(f"RPC {method} returned invalid JSON: {exc}") from exc

        if not isinstance(envelope, dict):
            raise TransportError(f"RPC {method} returned a non-object response")
        return envelope

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()


_rpc_provider: Optional[JsonRpcProvider] = None


def get_rpc_provider() -> JsonRpcProvider:
    global _rpc_provider
    if _rpc_provider is None:
        _rpc_provider = JsonRpcProvider()
    return _rpc_provider
