"""
Transaction builder for the supported request shapes.
"""

from typing import Optional

from .models import TransactionRequest


class TransactionBuilder:
    """
    Builds TransactionRequest objects.

    Handles:
    - Contract creation (with or without an explicit gas limit)
    - Ether transfers
    - Function calls (with or without value)
    - eth_call requests
    - Legacy, EIP-1559 and incentive submissions
    """

    @staticmethod
    def build_legacy(
        from_address: str,
        nonce: Optional[int],
        gas_price: int,
        gas_limit: Optional[int],
        to: Optional[str],
        value: Optional[int] = None,
        data: Optional[str] = None,
    ) -> TransactionRequest:
        """
        Build a legacy (gasPrice) transaction.

        Args:
            from_address: The sender address
            nonce: Explicit nonce, or None to let the node assign one
            gas_price: Gas price in wei
            gas_limit: Gas limit, or None for the node default
            to: The recipient, or None for contract creation
            value: Wei to send
            data: Calldata or init code (hex)

        Returns:
            TransactionRequest ready to be submitted
        """
        if gas_price is None:
            raise ValueError("Legacy transactions require a gas price")

        return TransactionRequest(
            from_address=from_address,
            nonce=nonce,
            gas_price=gas_price,
            gas=gas_limit,
            to=to,
            value=value,
            data=data,
        )

    @staticmethod
    def build_eip1559(
        from_address: str,
        nonce: Optional[int],
        gas_limit: Optional[int],
        to: Optional[str],
        value: Optional[int],
        data: Optional[str],
        chain_id: int,
        max_priority_fee_per_gas: int,
        max_fee_per_gas: int,
        incentive_address: Optional[str] = None,
    ) -> TransactionRequest:
        """
        Build an EIP-1559 transaction. gasPrice is never set.

        Args:
            from_address: The sender address
            nonce: Explicit nonce, or None to let the node assign one
            gas_limit: Gas limit, or None for the node default
            to: The recipient, or None for contract creation
            value: Wei to send
            data: Calldata or init code (hex)
            chain_id: The chain ID
            max_priority_fee_per_gas: Priority fee cap in wei
            max_fee_per_gas: Total fee cap in wei
            incentive_address: Incentive recipient (incentive variant only)

        Returns:
            TransactionRequest ready to be submitted
        """
        if max_priority_fee_per_gas is None or max_fee_per_gas is None:
            raise ValueError("EIP-1559 transactions require maxPriorityFeePerGas and maxFeePerGas")
        if chain_id is None:
            raise ValueError("EIP-1559 transactions require a chain ID")

        return TransactionRequest(
            from_address=from_address,
            nonce=nonce,
            gas=gas_limit,
            to=to,
            value=value,
            data=data,
            chain_id=chain_id,
            max_priority_fee_per_gas=max_priority_fee_per_gas,
            max_fee_per_gas=max_fee_per_gas,
            incentive_address=incentive_address,
        )

    @staticmethod
    def build_incentive(
        from_address: str,
        nonce: Optional[int],
        gas_limit: Optional[int],
        to: Optional[str],
        value: Optional[int],
        data: Optional[str],
        chain_id: int,
        max_priority_fee_per_gas: int,
        max_fee_per_gas: int,
        incentive_address: str,
    ) -> TransactionRequest:
        """Build an EIP-1559 transaction that also names an incentive recipient."""
        if not incentive_address:
            raise ValueError("Incentive transactions require an incentive address")

        return TransactionBuilder.build_eip1559(
            from_address=from_address,
            nonce=nonce,
            gas_limit=gas_limit,
            to=to,
            value=value,
            data=data,
            chain_id=chain_id,
            max_priority_fee_per_gas=max_priority_fee_per_gas,
            max_fee_per_gas=max_fee_per_gas,
            incentive_address=incentive_address,
        )

    @staticmethod
    def build_contract_creation(
        from_address: str,
        nonce: Optional[int],
        gas_price: int,
        init: str,
        gas_limit: Optional[int] = None,
        value: Optional[int] = None,
    ) -> TransactionRequest:
        """Build a contract deployment. ``init`` is the contract init code."""
        return TransactionBuilder.build_legacy(
            from_address=from_address,
            nonce=nonce,
            gas_price=gas_price,
            gas_limit=gas_limit,
            to=None,
            value=value,
            data=init,
        )

    @staticmethod
    def build_ether_transfer(
        from_address: str,
        nonce: Optional[int],
        gas_price: int,
        gas_limit: Optional[int],
        to: str,
        value: int,
    ) -> TransactionRequest:
        return TransactionBuilder.build_legacy(
            from_address=from_address,
            nonce=nonce,
            gas_price=gas_price,
            gas_limit=gas_limit,
            to=to,
            value=value,
        )

    @staticmethod
    def build_function_call(
        from_address: str,
        nonce: Optional[int],
        gas_price: int,
        gas_limit: Optional[int],
        to: str,
        data: str,
        value: Optional[int] = None,
    ) -> TransactionRequest:
        return TransactionBuilder.build_legacy(
            from_address=from_address,
            nonce=nonce,
            gas_price=gas_price,
            gas_limit=gas_limit,
            to=to,
            value=value,
            data=data,
        )

    @staticmethod
    def build_eth_call(
        from_address: str,
        to: str,
        data: Optional[str],
        value: Optional[int] = None,
    ) -> TransactionRequest:
        """
        Build an eth_call request.

        No nonce and no fee fields: nodes reject a nonce on eth_call.
        """
        return TransactionRequest(
            from_address=from_address,
            to=to,
            value=value,
            data=data,
        )
