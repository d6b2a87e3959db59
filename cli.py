#!/usr/bin/env python3
"""Simple CLI for sending transactions through a local node"""

import argparse
import asyncio
import sys
from typing import List, Optional

from txmanager.config import settings
from txmanager.core.execution import (
    ExecutionError,
    TransactionManager,
    TransactionReceipt,
    create_client_transaction_manager,
)
from txmanager.logging_config import setup_logging
from txmanager.providers.rpc import JsonRpcProvider, RpcConfig


def parse_int(value: str) -> int:
    """Accept decimal or 0x-prefixed hex integers"""
    return int(value, 16) if value.lower().startswith("0x") else int(value)


def parse_block(value: str):
    try:
        return parse_int(value)
    except ValueError:
        return value


def print_receipt(receipt: TransactionReceipt):
    """Pretty print a transaction receipt"""
    status = "✅" if receipt.is_status_ok else "⚠️ reverted"
    print(f"\n{status} Transaction mined")
    print("=" * 50)
    print(f"Hash:     {receipt.transaction_hash}")
    print(f"Block:    {receipt.block_number}")
    print(f"Gas Used: {receipt.gas_used}")
    if receipt.contract_address:
        print(f"Contract: {receipt.contract_address}")


async def cli_code(manager: TransactionManager, address: str, block):
    response = await manager.get_code(address, block)
    if response.has_error:
        print(f"❌ {response.error}")
        return 1
    print(response.code)
    return 0


async def cli_call(manager: TransactionManager, to: str, data: Optional[str], block):
    result = await manager.send_call(to, data, block)
    print(result if result is not None else "(no data)")
    return 0


async def cli_send(manager: TransactionManager, args: argparse.Namespace):
    print(f"📤 Sending {args.fee_model} transaction from {manager.from_address}...")

    if args.fee_model == "legacy":
        if args.gas_price is None:
            raise ValueError("--gas-price is required for legacy transactions")
        receipt = await manager.execute_transaction(
            gas_price=args.gas_price,
            gas_limit=args.gas_limit,
            to=args.to,
            data=args.data,
            value=args.value,
        )
    else:
        chain_id = args.chain_id if args.chain_id is not None else settings.chain_id
        if chain_id is None or args.max_fee is None or args.max_priority_fee is None:
            raise ValueError("--chain-id, --max-fee and --max-priority-fee are required for EIP-1559 transactions")
        execute = (
            manager.execute_incentive_transaction
            if args.fee_model == "incentive"
            else manager.execute_eip1559_transaction
        )
        receipt = await execute(
            chain_id=chain_id,
            max_priority_fee_per_gas=args.max_priority_fee,
            max_fee_per_gas=args.max_fee,
            gas_limit=args.gas_limit,
            to=args.to,
            data=args.data,
            value=args.value,
        )

    print_receipt(receipt)
    return 0


async def cli_receipt(manager: TransactionManager, tx_hash: str):
    print(f"⏳ Waiting for receipt of {tx_hash}...")
    receipt = await manager.receipt_processor.wait_for_transaction_receipt(tx_hash)
    print_receipt(receipt)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Transaction manager CLI")
    parser.add_argument("--rpc-url", default=settings.rpc_url, help="Node JSON-RPC URL")
    parser.add_argument("--from", dest="from_address", default=settings.from_address, help="Sender address")
    parser.add_argument("--attempts", type=int, default=settings.receipt_polling_attempts, help="Receipt polling attempts")
    parser.add_argument("--interval", type=float, default=settings.block_time_seconds, help="Seconds between receipt polls")
    parser.add_argument("--log-level", default=settings.log_level, help="Logging level")
    parser.add_argument("--log-format", choices=["json", "console"], default=settings.log_format, help="Log rendering")
    subparsers = parser.add_subparsers(dest="command")

    code_parser = subparsers.add_parser("code", help="Get contract bytecode")
    code_parser.add_argument("address", help="Contract address")
    code_parser.add_argument("--block", type=parse_block, default="latest", help="Block tag or number")

    call_parser = subparsers.add_parser("call", help="Execute a read-only call")
    call_parser.add_argument("to", help="Contract address")
    call_parser.add_argument("data", nargs="?", help="Calldata (hex)")
    call_parser.add_argument("--block", type=parse_block, default="latest", help="Block tag or number")

    send_parser = subparsers.add_parser("send", help="Send a transaction and wait for the receipt")
    send_parser.add_argument("--to", help="Recipient (omit to deploy a contract)")
    send_parser.add_argument("--data", help="Calldata or init code (hex)")
    send_parser.add_argument("--value", type=parse_int, help="Wei to send")
    send_parser.add_argument("--gas-limit", type=parse_int, help="Gas limit")
    send_parser.add_argument(
        "--fee-model",
        choices=["legacy", "eip1559", "incentive"],
        default="eip1559",
        help="Fee model (default: eip1559)",
    )
    send_parser.add_argument("--gas-price", type=parse_int, help="Gas price in wei (legacy)")
    send_parser.add_argument("--chain-id", type=parse_int, help="Chain ID (eip1559/incentive)")
    send_parser.add_argument("--max-fee", type=parse_int, help="Max fee per gas in wei")
    send_parser.add_argument("--max-priority-fee", type=parse_int, help="Max priority fee per gas in wei")

    receipt_parser = subparsers.add_parser("receipt", help="Wait for a transaction receipt")
    receipt_parser.add_argument("tx_hash", help="Transaction hash")

    return parser


async def run(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    setup_logging(args.log_level, args.log_format)

    provider = JsonRpcProvider(
        RpcConfig(
            rpc_url=args.rpc_url,
            timeout_s=settings.request_timeout_seconds,
            incentive_address_method=settings.incentive_address_method,
        )
    )

    try:
        if args.command == "send" and not args.from_address:
            raise ValueError("A sender address is required (--from or FROM_ADDRESS)")
        manager = create_client_transaction_manager(
            provider,
            # reads do not need a real sender
            from_address=args.from_address or "0x0000000000000000000000000000000000000000",
            attempts=args.attempts,
            sleep_duration=args.interval,
        )

        if args.command == "code":
            return await cli_code(manager, args.address, args.block)
        if args.command == "call":
            return await cli_call(manager, args.to, args.data, args.block)
        if args.command == "send":
            return await cli_send(manager, args)
        if args.command == "receipt":
            return await cli_receipt(manager, args.tx_hash)

        print(f"❌ Unknown command: {args.command}")
        parser.print_help()
        return 2

    except ExecutionError as e:
        print(f"❌ {type(e).__name__}: {e}")
        return 1
    except ValueError as e:
        print(f"❌ {e}")
        return 2
    finally:
        await provider.close()


def main() -> None:
    sys.exit(asyncio.run(run()))


if __name__ == "__main__":
    main()
