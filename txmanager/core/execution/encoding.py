"""
Hex and quantity encoding helpers for JSON-RPC payloads.
"""

from typing import Optional, Union


HEX_PREFIX = "0x"

# Error(string) selector used by Solidity reverts
REVERT_SELECTOR = "0x08c379a0"

BLOCK_PARAMETER_NAMES = frozenset({"latest", "earliest", "pending", "safe", "finalized"})

BlockParameter = Union[int, str]


def encode_quantity(value: int) -> str:
    """Encode a non-negative integer as a minimal-digit hex quantity."""
    if value < 0:
        raise ValueError(f"Quantity must be non-negative, got {value}")
    return hex(value)


def decode_quantity(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    return int(value, 16)


def has_hex_prefix(value: str) -> bool:
    return value[:2] in ("0x", "0X")


def prepend_hex_prefix(value: str) -> str:
    return value if has_hex_prefix(value) else f"{HEX_PREFIX}{value}"


def clean_hex_prefix(value: str) -> str:
    return value[2:] if has_hex_prefix(value) else value


def encode_block_parameter(block: BlockParameter) -> str:
    """
    Encode a block parameter for eth_call / eth_getCode.

    Accepts a block tag ("latest", "pending", ...) or a block number.
    """
    if isinstance(block, bool):
        raise ValueError("Block parameter must be a tag or a block number")
    if isinstance(block, int):
        return encode_quantity(block)
    tag = block.lower()
    if tag in BLOCK_PARAMETER_NAMES:
        return tag
    if has_hex_prefix(block):
        return encode_quantity(int(block, 16))
    raise ValueError(f"Unknown block parameter: {block}")


def decode_revert_reason(payload: Optional[str]) -> Optional[str]:
    """
    Decode an ABI encoded Error(string) revert payload.

    Returns None when the payload is not an Error(string) revert.
    """
    if not payload or not payload.lower().startswith(REVERT_SELECTOR):
        return None

    body = payload[len(REVERT_SELECTOR):]
    # offset word, length word, then the utf-8 bytes padded to 32
    if len(body) < 128:
        return None
    try:
        length = int(body[64:128], 16)
        raw = bytes.fromhex(body[128:128 + length * 2])
    except ValueError:
        return None
    if len(raw) != length:
        return None
    return raw.decode("utf-8", errors="replace")
