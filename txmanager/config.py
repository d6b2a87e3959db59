from pathlib import Path
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


BASE_DIR = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    log_level: str = Field(default="INFO", description="Logging level")
    log_format: Literal["json", "console"] = Field(default="json", description="Log rendering: JSON lines or console")

    # Node connection
    rpc_url: str = Field(default="http://127.0.0.1:8545", description="JSON-RPC endpoint of the node")
    request_timeout_seconds: int = Field(default=30, description="Per-request timeout")

    # Sending account (must be unlocked on the node)
    from_address: str = Field(default="", description="Default sender address")
    chain_id: Optional[int] = Field(default=None, description="Chain ID used for EIP-1559 transactions")

    # Receipt polling
    block_time_seconds: float = Field(
        default=15.0,
        ge=0,
        description="Nominal block interval; used as the receipt polling interval",
    )
    receipt_polling_attempts: int = Field(
        default=40,
        ge=1,
        description="Receipt queries per transaction hash before giving up",
    )

    incentive_address_method: str = Field(
        default="eth_getIncentiveAddress",
        description="RPC method that returns the current incentive recipient",
    )

    @property
    def has_from_address(self) -> bool:
        return bool(self.from_address)


# Global settings instance
settings = Settings()
