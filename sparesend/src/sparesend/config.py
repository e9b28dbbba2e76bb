"""
Configuration for the send flow.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sparecore.constants import DEFAULT_WALLET_RPC_URL
from sparecore.models import NetworkType


class SendConfig(BaseModel):
    """Configuration for a send session."""

    wallet_id: int = Field(default=1, ge=1)
    network: NetworkType = NetworkType.MAINNET

    # Wallet daemon RPC
    rpc_url: str = DEFAULT_WALLET_RPC_URL
    rpc_cert: str | None = None
    rpc_key: str | None = None
    verify_tls: bool = False
    rpc_timeout: float = Field(default=30.0, gt=0)

    # Display currency, defaults to the network's
    currency_code: str | None = None

    @model_validator(mode="after")
    def set_currency_code_default(self) -> SendConfig:
        """If currency_code is not set, default to the network's code."""
        if self.currency_code is None:
            object.__setattr__(self, "currency_code", self.network.currency_code)
        return self


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False
    )

    network: NetworkType = NetworkType.MAINNET

    wallet_id: int = 1
    wallet_rpc_url: str = DEFAULT_WALLET_RPC_URL
    wallet_rpc_cert: str | None = None
    wallet_rpc_key: str | None = None
    wallet_rpc_verify_tls: bool = False

    log_level: str = "INFO"

    def to_send_config(self) -> SendConfig:
        return SendConfig(
            wallet_id=self.wallet_id,
            network=self.network,
            rpc_url=self.wallet_rpc_url,
            rpc_cert=self.wallet_rpc_cert,
            rpc_key=self.wallet_rpc_key,
            verify_tls=self.wallet_rpc_verify_tls,
        )


def get_settings() -> Settings:
    return Settings()
