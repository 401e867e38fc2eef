"""Configuration for the Waves SDK.

Settings are read from ``WAVES_*`` environment variables and applied with
:meth:`Node.from_settings <waves_sdk.client.Node.from_settings>`; wallets
take ``settings.chain()``. Nothing in the SDK reads them implicitly.
"""

from __future__ import annotations

import logging
from typing import Literal

import structlog
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from waves_sdk.types import ChainId

MAINNET_URL = "https://nodes.wavesnodes.com"
TESTNET_URL = "https://nodes-testnet.wavesnodes.com"
STAGENET_URL = "https://nodes-stagenet.wavesnodes.com"
LOCAL_URL = "http://127.0.0.1:6869"


class WavesSettings(BaseSettings):
    """Network, timing and logging settings."""

    chain_id: str = Field(default="W", description="Chain id character: W, T, S or R")
    node_url: str = Field(default=MAINNET_URL)
    timeout: float = Field(default=30.0, gt=0, description="HTTP request timeout in seconds")
    wait_seconds: float = Field(default=60.0, gt=0, description="Default deadline of wait helpers")
    polling_interval: float = Field(default=1.0, gt=0, description="Delay between polls in seconds")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")

    model_config = {"env_prefix": "WAVES_"}

    @field_validator("chain_id")
    @classmethod
    def _single_char(cls, v: str) -> str:
        ChainId.from_string(v)
        return v

    def chain(self) -> ChainId:
        return ChainId.from_string(self.chain_id)


def configure_logging(level: str = "INFO") -> None:
    """Console structlog output filtered at ``level``.

    The SDK never calls this itself; applications opt in.
    """
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level.upper(), logging.INFO)),
        cache_logger_on_first_use=False,
    )
