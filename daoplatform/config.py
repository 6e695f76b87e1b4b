"""
DAO Platform Configuration
==========================
Handles environment variables and platform defaults.
"""

import logging
import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()

# Governance unit thresholds used when none are given
DEFAULT_MIN_PROPOSAL_CREATION_UNITS = 10
DEFAULT_MIN_VOTES_TO_APPROVE = 10
DEFAULT_MIN_TOKENS_TO_APPROVE = 50

# Gated factories
DEFAULT_CREATION_FEE = 10**15  # 0.001 native coin
DEFAULT_MIN_COLLECTIBLES = 5

DEFAULT_COLLECTIBLE_MINT_PRICE = 10**18  # 1 native coin

API_URLS = {
    "mainnet": "https://api.hiro.so",
    "testnet": "https://api.testnet.hiro.so",
}


@dataclass
class PlatformConfig:
    """Configuration for deploying and running the platform contracts."""

    # Governance unit defaults
    min_proposal_creation_units: int
    min_votes_to_approve: int
    min_tokens_to_approve: int

    # Gated factory defaults
    creation_fee: int
    min_collectibles_required: int

    # Collectible collection
    collectible_mint_price: int

    # Holdings API (HttpCollectibleLedger)
    network: str  # "mainnet" or "testnet"
    api_url: str

    log_level: str

    @classmethod
    def from_env(cls) -> "PlatformConfig":
        """Load configuration from environment variables."""
        network = os.getenv("STACKS_NETWORK", "mainnet")

        return cls(
            min_proposal_creation_units=int(os.getenv(
                "DAO_MIN_PROPOSAL_CREATION_UNITS", DEFAULT_MIN_PROPOSAL_CREATION_UNITS
            )),
            min_votes_to_approve=int(os.getenv(
                "DAO_MIN_VOTES_TO_APPROVE", DEFAULT_MIN_VOTES_TO_APPROVE
            )),
            min_tokens_to_approve=int(os.getenv(
                "DAO_MIN_TOKENS_TO_APPROVE", DEFAULT_MIN_TOKENS_TO_APPROVE
            )),
            creation_fee=int(os.getenv("FACTORY_CREATION_FEE", DEFAULT_CREATION_FEE)),
            min_collectibles_required=int(os.getenv(
                "FACTORY_MIN_COLLECTIBLES", DEFAULT_MIN_COLLECTIBLES
            )),
            collectible_mint_price=int(os.getenv(
                "COLLECTIBLE_MINT_PRICE", DEFAULT_COLLECTIBLE_MINT_PRICE
            )),
            network=network,
            api_url=os.getenv("STACKS_API_URL", API_URLS.get(network, API_URLS["mainnet"])),
            log_level=os.getenv("DAO_LOG_LEVEL", "INFO"),
        )


def configure_logging(config: PlatformConfig):
    """Set up root logging at the configured level."""
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
