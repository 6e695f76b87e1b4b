"""
Instance Factories
==================
Create governance units and fungible tokens on demand.

Flow:
1. Caller asks a factory for a new instance
2. Gated factories check registration, collectibles and fee
3. Instance deployed, control handed to the caller
4. Registry records instance + creator; fee forwarded to the controller
"""

from .base import GatedFactory, InstanceFactory
from .dao_factory import DAOFactory, DAOMembersFactory
from .registry import EligibilitySnapshot, InstanceRegistry, check_eligibility
from .token_factory import TokenFactory, TokenInfo, TokenMembersFactory

__all__ = [
    "InstanceFactory",
    "GatedFactory",
    "DAOFactory",
    "DAOMembersFactory",
    "TokenFactory",
    "TokenMembersFactory",
    "TokenInfo",
    "InstanceRegistry",
    "EligibilitySnapshot",
    "check_eligibility",
]
