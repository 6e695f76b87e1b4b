"""
DAO Platform
============
Collectible-gated governance units and the factories that create them,
running on an in-process contract runtime.
"""

from .chain import Chain, Event
from .accounts import Account, ZERO_ADDRESS
from .collectible import HttpCollectibleLedger, SimpleCollectible
from .identity import IdentityRegistry, UserProfile
from .token import FungibleToken
from .dao import GovernanceUnit, Proposal, ProposalStatus
from .factory import (
    DAOFactory,
    DAOMembersFactory,
    EligibilitySnapshot,
    TokenFactory,
    TokenInfo,
    TokenMembersFactory,
)

__all__ = [
    "Chain",
    "Event",
    "Account",
    "ZERO_ADDRESS",
    "SimpleCollectible",
    "HttpCollectibleLedger",
    "IdentityRegistry",
    "UserProfile",
    "FungibleToken",
    "GovernanceUnit",
    "Proposal",
    "ProposalStatus",
    "DAOFactory",
    "DAOMembersFactory",
    "TokenFactory",
    "TokenMembersFactory",
    "TokenInfo",
    "EligibilitySnapshot",
]
