"""
Governance Units
================
Collectible-gated DAOs where holders propose and vote.

Flow:
1. Holder with enough collectibles creates a proposal with a future window
2. Holders vote once each while the window is open
3. After close, status resolves from majority, voter quorum and token quorum
"""

from .governance import (
    GovernanceUnit,
    has_majority,
    meets_voter_quorum,
    meets_token_quorum,
    resolve_status,
)
from .types import Proposal, ProposalStatus

__all__ = [
    "GovernanceUnit",
    "Proposal",
    "ProposalStatus",
    "has_majority",
    "meets_voter_quorum",
    "meets_token_quorum",
    "resolve_status",
]
