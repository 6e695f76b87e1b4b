"""
Governance Unit
===============
Collectible-weighted proposal voting.

Lifecycle of a proposal:
1. A holder with enough collectibles creates it, with a window in the future
2. PENDING until the window opens, ACTIVE while it is open
3. Holders vote once each; weight = collectibles held at vote time
4. After the window closes it resolves to APPROVED or REJECTED

Approval needs all three at once:
- majority:      votes_for > votes_against
- voter quorum:  distinct voters >= min_votes_to_approve
- token quorum:  votes_for >= min_tokens_to_approve

Voting power is read live; there are no snapshots.
"""

import logging
from typing import List, Optional

from ..accounts import is_zero_address
from ..chain import Chain
from ..config import (
    DEFAULT_MIN_PROPOSAL_CREATION_UNITS,
    DEFAULT_MIN_TOKENS_TO_APPROVE,
    DEFAULT_MIN_VOTES_TO_APPROVE,
)
from ..errors import EligibilityError, NotFoundError, StateError, ValidationError
from ..ownable import Ownable
from .types import Proposal, ProposalStatus

logger = logging.getLogger(__name__)

INVALID_ADDRESS = "Invalid address"
SAME_ADDRESS = "Same as current address"
NON_POSITIVE_VALUE = "Value must be greater than 0"
START_NOT_IN_FUTURE = "Start time must be in the future"
END_NOT_AFTER_START = "End time must be after start time"
PROPOSAL_NOT_FOUND = "Proposal does not exist"
PROPOSAL_CANCELLED = "Proposal is cancelled"
VOTING_NOT_OPEN = "Voting is not open"
ALREADY_VOTED = "Already voted"
NO_VOTING_POWER = "No voting power"


def has_majority(votes_for: int, votes_against: int) -> bool:
    return votes_for > votes_against


def meets_voter_quorum(voter_count: int, min_votes_to_approve: int) -> bool:
    return voter_count >= min_votes_to_approve


def meets_token_quorum(votes_for: int, min_tokens_to_approve: int) -> bool:
    return votes_for >= min_tokens_to_approve


def resolve_status(
    proposal: Optional[Proposal],
    now: int,
    min_votes_to_approve: int,
    min_tokens_to_approve: int,
) -> ProposalStatus:
    """Status of ``proposal`` at time ``now``. Pure."""
    if proposal is None:
        return ProposalStatus.NOT_FOUND
    if proposal.cancelled:
        return ProposalStatus.CANCELLED
    if now < proposal.start_time:
        return ProposalStatus.PENDING
    if now < proposal.end_time:
        return ProposalStatus.ACTIVE

    approved = (
        has_majority(proposal.votes_for, proposal.votes_against)
        and meets_voter_quorum(proposal.voter_count, min_votes_to_approve)
        and meets_token_quorum(proposal.votes_for, min_tokens_to_approve)
    )
    return ProposalStatus.APPROVED if approved else ProposalStatus.REJECTED


def _require_positive(value: int):
    if value <= 0:
        raise ValidationError(NON_POSITIVE_VALUE)


class GovernanceUnit(Ownable):
    """
    A DAO whose members are the holders of one collectible contract.

    The controller (initially the deployer) tunes thresholds, swaps the
    collectible contract and cancels proposals.
    """

    def __init__(
        self,
        chain: Chain,
        deployer: str,
        collectible_contract: str,
        min_proposal_creation_units: int = DEFAULT_MIN_PROPOSAL_CREATION_UNITS,
        min_votes_to_approve: int = DEFAULT_MIN_VOTES_TO_APPROVE,
        min_tokens_to_approve: int = DEFAULT_MIN_TOKENS_TO_APPROVE,
        name: str = "",
    ):
        super().__init__(chain, deployer)
        if is_zero_address(collectible_contract):
            raise ValidationError(INVALID_ADDRESS)
        for value in (min_proposal_creation_units, min_votes_to_approve, min_tokens_to_approve):
            _require_positive(value)

        self.name = name
        self.collectible_contract = collectible_contract
        self.min_proposal_creation_units = min_proposal_creation_units
        self.min_votes_to_approve = min_votes_to_approve
        self.min_tokens_to_approve = min_tokens_to_approve
        self.proposals: List[Proposal] = []
        self._deploy(deployer)

    # ------------------------------------------------------------------
    # Proposals
    # ------------------------------------------------------------------

    @property
    def proposal_count(self) -> int:
        return len(self.proposals)

    def get_total_proposals(self) -> int:
        return self.proposal_count

    def get_voting_power(self, identity: str) -> int:
        """Collectibles held by ``identity`` right now."""
        return self.chain.contract_at(self.collectible_contract).balance_of(identity)

    def create_proposal(
        self,
        proposer: str,
        username: str,
        description: str,
        link: str,
        start_time: int,
        end_time: int,
    ) -> int:
        """Create a proposal; returns its id."""
        if self.get_voting_power(proposer) < self.min_proposal_creation_units:
            raise EligibilityError(
                f"At least {self.min_proposal_creation_units} collectibles "
                f"are required to create a proposal"
            )
        if start_time <= self.chain.now:
            raise ValidationError(START_NOT_IN_FUTURE)
        if end_time <= start_time:
            raise ValidationError(END_NOT_AFTER_START)

        proposal = Proposal(
            id=self.proposal_count,
            proposer=proposer,
            username=username,
            description=description,
            link=link,
            start_time=start_time,
            end_time=end_time,
        )
        self.proposals.append(proposal)

        self._emit(
            "ProposalCreated",
            proposal_id=proposal.id,
            proposer=proposer,
            description=description,
            start_time=start_time,
            end_time=end_time,
        )
        logger.info("DAO %s: proposal %d created by %s", self.address, proposal.id, proposer)
        return proposal.id

    def get_proposal(self, proposal_id: int) -> Proposal:
        proposal = self._find(proposal_id)
        if proposal is None:
            raise NotFoundError(PROPOSAL_NOT_FOUND)
        return proposal

    def cast_vote(self, voter: str, proposal_id: int, support: bool) -> int:
        """Vote for (``support=True``) or against; returns the weight counted."""
        proposal = self.get_proposal(proposal_id)
        if proposal.cancelled:
            raise StateError(PROPOSAL_CANCELLED)
        if not proposal.is_open(self.chain.now):
            raise StateError(VOTING_NOT_OPEN)
        if proposal.has_voted(voter):
            raise StateError(ALREADY_VOTED)

        weight = self.get_voting_power(voter)
        if weight == 0:
            raise EligibilityError(NO_VOTING_POWER)

        if support:
            proposal.votes_for += weight
        else:
            proposal.votes_against += weight
        proposal.voters.add(voter)

        self._emit(
            "VoteCast",
            proposal_id=proposal_id,
            voter=voter,
            support=support,
            weight=weight,
        )
        logger.debug(
            "DAO %s: %s voted %s on %d with weight %d",
            self.address, voter, "for" if support else "against", proposal_id, weight,
        )
        return weight

    def has_voted(self, proposal_id: int, identity: str) -> bool:
        return self.get_proposal(proposal_id).has_voted(identity)

    def get_proposal_status(self, proposal_id: int) -> ProposalStatus:
        return resolve_status(
            self._find(proposal_id),
            self.chain.now,
            self.min_votes_to_approve,
            self.min_tokens_to_approve,
        )

    def cancel_proposal(self, caller: str, proposal_id: int):
        """Controller-only. Allowed until the voting window closes."""
        self._only_controller(caller)
        proposal = self.get_proposal(proposal_id)
        if proposal.cancelled:
            raise StateError("Proposal already cancelled")
        if self.chain.now >= proposal.end_time:
            raise StateError("Voting has already ended")

        proposal.cancelled = True
        self._emit("ProposalCancelled", proposal_id=proposal_id)
        logger.info("DAO %s: proposal %d cancelled", self.address, proposal_id)

    def _find(self, proposal_id: int) -> Optional[Proposal]:
        if 0 <= proposal_id < self.proposal_count:
            return self.proposals[proposal_id]
        return None

    # ------------------------------------------------------------------
    # Administration (controller only)
    # ------------------------------------------------------------------

    def update_collectible_contract(self, caller: str, new_contract: str):
        self._only_controller(caller)
        if is_zero_address(new_contract):
            raise ValidationError(INVALID_ADDRESS)
        if new_contract.lower() == self.collectible_contract.lower():
            raise ValidationError(SAME_ADDRESS)

        old = self.collectible_contract
        self.collectible_contract = new_contract
        self._emit("CollectibleContractUpdated", old_value=old, new_value=new_contract)

    def update_min_proposal_creation_units(self, caller: str, value: int):
        self._update_threshold(
            caller, "min_proposal_creation_units", value, "MinProposalCreationUnitsUpdated"
        )

    def update_min_votes_to_approve(self, caller: str, value: int):
        self._update_threshold(caller, "min_votes_to_approve", value, "MinVotesToApproveUpdated")

    def update_min_tokens_to_approve(self, caller: str, value: int):
        self._update_threshold(caller, "min_tokens_to_approve", value, "MinTokensToApproveUpdated")

    def _update_threshold(self, caller: str, attr: str, value: int, event: str):
        self._only_controller(caller)
        _require_positive(value)

        old = getattr(self, attr)
        setattr(self, attr, value)
        self._emit(event, old_value=old, new_value=value)
        logger.info("DAO %s: %s %d -> %d", self.address, attr, old, value)

    def get_config(self) -> dict:
        return {
            "address": self.address,
            "name": self.name,
            "controller": self.controller,
            "collectible_contract": self.collectible_contract,
            "min_proposal_creation_units": self.min_proposal_creation_units,
            "min_votes_to_approve": self.min_votes_to_approve,
            "min_tokens_to_approve": self.min_tokens_to_approve,
            "proposal_count": self.proposal_count,
        }
