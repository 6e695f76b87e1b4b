"""
DAO Types
=========
Data structures for governance units.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Set


class ProposalStatus(Enum):
    """Resolved status of a proposal. Never stored, always computed."""
    NOT_FOUND = "not_found"    # Id beyond proposal count
    PENDING = "pending"        # Voting has not started
    ACTIVE = "active"          # Voting window open
    APPROVED = "approved"      # Closed, all three thresholds met
    REJECTED = "rejected"      # Closed, at least one threshold missed
    CANCELLED = "cancelled"    # Cancelled by the controller


@dataclass
class Proposal:
    """An advisory proposal inside a governance unit."""
    id: int
    proposer: str                # Identity address
    username: str                # Display name chosen by the proposer
    description: str
    link: str
    start_time: int
    end_time: int
    votes_for: int = 0
    votes_against: int = 0
    cancelled: bool = False
    voters: Set[str] = field(default_factory=set)

    @property
    def voter_count(self) -> int:
        return len(self.voters)

    @property
    def total_votes(self) -> int:
        return self.votes_for + self.votes_against

    def has_voted(self, identity: str) -> bool:
        return identity in self.voters

    def is_open(self, now: int) -> bool:
        return self.start_time <= now < self.end_time

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "proposer": self.proposer,
            "username": self.username,
            "description": self.description,
            "link": self.link,
            "votes_for": self.votes_for,
            "votes_against": self.votes_against,
            "voter_count": self.voter_count,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "cancelled": self.cancelled,
        }
