"""
Factory Registry & Eligibility
==============================
Bookkeeping shared by every factory: what it created, who created it,
and whether a caller may create.
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple

from ..chain import Chain
from ..errors import NotFoundError

INDEX_OUT_OF_RANGE = "Index out of range"


@dataclass(frozen=True)
class EligibilitySnapshot:
    """Recomputed on every check; never stored."""
    is_registered: bool
    collectible_balance: int
    meets_requirement: bool

    def as_tuple(self) -> Tuple[bool, int, bool]:
        return (self.is_registered, self.collectible_balance, self.meets_requirement)


def check_eligibility(
    chain: Chain,
    identity_registry: str,
    collectible_contract: str,
    identity: str,
    min_collectibles: int,
) -> EligibilitySnapshot:
    """Ask both collaborators about ``identity`` right now."""
    registered = chain.contract_at(identity_registry).is_registered(identity)
    balance = chain.contract_at(collectible_contract).balance_of(identity)
    return EligibilitySnapshot(
        is_registered=registered,
        collectible_balance=balance,
        meets_requirement=registered and balance >= min_collectibles,
    )


class InstanceRegistry:
    """
    Append-only list of created instances with write-once creator and
    validity maps. Owned by exactly one factory.
    """

    def __init__(self, not_found_reason: str):
        self.not_found_reason = not_found_reason
        self.instances: List[str] = []
        self.creators: Dict[str, str] = {}
        self.valid: Dict[str, bool] = {}

    def __len__(self) -> int:
        return len(self.instances)

    def record(self, instance: str, creator: str):
        if instance in self.valid:
            raise ValueError(f"Instance {instance} already recorded")
        self.instances.append(instance)
        self.creators[instance] = creator
        self.valid[instance] = True

    def at(self, index: int) -> str:
        if not 0 <= index < len(self.instances):
            raise NotFoundError(INDEX_OUT_OF_RANGE)
        return self.instances[index]

    def all(self) -> List[str]:
        return list(self.instances)

    def creator_of(self, instance: str) -> str:
        if not self.contains(instance):
            raise NotFoundError(self.not_found_reason)
        return self.creators[instance]

    def contains(self, instance: str) -> bool:
        return self.valid.get(instance, False)
