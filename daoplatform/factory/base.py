"""
Instance Factory Base
=====================
What all four factories share: a controller, a registry of created
instances and its query surface. The gated variant adds registration,
collectible and fee checks.
"""

import logging
from typing import List, Optional, Tuple

from ..accounts import is_zero_address
from ..chain import Chain
from ..config import DEFAULT_CREATION_FEE, DEFAULT_MIN_COLLECTIBLES
from ..errors import EligibilityError, ValidationError
from ..ownable import Ownable
from .registry import EligibilitySnapshot, InstanceRegistry, check_eligibility

logger = logging.getLogger(__name__)


class InstanceFactory(Ownable):
    """
    Creates instances and remembers them.

    Subclasses set ``REASON_PREFIX`` (prepended to their rejection
    reasons) and ``NOT_FOUND_REASON`` (unknown instance lookups).
    """

    TRANSFER_EVENT = "FactoryOwnershipTransferred"
    REASON_PREFIX = ""
    NOT_FOUND_REASON = "Instance not created by this factory"

    def __init__(self, chain: Chain, deployer: str, owner: Optional[str] = None):
        super().__init__(chain, owner or deployer)
        self.registry = InstanceRegistry(self._reason(self.NOT_FOUND_REASON))

    def _reason(self, message: str) -> str:
        if self.REASON_PREFIX:
            return f"{self.REASON_PREFIX}: {message}"
        return message

    def _require_creator(self, creator: str):
        if is_zero_address(creator):
            raise ValidationError(self._reason("Creator cannot be the zero address"))

    def _record(self, instance: str, creator: str):
        self.registry.record(instance, creator)
        logger.info(
            "%s %s: created %s for %s (total %d)",
            type(self).__name__, self.address, instance, creator, len(self.registry),
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def total_created(self) -> int:
        return len(self.registry)

    def instance_by_index(self, index: int) -> str:
        return self.registry.at(index)

    def all_instances(self) -> List[str]:
        return self.registry.all()

    def creator_of(self, instance: str) -> str:
        return self.registry.creator_of(instance)

    def is_instance(self, instance: str) -> bool:
        return self.registry.contains(instance)

    def get_factory_stats(self) -> Tuple[int, str]:
        """(instances created, current controller)."""
        return len(self.registry), self.controller

    # ------------------------------------------------------------------
    # Administration
    # ------------------------------------------------------------------

    def transfer_factory_ownership(self, caller: str, new_owner: str):
        self.transfer_controller(caller, new_owner)


class GatedFactory(InstanceFactory):
    """
    Factory that only serves registered identities holding enough
    collectibles, for a fee paid to the factory's controller.

    Overpayment is accepted and kept.
    """

    def __init__(
        self,
        chain: Chain,
        deployer: str,
        identity_registry: str,
        collectible_contract: str,
        owner: Optional[str] = None,
        creation_fee: int = DEFAULT_CREATION_FEE,
        min_collectibles_required: int = DEFAULT_MIN_COLLECTIBLES,
    ):
        super().__init__(chain, deployer, owner)
        if is_zero_address(identity_registry):
            raise ValidationError(self._reason("Identity registry address cannot be zero"))
        if is_zero_address(collectible_contract):
            raise ValidationError(self._reason("Collectible contract address cannot be zero"))
        if creation_fee < 0:
            raise ValidationError(self._reason("Fee cannot be negative"))
        if min_collectibles_required <= 0:
            raise ValidationError(self._reason("Min collectibles must be greater than 0"))

        self.identity_registry = identity_registry
        self.collectible_contract = collectible_contract
        self.creation_fee = creation_fee
        self.min_collectibles_required = min_collectibles_required

    def check_user_requirements(self, identity: str) -> EligibilitySnapshot:
        return check_eligibility(
            self.chain,
            self.identity_registry,
            self.collectible_contract,
            identity,
            self.min_collectibles_required,
        )

    def _require_eligible(self, creator: str, value: int):
        """Raise unless ``creator`` may create now, paying ``value``."""
        snapshot = self.check_user_requirements(creator)
        if not snapshot.is_registered:
            raise EligibilityError(self._reason("User must be registered"))
        if snapshot.collectible_balance < self.min_collectibles_required:
            raise EligibilityError(self._reason(
                f"User must have at least {self.min_collectibles_required} collectibles"
            ))
        if value < self.creation_fee or value < 0:
            raise EligibilityError(self._reason("Insufficient fee paid"))
        self.chain.require_funds(creator, value)

    def _collect_fee(self, creator: str, value: int):
        if value:
            self.chain.transfer(creator, self.controller, value)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def get_creation_fee(self) -> int:
        return self.creation_fee

    def get_min_collectibles_required(self) -> int:
        return self.min_collectibles_required

    def get_identity_registry_address(self) -> str:
        return self.identity_registry

    def get_collectible_contract_address(self) -> str:
        return self.collectible_contract

    def set_creation_fee(self, caller: str, new_fee: int):
        """Only affects future creations."""
        self._only_controller(caller)
        if new_fee < 0:
            raise ValidationError(self._reason("Fee cannot be negative"))
        if new_fee == self.creation_fee:
            raise ValidationError(self._reason("Fee is already set to this value"))

        old = self.creation_fee
        self.creation_fee = new_fee
        self._emit("FeeUpdated", old_fee=old, new_fee=new_fee)
        logger.info("%s %s: fee %d -> %d", type(self).__name__, self.address, old, new_fee)

    def set_min_collectibles_required(self, caller: str, new_min: int):
        self._only_controller(caller)
        if new_min <= 0:
            raise ValidationError(self._reason("Min collectibles must be greater than 0"))
        if new_min == self.min_collectibles_required:
            raise ValidationError(self._reason("Min collectibles is already set to this value"))

        old = self.min_collectibles_required
        self.min_collectibles_required = new_min
        self._emit("MinCollectiblesRequiredUpdated", old_value=old, new_value=new_min)
        logger.info(
            "%s %s: min collectibles %d -> %d",
            type(self).__name__, self.address, old, new_min,
        )
