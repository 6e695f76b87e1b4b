"""
DAO Factories
=============
Deploy governance units on behalf of callers.

- DAOFactory: anyone, free
- DAOMembersFactory: registered members with enough collectibles, for a fee

Either way the caller ends up controlling the new unit.
"""

from typing import List, Optional

from ..accounts import is_zero_address
from ..chain import Chain
from ..config import DEFAULT_CREATION_FEE, DEFAULT_MIN_COLLECTIBLES
from ..dao import GovernanceUnit
from ..errors import ValidationError
from .base import GatedFactory, InstanceFactory


class _DAOQueries:
    """DAO-named views over the factory registry."""

    def get_total_daos(self) -> int:
        return self.total_created()

    def get_dao_by_index(self, index: int) -> str:
        return self.instance_by_index(index)

    def get_all_daos(self) -> List[str]:
        return self.all_instances()

    def get_dao_creator(self, dao: str) -> str:
        return self.creator_of(dao)

    def is_dao(self, dao: str) -> bool:
        return self.is_instance(dao)

    def _validate_dao_params(
        self,
        collectible_contract: str,
        min_proposal_creation_units: int,
        min_votes_to_approve: int,
        min_tokens_to_approve: int,
    ):
        if is_zero_address(collectible_contract):
            raise ValidationError(self._reason("Collectible contract address is invalid"))
        if min_proposal_creation_units <= 0:
            raise ValidationError(self._reason(
                "Min collectibles to create proposals must be greater than 0"
            ))
        if min_votes_to_approve <= 0:
            raise ValidationError(self._reason("Min votes to approve must be greater than 0"))
        if min_tokens_to_approve <= 0:
            raise ValidationError(self._reason("Min tokens to approve must be greater than 0"))

    def _spawn(
        self,
        creator: str,
        collectible_contract: str,
        min_proposal_creation_units: int,
        min_votes_to_approve: int,
        min_tokens_to_approve: int,
        name: str = "",
    ) -> GovernanceUnit:
        """Deploy a unit from this factory and hand it to ``creator``."""
        self._require_creator(creator)
        dao = GovernanceUnit(
            self.chain,
            self.address,
            collectible_contract,
            min_proposal_creation_units,
            min_votes_to_approve,
            min_tokens_to_approve,
            name=name,
        )
        dao.transfer_controller(self.address, creator)
        self._record(dao.address, creator)
        return dao


class DAOFactory(_DAOQueries, InstanceFactory):
    """Open factory: any caller may deploy a DAO."""

    NOT_FOUND_REASON = "DAO not valid or not created by this factory"

    def __init__(self, chain: Chain, deployer: str, owner: Optional[str] = None):
        super().__init__(chain, deployer, owner)
        self._deploy(deployer)

    def deploy_dao(
        self,
        creator: str,
        name: str,
        collectible_contract: str,
        min_proposal_creation_units: int,
        min_votes_to_approve: int,
        min_tokens_to_approve: int,
    ) -> str:
        """Deploy a DAO controlled by ``creator``; returns its address."""
        self._validate_dao_params(
            collectible_contract,
            min_proposal_creation_units,
            min_votes_to_approve,
            min_tokens_to_approve,
        )
        dao = self._spawn(
            creator,
            collectible_contract,
            min_proposal_creation_units,
            min_votes_to_approve,
            min_tokens_to_approve,
            name=name,
        )
        self._emit(
            "DAOCreated",
            dao=dao.address,
            creator=creator,
            name=name,
            collectible_contract=collectible_contract,
            min_proposal_creation_units=min_proposal_creation_units,
            min_votes_to_approve=min_votes_to_approve,
            min_tokens_to_approve=min_tokens_to_approve,
        )
        return dao.address


class DAOMembersFactory(_DAOQueries, GatedFactory):
    """Gated factory: registered holders only, creation fee required."""

    REASON_PREFIX = "DAOMembersFactory"
    NOT_FOUND_REASON = "DAO not valid or not created by this factory"

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
        super().__init__(
            chain,
            deployer,
            identity_registry,
            collectible_contract,
            owner=owner,
            creation_fee=creation_fee,
            min_collectibles_required=min_collectibles_required,
        )
        self._deploy(deployer)

    def get_dao_creation_fee(self) -> int:
        return self.get_creation_fee()

    def deploy_dao(
        self,
        creator: str,
        collectible_contract: str,
        min_proposal_creation_units: int,
        min_votes_to_approve: int,
        min_tokens_to_approve: int,
        value: int = 0,
    ) -> str:
        """
        Deploy a DAO for an eligible ``creator`` paying ``value``.

        The whole ``value`` goes to the factory controller.
        """
        self._require_eligible(creator, value)
        self._validate_dao_params(
            collectible_contract,
            min_proposal_creation_units,
            min_votes_to_approve,
            min_tokens_to_approve,
        )
        dao = self._spawn(
            creator,
            collectible_contract,
            min_proposal_creation_units,
            min_votes_to_approve,
            min_tokens_to_approve,
        )
        self._collect_fee(creator, value)
        self._emit(
            "DAOCreated",
            dao=dao.address,
            creator=creator,
            collectible_contract=collectible_contract,
            min_proposal_creation_units=min_proposal_creation_units,
            min_votes_to_approve=min_votes_to_approve,
            min_tokens_to_approve=min_tokens_to_approve,
            fee_paid=value,
        )
        return dao.address
