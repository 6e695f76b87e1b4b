"""
Token Factories
===============
Create fungible tokens whose whole supply belongs to the caller.

- TokenFactory: anyone, free
- TokenMembersFactory: registered members with enough collectibles, for
  a fee; keeps per-creator listings since one member may own many tokens
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from ..accounts import is_zero_address
from ..chain import Chain
from ..config import DEFAULT_CREATION_FEE, DEFAULT_MIN_COLLECTIBLES
from ..errors import NotFoundError, ValidationError
from ..token import FungibleToken
from .base import GatedFactory, InstanceFactory
from .registry import INDEX_OUT_OF_RANGE


@dataclass
class TokenInfo:
    """Registry record for a created token."""
    token_address: str
    creator: str
    name: str
    symbol: str
    initial_supply: int
    created_at: int

    def to_dict(self) -> dict:
        return {
            "token_address": self.token_address,
            "creator": self.creator,
            "name": self.name,
            "symbol": self.symbol,
            "initial_supply": self.initial_supply,
            "created_at": self.created_at,
        }


class _TokenCreation:
    """Token parameter checks and deployment shared by both variants."""

    NOT_FOUND_REASON = "Token not created by this factory"

    def _validate_token_params(self, name: str, symbol: str, initial_supply: int):
        if not name:
            raise ValidationError(self._reason("Name cannot be empty"))
        if not symbol:
            raise ValidationError(self._reason("Symbol cannot be empty"))
        if initial_supply <= 0:
            raise ValidationError(self._reason("Initial supply must be greater than 0"))

    def _spawn(self, creator: str, name: str, symbol: str, initial_supply: int) -> FungibleToken:
        self._require_creator(creator)
        token = FungibleToken(
            self.chain,
            self.address,
            name,
            symbol,
            initial_supply,
            owner=creator,
        )
        self._record(token.address, creator)
        return token

    def get_total_tokens_created(self) -> int:
        return self.total_created()

    def get_token_creator(self, token: str) -> str:
        return self.creator_of(token)

    def is_token_from_factory(self, token: str) -> bool:
        return self.is_instance(token)


class TokenFactory(_TokenCreation, InstanceFactory):
    """Open factory: any caller may create a token."""

    def __init__(self, chain: Chain, deployer: str, owner: Optional[str] = None):
        super().__init__(chain, deployer, owner)
        self._deploy(deployer)

    @property
    def total_tokens_created(self) -> int:
        return self.total_created()

    def create_token(self, creator: str, name: str, symbol: str, initial_supply: int) -> str:
        """Create a token owned by ``creator``; returns its address."""
        self._validate_token_params(name, symbol, initial_supply)
        token = self._spawn(creator, name, symbol, initial_supply)
        self._emit(
            "TokenCreated",
            token=token.address,
            creator=creator,
            name=name,
            symbol=symbol,
            initial_supply=initial_supply,
        )
        return token.address

    def get_all_tokens(self) -> List[str]:
        return self.all_instances()

    def get_token_by_index(self, index: int) -> str:
        return self.instance_by_index(index)


class TokenMembersFactory(_TokenCreation, GatedFactory):
    """Gated factory with full token records and per-creator lookups."""

    REASON_PREFIX = "TokenMembersFactory"

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
        self.token_info: Dict[str, TokenInfo] = {}
        self.user_tokens: Dict[str, List[str]] = {}
        self._deploy(deployer)

    def get_token_creation_fee(self) -> int:
        return self.get_creation_fee()

    def create_token(
        self,
        creator: str,
        name: str,
        symbol: str,
        initial_supply: int,
        value: int = 0,
    ) -> str:
        """
        Create a token for an eligible ``creator`` paying ``value``.

        The whole ``value`` goes to the factory controller.
        """
        self._require_eligible(creator, value)
        self._validate_token_params(name, symbol, initial_supply)

        token = self._spawn(creator, name, symbol, initial_supply)
        self.token_info[token.address] = TokenInfo(
            token_address=token.address,
            creator=creator,
            name=name,
            symbol=symbol,
            initial_supply=initial_supply,
            created_at=self.chain.now,
        )
        self.user_tokens.setdefault(creator, []).append(token.address)
        self._collect_fee(creator, value)

        self._emit(
            "TokenCreated",
            token=token.address,
            creator=creator,
            name=name,
            symbol=symbol,
            initial_supply=initial_supply,
            fee_paid=value,
        )
        return token.address

    def get_all_tokens(self) -> List[TokenInfo]:
        return [self.token_info[a] for a in self.all_instances()]

    def get_token_by_index(self, index: int) -> TokenInfo:
        return self.token_info[self.instance_by_index(index)]

    def get_user_tokens(self, creator: str) -> List[TokenInfo]:
        return [self.token_info[a] for a in self.user_tokens.get(creator, [])]

    def get_user_token_count(self, creator: str) -> int:
        return len(self.user_tokens.get(creator, []))

    def get_user_token_by_index(self, creator: str, index: int) -> TokenInfo:
        tokens = self.user_tokens.get(creator, [])
        if not 0 <= index < len(tokens):
            raise NotFoundError(INDEX_OUT_OF_RANGE)
        return self.token_info[tokens[index]]

    def get_token_info_by_address(self, token: str) -> TokenInfo:
        if is_zero_address(token):
            raise ValidationError(self._reason("Token address cannot be zero"))
        if not self.is_instance(token):
            raise NotFoundError(self._reason(self.NOT_FOUND_REASON))
        return self.token_info[token]
