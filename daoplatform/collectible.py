"""
Collectible Ledgers
===================
Source of voting power and eligibility: "how many collectibles does this
identity hold".

Two implementations:
- SimpleCollectible: mintable collection living on the runtime
- HttpCollectibleLedger: read-only view of holdings served by a
  Stacks-API style HTTP endpoint
"""

import logging
from typing import Dict, List, Optional

import httpx

from .chain import Chain
from .config import API_URLS, DEFAULT_COLLECTIBLE_MINT_PRICE
from .errors import CollaboratorError, NotFoundError, ValidationError
from .ownable import Ownable, Contract

logger = logging.getLogger(__name__)


class SimpleCollectible(Ownable):
    """
    Collection where anyone can mint at a fixed price.

    Token ids start at 1. Every token shares the collection's base URI.
    """

    def __init__(
        self,
        chain: Chain,
        deployer: str,
        name: str,
        symbol: str,
        base_uri: str = "",
        mint_price: int = DEFAULT_COLLECTIBLE_MINT_PRICE,
    ):
        super().__init__(chain, deployer)
        if mint_price <= 0:
            raise ValidationError("Mint price must be greater than 0")
        self.name = name
        self.symbol = symbol
        self.base_uri = base_uri
        self.mint_price = mint_price
        self.next_token_id = 1
        self.owners: Dict[int, str] = {}
        self.balances: Dict[str, int] = {}
        self.holders: List[str] = []  # One entry per minted token
        self._deploy(deployer)

    @property
    def total_supply(self) -> int:
        return self.next_token_id - 1

    def balance_of(self, identity: str) -> int:
        return self.balances.get(identity, 0)

    def owner_of(self, token_id: int) -> str:
        if not self.exists(token_id):
            raise NotFoundError(f"Nonexistent token: {token_id}")
        return self.owners[token_id]

    def exists(self, token_id: int) -> bool:
        return token_id in self.owners

    def token_uri(self, token_id: int) -> str:
        if not self.exists(token_id):
            raise NotFoundError(f"Nonexistent token: {token_id}")
        return self.base_uri

    def mint(self, caller: str, value: int = 0) -> int:
        """Mint one token to ``caller``; ``value`` must equal the mint price."""
        if value != self.mint_price:
            raise ValidationError("Must send exactly the mint price")
        self.chain.transfer(caller, self.address, value)
        return self._mint_to(caller)

    def mint_batch(self, caller: str, quantity: int, value: int = 0) -> List[int]:
        if quantity <= 0:
            raise ValidationError("Quantity must be greater than 0")
        if value != self.mint_price * quantity:
            raise ValidationError("Must send the correct price for the quantity")
        self.chain.transfer(caller, self.address, value)
        return [self._mint_to(caller) for _ in range(quantity)]

    def set_base_uri(self, caller: str, base_uri: str):
        self._only_controller(caller)
        if not base_uri:
            raise ValidationError("Base URI cannot be empty")
        self.base_uri = base_uri

    def _mint_to(self, recipient: str) -> int:
        token_id = self.next_token_id
        self.next_token_id += 1
        self.owners[token_id] = recipient
        self.balances[recipient] = self.balance_of(recipient) + 1
        self.holders.append(recipient)
        self._emit("TokenMinted", to=recipient, token_id=token_id)
        return token_id


class HttpCollectibleLedger(Contract):
    """
    Holdings of one NFT asset, read from a Stacks API.

    Registered on the runtime like any contract so governance units can
    point at it. Holdings are fetched on every call; nothing is cached.
    """

    def __init__(
        self,
        chain: Chain,
        deployer: str,
        asset_identifier: str,
        api_url: str = API_URLS["mainnet"],
        client: Optional[httpx.Client] = None,
        timeout: float = 30,
    ):
        super().__init__(chain)
        if not asset_identifier:
            raise ValidationError("Asset identifier cannot be empty")
        self.asset_identifier = asset_identifier
        self.api_url = api_url.rstrip("/")
        self.client = client or httpx.Client(timeout=timeout)
        self._deploy(deployer)

    def balance_of(self, identity: str) -> int:
        url = f"{self.api_url}/extended/v1/address/{identity}/balances"
        try:
            resp = self.client.get(url)
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.warning("Holdings lookup for %s failed: %s", identity, e)
            raise CollaboratorError(
                f"Holdings lookup failed with status {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            logger.warning("Holdings lookup for %s failed: %s", identity, e)
            raise CollaboratorError(f"Holdings lookup failed: {e}") from e

        try:
            holdings = resp.json().get("non_fungible_tokens") or {}
            entry = holdings.get(self.asset_identifier)
            if not entry:
                return 0
            return int(entry.get("count", 0))
        except (ValueError, TypeError, AttributeError) as e:
            logger.warning("Holdings lookup for %s returned a malformed body: %s", identity, e)
            raise CollaboratorError("Holdings lookup returned a malformed response") from e

    def close(self):
        self.client.close()
