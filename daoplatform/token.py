"""
Fungible Token
==============
Minimal balance ledger created by the token factories. The whole supply
is minted once, to the owner, at construction.
"""

from typing import Dict

from .accounts import is_zero_address
from .chain import Chain
from .errors import InsufficientFunds, ValidationError
from .ownable import Ownable

DECIMALS = 18


class FungibleToken(Ownable):
    """Mint-once token with plain transfers."""

    def __init__(
        self,
        chain: Chain,
        deployer: str,
        name: str,
        symbol: str,
        initial_supply: int,
        owner: str,
    ):
        super().__init__(chain, owner)
        self.name = name
        self.symbol = symbol
        self.decimals = DECIMALS
        self.total_supply = initial_supply
        self.balances: Dict[str, int] = {owner: initial_supply}
        self._deploy(deployer)
        self._emit("Transfer", sender=None, recipient=owner, amount=initial_supply)

    def balance_of(self, identity: str) -> int:
        return self.balances.get(identity, 0)

    def transfer(self, caller: str, recipient: str, amount: int) -> bool:
        if is_zero_address(recipient):
            raise ValidationError("Cannot transfer to the zero address")
        if amount < 0:
            raise ValidationError("Amount cannot be negative")
        available = self.balance_of(caller)
        if amount > available:
            raise InsufficientFunds(caller, amount, available)

        self.balances[caller] = available - amount
        self.balances[recipient] = self.balance_of(recipient) + amount
        self._emit("Transfer", sender=caller, recipient=recipient, amount=amount)
        return True
