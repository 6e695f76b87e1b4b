"""
Platform Runtime
================
The execution environment every contract runs in.

Holds the clock, the directory of deployed contracts, native-coin
balances and the event log. Calls are applied one at a time; each
contract validates before it mutates, so a rejected call leaves no
trace here.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .accounts import (
    Account,
    create_account,
    derive_contract_address,
    is_zero_address,
)
from .errors import InsufficientFunds, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


@dataclass
class Event:
    """A log entry emitted by a contract."""
    contract: str                # Emitting contract address
    name: str                    # e.g. "ProposalCreated"
    args: Dict[str, Any]
    timestamp: int
    index: int                   # Position in the chain-wide log


@dataclass
class Chain:
    """
    Single-threaded contract runtime.

    Usage:
        chain = Chain()
        deployer, alice = chain.create_accounts(2, balance=10**18)
        nft = SimpleCollectible(chain, deployer.address, "Test", "TST")
    """

    timestamp: int = field(default_factory=lambda: int(time.time()))
    accounts: Dict[str, Account] = field(default_factory=dict)
    contracts: Dict[str, Any] = field(default_factory=dict)
    balances: Dict[str, int] = field(default_factory=dict)
    nonces: Dict[str, int] = field(default_factory=dict)
    log: List[Event] = field(default_factory=list)

    # ------------------------------------------------------------------
    # Clock
    # ------------------------------------------------------------------

    @property
    def now(self) -> int:
        return self.timestamp

    def advance(self, seconds: int) -> int:
        """Move the clock forward; returns the new time."""
        if seconds < 0:
            raise ValidationError("Time cannot move backwards")
        self.timestamp += seconds
        return self.timestamp

    def set_time(self, timestamp: int) -> int:
        if timestamp < self.timestamp:
            raise ValidationError("Time cannot move backwards")
        self.timestamp = timestamp
        return self.timestamp

    # ------------------------------------------------------------------
    # Accounts and native balances
    # ------------------------------------------------------------------

    def create_account(self, balance: int = 0) -> Account:
        account = create_account()
        self.accounts[account.address] = account
        if balance:
            self.fund(account.address, balance)
        return account

    def create_accounts(self, count: int, balance: int = 0) -> List[Account]:
        return [self.create_account(balance) for _ in range(count)]

    def fund(self, address: str, amount: int):
        """Credit native coin out of thin air (test faucet)."""
        if amount < 0:
            raise ValidationError("Amount cannot be negative")
        self.balances[address] = self.balances.get(address, 0) + amount

    def balance_of(self, address: str) -> int:
        return self.balances.get(address, 0)

    def require_funds(self, address: str, amount: int):
        """Raise unless ``address`` can pay ``amount``."""
        available = self.balance_of(address)
        if amount > available:
            raise InsufficientFunds(address, amount, available)

    def transfer(self, sender: str, recipient: str, amount: int):
        """Move native coin between addresses."""
        if amount < 0:
            raise ValidationError("Amount cannot be negative")
        if is_zero_address(recipient):
            raise ValidationError("Cannot transfer to the zero address")
        self.require_funds(sender, amount)
        self.balances[sender] = self.balance_of(sender) - amount
        self.balances[recipient] = self.balance_of(recipient) + amount

    # ------------------------------------------------------------------
    # Contract directory
    # ------------------------------------------------------------------

    def next_address(self, deployer: str) -> str:
        """Address the next deployment by ``deployer`` will receive."""
        return derive_contract_address(deployer, self.nonces.get(deployer, 0))

    def deploy(self, deployer: str, contract: Any) -> str:
        """Register ``contract`` and return its new address."""
        address = self.next_address(deployer)
        self.nonces[deployer] = self.nonces.get(deployer, 0) + 1
        self.contracts[address] = contract
        logger.debug("Deployed %s at %s (by %s)", type(contract).__name__, address, deployer)
        return address

    def contract_at(self, address: str) -> Any:
        contract = self.contracts.get(address)
        if contract is None:
            raise NotFoundError(f"No contract at address {address}")
        return contract

    def is_contract(self, address: str) -> bool:
        return address in self.contracts

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def emit(self, contract: str, name: str, /, **args) -> Event:
        """Append an event; payload keys may reuse ``contract`` and ``name``."""
        event = Event(
            contract=contract,
            name=name,
            args=args,
            timestamp=self.timestamp,
            index=len(self.log),
        )
        self.log.append(event)
        logger.debug("Event %s from %s: %s", name, contract, args)
        return event

    def events(
        self,
        name: Optional[str] = None,
        contract: Optional[str] = None,
    ) -> List[Event]:
        """Filter the event log by name and/or emitting contract."""
        return [
            e for e in self.log
            if (name is None or e.name == name)
            and (contract is None or e.contract == contract)
        ]

    def last_event(self, name: str, contract: Optional[str] = None) -> Optional[Event]:
        matches = self.events(name, contract)
        return matches[-1] if matches else None
