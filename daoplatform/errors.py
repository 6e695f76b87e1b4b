"""
Platform Errors
===============
Every rejected call raises one of these. The ``reason`` string is stable
so callers and tests can assert on the cause, not just the failure.
"""

from typing import Optional


class ContractError(Exception):
    """Base class for rejected contract calls."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class ValidationError(ContractError):
    """Bad input: zero address, zero threshold, no-op update, bad window."""


class AuthorizationError(ContractError):
    """Caller is not allowed to perform the operation."""


class UnauthorizedAccount(AuthorizationError):
    """Caller is not the controller of the target contract."""

    def __init__(self, account: str):
        super().__init__(f"Unauthorized account: {account}")
        self.account = account


class EligibilityError(ContractError):
    """Caller not registered, too few collectibles, or fee too low."""


class NotFoundError(ContractError):
    """Referenced proposal, instance, index or user does not exist."""


class StateError(ContractError):
    """Action attempted at the wrong time or repeated."""


class InsufficientFunds(ContractError):
    """Sender's native balance cannot cover the transfer."""

    def __init__(self, address: str, needed: int, available: int):
        super().__init__(
            f"Insufficient funds: {address} has {available}, needs {needed}"
        )
        self.address = address
        self.needed = needed
        self.available = available


class CollaboratorError(ContractError):
    """An external collaborator (HTTP ledger) could not answer."""

    def __init__(self, reason: str, status_code: Optional[int] = None):
        super().__init__(reason)
        self.status_code = status_code
