"""
Contract Base & Controller Capability
=====================================
Every contract lives at an address on a :class:`~daoplatform.chain.Chain`
and may carry a single transferable controller (the "owner").
"""

import logging
from typing import Optional

from .accounts import is_zero_address
from .chain import Chain, Event
from .errors import UnauthorizedAccount, ValidationError

logger = logging.getLogger(__name__)

ZERO_CONTROLLER = "New controller cannot be the zero address"
SAME_CONTROLLER = "New controller must differ from the current controller"


class Contract:
    """Something deployed on the chain."""

    def __init__(self, chain: Chain):
        self.chain = chain
        self.address: Optional[str] = None

    def _deploy(self, deployer: str) -> str:
        """Register on the chain. Call last in ``__init__``, after validation."""
        self.address = self.chain.deploy(deployer, self)
        return self.address

    def _emit(self, name: str, /, **args) -> Event:
        return self.chain.emit(self.address, name, **args)


class Ownable(Contract):
    """
    Contract with one privileged identity.

    Subclasses guard admin operations with ``self._only_controller(caller)``.
    """

    TRANSFER_EVENT = "ControllerTransferred"

    def __init__(self, chain: Chain, controller: str):
        super().__init__(chain)
        if is_zero_address(controller):
            raise ValidationError("Controller cannot be the zero address")
        self.controller = controller

    @property
    def owner(self) -> str:
        return self.controller

    def _only_controller(self, caller: str):
        if caller != self.controller:
            raise UnauthorizedAccount(caller)

    def transfer_controller(self, caller: str, new_controller: str):
        self._only_controller(caller)
        if is_zero_address(new_controller):
            raise ValidationError(ZERO_CONTROLLER)
        if new_controller == self.controller:
            raise ValidationError(SAME_CONTROLLER)

        previous = self.controller
        self.controller = new_controller
        self._emit(
            self.TRANSFER_EVENT,
            previous_controller=previous,
            new_controller=new_controller,
        )
        logger.info(
            "%s %s: controller %s -> %s",
            type(self).__name__, self.address, previous, new_controller,
        )
