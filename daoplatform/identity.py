"""
Identity Registry
=================
Tracks which identities completed profile registration. Factories only
ask ``is_registered``; the profile fields are display data.
"""

import logging
from dataclasses import dataclass, asdict
from typing import Dict, List

from .chain import Chain
from .errors import NotFoundError, StateError
from .ownable import Contract

logger = logging.getLogger(__name__)


@dataclass
class UserProfile:
    """Registered user's profile."""
    username: str
    email: str = ""
    twitter_link: str = ""
    github_link: str = ""
    telegram_link: str = ""
    avatar_link: str = ""
    cover_image_link: str = ""
    join_timestamp: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


class IdentityRegistry(Contract):
    """
    Self-service user registry: each identity registers, updates and
    removes its own profile.
    """

    def __init__(self, chain: Chain, deployer: str):
        super().__init__(chain)
        self.profiles: Dict[str, UserProfile] = {}
        self.user_addresses: List[str] = []
        self._deploy(deployer)

    def register_user(
        self,
        caller: str,
        username: str,
        email: str = "",
        twitter_link: str = "",
        github_link: str = "",
        telegram_link: str = "",
        avatar_link: str = "",
        cover_image_link: str = "",
    ) -> UserProfile:
        if self.is_registered(caller):
            raise StateError(f"User already exists: {caller}")

        # A fresh record every time, so nothing survives from a removed profile
        profile = UserProfile(
            username=username,
            email=email,
            twitter_link=twitter_link,
            github_link=github_link,
            telegram_link=telegram_link,
            avatar_link=avatar_link,
            cover_image_link=cover_image_link,
            join_timestamp=self.chain.now,
        )
        self.profiles[caller] = profile
        self.user_addresses.append(caller)
        self._emit("UserRegistered", user=caller)
        logger.info("Registered user %s (%s)", caller, username)
        return profile

    def update_user_info(
        self,
        caller: str,
        email: str,
        twitter_link: str,
        github_link: str,
        telegram_link: str,
        avatar_link: str,
        cover_image_link: str,
    ) -> UserProfile:
        """Replace the editable fields; username and join time are kept."""
        profile = self.get_user_info(caller)
        profile.email = email
        profile.twitter_link = twitter_link
        profile.github_link = github_link
        profile.telegram_link = telegram_link
        profile.avatar_link = avatar_link
        profile.cover_image_link = cover_image_link
        self._emit("UserInfoUpdated", user=caller)
        return profile

    def remove_user(self, caller: str):
        if not self.is_registered(caller):
            raise NotFoundError(f"User not registered: {caller}")

        del self.profiles[caller]
        # Swap-and-pop; order of the remaining users is not preserved
        idx = self.user_addresses.index(caller)
        last = self.user_addresses.pop()
        if idx < len(self.user_addresses):
            self.user_addresses[idx] = last

        self._emit("UserRemoved", user=caller)
        logger.info("Removed user %s", caller)

    def is_registered(self, identity: str) -> bool:
        return identity in self.profiles

    def get_user_info(self, identity: str) -> UserProfile:
        profile = self.profiles.get(identity)
        if profile is None:
            raise NotFoundError(f"User not registered: {identity}")
        return profile

    def get_all_users(self) -> List[str]:
        return list(self.user_addresses)

    def get_total_members(self) -> int:
        return len(self.user_addresses)
