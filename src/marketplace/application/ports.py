"""Interfaces the application layer needs from the outside world.

Credentials are verified and issued by infrastructure; use cases only
see these abstractions.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from marketplace.domain.model.user import Role, User


@dataclass(frozen=True)
class Identity:
    """What a valid bearer credential says about its holder."""

    user_id: str
    role: Role


class PasswordHasher(ABC):

    @abstractmethod
    def hash(self, password: str) -> str:
        """Return a salted hash of *password*."""

    @abstractmethod
    def verify(self, password: str, password_hash: str) -> bool:
        """Return True if *password* matches *password_hash*."""


class TokenService(ABC):

    @abstractmethod
    def issue(self, user: User) -> str:
        """Return a signed bearer credential for *user*."""

    @abstractmethod
    def authenticate(self, credential: str | None) -> Identity:
        """Resolve a credential to an Identity.

        Checks signature and expiry only.  Raises AuthenticationError.
        """
