"""Bearer credential verification for the transfer endpoint."""

from abc import ABC, abstractmethod
from typing import Mapping, Optional


class IdentityVerifier(ABC):
    """Resolves a bearer credential to an owner identifier."""

    @abstractmethod
    def verify(self, token: str) -> Optional[str]:
        """Return the owner for ``token``, or None if it is not valid."""
        pass


class StaticTokenVerifier(IdentityVerifier):
    """Verifier backed by a fixed token -> owner mapping."""

    def __init__(self, tokens: Mapping[str, str]):
        self.tokens = dict(tokens)

    def verify(self, token: str) -> Optional[str]:
        return self.tokens.get(token)


def bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Extract the token from an ``Authorization: Bearer <token>`` header."""
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()
