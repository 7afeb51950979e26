"""
Authentication State

The three-state sign-in signal the sync coordinator consumes. The core
never computes it; the caller resolves it (e.g. from ``/api/auth/me``).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class AuthStatus(Enum):
    UNKNOWN = "unknown"
    SIGNED_OUT = "signed_out"
    SIGNED_IN = "signed_in"


@dataclass(frozen=True)
class AuthState:
    status: AuthStatus
    user_id: Optional[str] = None

    def __post_init__(self):
        if (self.status == AuthStatus.SIGNED_IN) != bool(self.user_id):
            raise ValueError("A user id is required exactly when signed in")

    @classmethod
    def unknown(cls) -> 'AuthState':
        return cls(AuthStatus.UNKNOWN)

    @classmethod
    def signed_out(cls) -> 'AuthState':
        return cls(AuthStatus.SIGNED_OUT)

    @classmethod
    def signed_in(cls, user_id: str) -> 'AuthState':
        return cls(AuthStatus.SIGNED_IN, user_id)

    @property
    def is_known(self) -> bool:
        return self.status != AuthStatus.UNKNOWN

    @property
    def is_signed_in(self) -> bool:
        return self.status == AuthStatus.SIGNED_IN
