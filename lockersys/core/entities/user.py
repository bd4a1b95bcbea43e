from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone


@dataclass(slots=True)
class User:
    id: str
    name: str
    email: str
    password_hash: str
    role: str = "admin"
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(slots=True)
class SessionToken:
    """
    Issued bearer token. Only the digest of the token is ever persisted.
    """
    token_hash: str
    user_id: str
    expires_at: datetime
    revoked_at: datetime | None = None
    created_at: datetime | None = None

    def is_valid(self, now: datetime | None = None) -> bool:
        now = now or datetime.now(timezone.utc)
        expires_at = self.expires_at
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        return self.revoked_at is None and expires_at > now

    def revoke(self, now: datetime | None = None) -> None:
        if self.revoked_at is None:
            self.revoked_at = now or datetime.now(timezone.utc)
