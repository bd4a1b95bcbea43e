from __future__ import annotations

import hashlib
import secrets

import bcrypt

BCRYPT_ROUNDS = 10


class BcryptPasswordHasher:
    def __init__(self, rounds: int = BCRYPT_ROUNDS) -> None:
        self._rounds = rounds

    def hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except ValueError:
            # malformed stored hash
            return False


class Sha256TokenCodec:
    """
    Tokens are 32 random bytes (64 hex chars); only their SHA-256 digest is stored.
    """

    def new_token(self) -> str:
        return secrets.token_hex(32)

    def digest(self, token: str) -> str:
        return hashlib.sha256(token.encode("utf-8")).hexdigest()
