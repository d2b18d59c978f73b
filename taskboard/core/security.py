from __future__ import annotations

from functools import lru_cache

import bcrypt

from taskboard.core.errors import ConfigError, ValidationError

# bcrypt only looks at the first 72 bytes of its input
BCRYPT_MAX_BYTES = 72


def hash_password(password: str, rounds: int = 12) -> str:
    raw = password.encode("utf-8")
    if len(raw) > BCRYPT_MAX_BYTES:
        raise ValidationError("Password is too long")
    try:
        hashed = bcrypt.hashpw(raw, bcrypt.gensalt(rounds=rounds))
    except ValueError as exc:
        raise ConfigError("Failed to hash password") from exc
    return hashed.decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time comparison via bcrypt. Malformed hashes simply fail."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False


@lru_cache(maxsize=None)
def dummy_hash(rounds: int = 12) -> str:
    """A throwaway hash at the given cost, built once per process."""
    return hash_password("taskboard-dummy-password", rounds=rounds)
