from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Dict, Optional, TypedDict

from jose import JWTError, jwt

from taskboard.core.clock import as_utc, utcnow

# ← python-jose 사용

DEFAULT_ALGORITHM = "HS256"
DEFAULT_LIFETIME = timedelta(hours=72)


class TokenClaims(TypedDict):
    user_id: int
    iat: int
    exp: int


# ---- 공통 ----
def _make_jwt(payload: Dict[str, Any], secret: str, exp: datetime, now: datetime, algorithm: str) -> str:
    to_encode = payload.copy()
    to_encode["iat"] = int(now.timestamp())
    to_encode["exp"] = int(exp.timestamp())
    return jwt.encode(to_encode, secret, algorithm=algorithm)


# ---- Access Token ----
def create_access_token(
    user_id: int,
    secret: str,
    *,
    algorithm: str = DEFAULT_ALGORITHM,
    expires_delta: timedelta = DEFAULT_LIFETIME,
    now: Optional[datetime] = None,
) -> tuple[str, datetime]:
    """Sign ``{user_id, iat, exp}``; returns the token and its expiry instant."""
    issued = as_utc(now) if now is not None else utcnow()
    exp = issued + expires_delta
    token = _make_jwt({"user_id": int(user_id)}, secret, exp, issued, algorithm)
    return token, exp


def decode_access_token(token: str, secret: str, *, algorithm: str = DEFAULT_ALGORITHM) -> TokenClaims:
    """
    Verify signature and expiry and return the claims.
    Raises JWTError on any failure, including a missing/non-integer user_id.
    """
    payload = jwt.decode(token, secret, algorithms=[algorithm], options={"require_exp": True})
    user_id = payload.get("user_id")
    if isinstance(user_id, bool) or not isinstance(user_id, int):
        raise JWTError("Invalid token payload")
    return TokenClaims(user_id=user_id, iat=int(payload.get("iat", 0)), exp=int(payload["exp"]))
