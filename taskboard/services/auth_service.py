from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from jose import JWTError
from sqlmodel import Session

from taskboard.core.config import Settings
from taskboard.core.errors import AuthError, ConfigError, ValidationError
from taskboard.core.security import dummy_hash, hash_password, verify_password
from taskboard.core.tokens import create_access_token, decode_access_token
from taskboard.models.user import User
from taskboard.services.user_store import UserStore

log = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


@dataclass(frozen=True)
class IssuedToken:
    token: str
    expires_at: datetime
    user: User


class AuthService:
    """
    Registration and login.
    - Only bcrypt hashes are stored; the raw password never reaches the store or a log line
    - Sessions are stateless: the signed token is the whole session
    """

    def __init__(
        self,
        secret_key: Optional[str],
        *,
        algorithm: str = "HS256",
        token_lifetime: timedelta = timedelta(hours=72),
        bcrypt_rounds: int = 12,
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.token_lifetime = token_lifetime
        self.bcrypt_rounds = bcrypt_rounds

    @classmethod
    def from_settings(cls, settings: Settings) -> "AuthService":
        return cls(
            settings.jwt_secret_key,
            algorithm=settings.jwt_algorithm,
            token_lifetime=timedelta(hours=settings.access_token_expire_hours),
            bcrypt_rounds=settings.bcrypt_rounds,
        )

    def register(self, db: Session, username: str, email: str, password: str) -> User:
        username = (username or "").strip()
        email = (email or "").strip()
        if not username or not email or not password:
            raise ValidationError("username, email and password are required")

        user = User(
            username=username,
            email=email,
            password_hash=hash_password(password, rounds=self.bcrypt_rounds),
        )
        user = UserStore(db).add(user)
        log.info("user registered user_id=%s", user.id)
        return user

    def login(self, db: Session, email: str, password: str, *, now: Optional[datetime] = None) -> IssuedToken:
        user = UserStore(db).get_by_email((email or "").strip())
        if user is None:
            # burn the same bcrypt work so unknown emails aren't faster
            verify_password(password or "", dummy_hash(self.bcrypt_rounds))
            log.info("login rejected")
            raise AuthError(INVALID_CREDENTIALS)
        if not verify_password(password or "", user.password_hash):
            log.info("login rejected")
            raise AuthError(INVALID_CREDENTIALS)

        token, expires_at = self.issue_token(user.id, now=now)
        log.info("login ok user_id=%s", user.id)
        return IssuedToken(token=token, expires_at=expires_at, user=user)

    def issue_token(self, user_id: int, *, now: Optional[datetime] = None) -> tuple[str, datetime]:
        if not self.secret_key:
            raise ConfigError("Failed to generate token")
        return create_access_token(
            user_id,
            self.secret_key,
            algorithm=self.algorithm,
            expires_delta=self.token_lifetime,
            now=now,
        )

    def authenticate(self, db: Session, token: str) -> User:
        """Resolve a bearer token to its user; any failure is an AuthError."""
        if not self.secret_key:
            raise ConfigError("Token verification is not configured")
        try:
            claims = decode_access_token(token, self.secret_key, algorithm=self.algorithm)
        except JWTError:
            raise AuthError("Invalid or expired token")
        user = UserStore(db).get_by_id(claims["user_id"])
        if user is None:
            raise AuthError("Invalid or expired token")
        return user
