from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from taskboard.core.errors import ValidationError
from taskboard.models.user import User

log = logging.getLogger(__name__)


class UserStore:
    """Thin adapter over the relational store for user records."""

    def __init__(self, db: Session):
        self.db = db

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.exec(select(User).where(User.email == email)).first()

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.db.get(User, user_id)

    def add(self, user: User) -> User:
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            # don't echo which column collided
            log.info("user insert rejected by store constraints")
            raise ValidationError("User already exists or invalid data")
        self.db.refresh(user)
        return user
