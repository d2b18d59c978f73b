from __future__ import annotations

import logging
from typing import List

from sqlalchemy import delete, update
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from taskboard.core.errors import NotFoundError, ValidationError
from taskboard.models.category import Category
from taskboard.models.task import Task

log = logging.getLogger(__name__)

DEFAULT_CATEGORIES = (
    ("Work", "blue"),
    ("Personal", "emerald"),
    ("Urgent", "red"),
    ("Study", "amber"),
)


def list_categories(db: Session, user_id: int) -> List[Category]:
    stmt = select(Category).where(Category.user_id == user_id).order_by(Category.id)
    return list(db.exec(stmt).all())


def ensure_categories(db: Session, user_id: int) -> List[Category]:
    """
    Return the user's categories, seeding the default set on first use.
    Two racing requests may both try to seed; the (user_id, name) unique
    constraint rejects the loser, which then just re-reads.
    """
    categories = list_categories(db, user_id)
    if categories:
        return categories

    for name, color in DEFAULT_CATEGORIES:
        db.add(Category(user_id=user_id, name=name, color=color))
    try:
        db.commit()
        log.info("seeded default categories user_id=%s", user_id)
    except IntegrityError:
        db.rollback()
        log.info("default categories already seeded concurrently user_id=%s", user_id)

    return list_categories(db, user_id)


def create_category(db: Session, user_id: int, name: str, color: str = "blue") -> Category:
    name = (name or "").strip()
    if not name:
        raise ValidationError("Category name is required")

    category = Category(user_id=user_id, name=name, color=color or "blue")
    db.add(category)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValidationError("Category already exists")
    db.refresh(category)
    return category


def delete_category(db: Session, user_id: int, category_id: int) -> None:
    """Delete a category; its tasks stay, with the reference cleared."""
    db.exec(
        update(Task)
        .where(Task.category_id == category_id, Task.user_id == user_id)
        .values(category_id=None)
    )
    result = db.exec(
        delete(Category).where(Category.id == category_id, Category.user_id == user_id)
    )
    if result.rowcount == 0:
        db.rollback()
        raise NotFoundError("Category not found")
    db.commit()
    log.info("category deleted user_id=%s category_id=%s", user_id, category_id)
