from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload
from sqlmodel import Session, col, select

from taskboard.core.clock import as_utc, utcnow
from taskboard.core.errors import NotFoundError, ValidationError
from taskboard.models.category import Category
from taskboard.models.task import Subtask, Task
from taskboard.schemas.task import SubtaskIn, TaskCreate, TaskUpdate
from taskboard.services.task_query import TaskQuery, parse_pagination

log = logging.getLogger(__name__)

TASK_NOT_FOUND = "Task not found"

# columns that may not be cleared through an update payload
_REQUIRED_FIELDS = ("title", "description", "status", "priority")


def _scoped(user_id: int, task_id: int):
    return (
        col(Task.id) == task_id,
        col(Task.user_id) == user_id,
        col(Task.deleted_at).is_(None),
    )


def _check_category(db: Session, user_id: int, category_id: Optional[int]) -> None:
    if category_id is None:
        return
    owned = db.exec(
        select(Category.id).where(Category.id == category_id, Category.user_id == user_id)
    ).first()
    if owned is None:
        raise ValidationError("Invalid category")


def _commit(db: Session) -> None:
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValidationError("Invalid task data")


def list_tasks(
    db: Session,
    user_id: int,
    *,
    page=None,
    limit=None,
    search: Optional[str] = None,
    status: Optional[str] = None,
    category_id=None,
    max_limit: Optional[int] = None,
) -> List[Task]:
    page_n, limit_n = parse_pagination(page, limit, max_limit=max_limit)
    query = (
        TaskQuery(user_id)
        .search(search)
        .status(status)
        .category(category_id)
        .paginate(page_n, limit_n)
    )
    return list(db.exec(query.statement()).all())


def get_task(db: Session, user_id: int, task_id: int) -> Task:
    stmt = (
        select(Task)
        .where(*_scoped(user_id, task_id))
        .options(selectinload(Task.subtasks))
        .execution_options(populate_existing=True)
    )
    task = db.exec(stmt).first()
    if task is None:
        raise NotFoundError(TASK_NOT_FOUND)
    return task


def create_task(db: Session, user_id: int, payload: TaskCreate) -> Task:
    _check_category(db, user_id, payload.category_id)

    # owner always comes from the authenticated identity
    task = Task(
        user_id=user_id,
        category_id=payload.category_id,
        title=payload.title,
        description=payload.description,
        status=payload.status.value,
        priority=payload.priority.value,
        due_date=as_utc(payload.due_date),
    )
    db.add(task)
    try:
        db.flush()
        for item in payload.subtasks:
            db.add(Subtask(task_id=task.id, title=item.title, is_completed=item.is_completed))
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValidationError("Invalid task data")

    log.info("task created user_id=%s task_id=%s", user_id, task.id)
    return get_task(db, user_id, task.id)


def _replace_subtasks(db: Session, task_id: int, items: List[SubtaskIn], now: datetime) -> None:
    live = {
        s.id: s
        for s in db.exec(
            select(Subtask).where(Subtask.task_id == task_id, col(Subtask.deleted_at).is_(None))
        ).all()
    }
    kept = set()
    for item in items:
        existing = live.get(item.id) if item.id is not None else None
        if existing is not None and existing.id not in kept:
            existing.title = item.title
            existing.is_completed = item.is_completed
            existing.updated_at = now
            db.add(existing)
            kept.add(existing.id)
        else:
            db.add(Subtask(task_id=task_id, title=item.title, is_completed=item.is_completed))

    for subtask_id, subtask in live.items():
        if subtask_id not in kept:
            subtask.deleted_at = now
            db.add(subtask)


def update_task(db: Session, user_id: int, task_id: int, payload: TaskUpdate) -> Task:
    """
    Apply a partial update. The owner predicate is part of the UPDATE itself,
    and subtask replacement shares the same commit, so a failure leaves the
    task untouched.
    """
    get_task(db, user_id, task_id)

    data = payload.model_dump(exclude_unset=True)
    subtasks = data.pop("subtasks", None)
    for field in _REQUIRED_FIELDS:
        if field in data and data[field] is None:
            data.pop(field)
    if "category_id" in data:
        _check_category(db, user_id, data["category_id"])
    for field in ("status", "priority"):
        if field in data:
            data[field] = getattr(payload, field).value
    if "due_date" in data:
        data["due_date"] = as_utc(data["due_date"])

    now = utcnow()
    data["updated_at"] = now
    try:
        result = db.exec(update(Task).where(*_scoped(user_id, task_id)).values(**data))
        if result.rowcount == 0:
            db.rollback()
            raise NotFoundError(TASK_NOT_FOUND)
        if subtasks is not None:
            _replace_subtasks(db, task_id, payload.subtasks or [], now)
    except IntegrityError:
        db.rollback()
        raise ValidationError("Invalid task data")
    _commit(db)

    log.info("task updated user_id=%s task_id=%s", user_id, task_id)
    return get_task(db, user_id, task_id)


def delete_task(db: Session, user_id: int, task_id: int) -> None:
    """Soft delete; the row and its subtasks stay in the store."""
    now = utcnow()
    result = db.exec(
        update(Task).where(*_scoped(user_id, task_id)).values(deleted_at=now, updated_at=now)
    )
    if result.rowcount == 0:
        db.rollback()
        raise NotFoundError(TASK_NOT_FOUND)
    db.commit()
    log.info("task deleted user_id=%s task_id=%s", user_id, task_id)
