"""Composable, user-scoped task listing query.

Each filter adds one bound SQLAlchemy predicate; nothing is concatenated into
SQL text. Sentinel inputs (``"all"`` for status, ``""``/``"0"`` for category,
an empty search) leave the query untouched.
"""

from __future__ import annotations

from typing import Optional, Union

from sqlalchemy import func
from sqlalchemy.orm import selectinload
from sqlmodel import col, select

from taskboard.core.errors import ValidationError
from taskboard.models.task import Task

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10

STATUS_ALL = "all"
CATEGORY_ANY = ("", "0")

# LIMIT/OFFSET are bound as signed 64-bit integers by both SQLite and Postgres
MAX_SQL_INT = 2**63 - 1


def _positive_int(value, default: int) -> int:
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        return default
    return number if number >= 1 else default


def parse_pagination(page=None, limit=None, *, max_limit: Optional[int] = None) -> tuple[int, int]:
    """Lenient page/limit parsing: junk falls back to 1 / 10, limit is capped.

    A page whose offset cannot be represented in SQL is a ValidationError.
    """
    page_n = _positive_int(page, DEFAULT_PAGE)
    limit_n = _positive_int(limit, DEFAULT_LIMIT)
    if max_limit is not None:
        limit_n = min(limit_n, max_limit)
    if limit_n > MAX_SQL_INT or (page_n - 1) * limit_n > MAX_SQL_INT:
        raise ValidationError("page is out of range")
    return page_n, limit_n


class TaskQuery:
    def __init__(self, user_id: int):
        # scope clauses are always present
        self._clauses = [
            col(Task.user_id) == user_id,
            col(Task.deleted_at).is_(None),
        ]
        self._offset = 0
        self._limit: Optional[int] = None

    def search(self, term: Optional[str]) -> "TaskQuery":
        if term:
            # literal, case-insensitive substring of any non-empty term (whitespace too);
            # % and _ in the term are escaped
            self._clauses.append(
                func.lower(col(Task.title)).contains(term.lower(), autoescape=True)
            )
        return self

    def status(self, value: Optional[str]) -> "TaskQuery":
        value = value or STATUS_ALL
        if value != STATUS_ALL:
            self._clauses.append(col(Task.status) == value)
        return self

    def category(self, value: Union[str, int, None]) -> "TaskQuery":
        raw = "" if value is None else str(value).strip()
        if raw in CATEGORY_ANY:
            return self
        try:
            category_id = int(raw)
        except ValueError:
            raise ValidationError("category_id must be numeric")
        self._clauses.append(col(Task.category_id) == category_id)
        return self

    def paginate(self, page: int, limit: int) -> "TaskQuery":
        self._offset = (page - 1) * limit
        self._limit = limit
        return self

    def statement(self):
        stmt = (
            select(Task)
            .where(*self._clauses)
            .options(selectinload(Task.subtasks))
            .order_by(col(Task.created_at).desc(), col(Task.id).desc())
            .offset(self._offset)
        )
        if self._limit is not None:
            stmt = stmt.limit(self._limit)
        return stmt
