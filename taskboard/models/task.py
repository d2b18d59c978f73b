from datetime import datetime
from enum import Enum
from typing import List, Optional

from sqlalchemy import Column, DateTime, ForeignKey, Integer
from sqlmodel import Field, Relationship, SQLModel

from taskboard.core.clock import utcnow
from taskboard.models.category import Category


class TaskStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Task(SQLModel, table=True):
    __tablename__ = "tasks"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True, nullable=False)
    # 카테고리가 삭제돼도 과제는 남고 참조만 NULL
    category_id: Optional[int] = Field(
        default=None,
        sa_column=Column(
            Integer,
            ForeignKey("categories.id", ondelete="SET NULL"),
            nullable=True,
            index=True,
        ),
    )
    title: str = Field(nullable=False)
    description: str = ""
    status: str = Field(default=TaskStatus.PENDING.value, index=True)
    priority: str = Field(default=TaskPriority.MEDIUM.value)
    due_date: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True), index=True)
    updated_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))
    deleted_at: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True), index=True)

    category: Optional[Category] = Relationship(
        sa_relationship_kwargs={"lazy": "joined"},
    )
    # live subtasks only; writes go through Subtask rows directly
    subtasks: List["Subtask"] = Relationship(
        sa_relationship_kwargs={
            "primaryjoin": "and_(Task.id == Subtask.task_id, Subtask.deleted_at == None)",
            "order_by": "Subtask.id",
            "viewonly": True,
        },
    )


class Subtask(SQLModel, table=True):
    __tablename__ = "subtasks"

    id: Optional[int] = Field(default=None, primary_key=True)
    task_id: int = Field(foreign_key="tasks.id", index=True, nullable=False)
    title: str = Field(nullable=False)
    is_completed: bool = False
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))
    deleted_at: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True), index=True)
