from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from taskboard.models.task import TaskPriority, TaskStatus
from taskboard.schemas.category import CategoryRead


# ===== Subtask =====

class SubtaskIn(BaseModel):
    id: Optional[int] = None  # 기존 subtask 를 유지하려면 id 를 함께 보냄
    title: str = Field(..., min_length=1)
    is_completed: bool = False


class SubtaskRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    task_id: int
    title: str
    is_completed: bool
    created_at: datetime
    updated_at: datetime


# ===== Task =====

class TaskCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = ""
    status: TaskStatus = TaskStatus.PENDING
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: Optional[datetime] = None
    category_id: Optional[int] = None
    subtasks: List[SubtaskIn] = Field(default_factory=list)


class TaskUpdate(BaseModel):
    """Partial update. Only fields the client sent are applied;
    a present ``subtasks`` list replaces the whole live set."""

    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    due_date: Optional[datetime] = None
    category_id: Optional[int] = None
    subtasks: Optional[List[SubtaskIn]] = None


class TaskRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    category_id: Optional[int] = None
    category: Optional[CategoryRead] = None
    title: str
    description: str
    status: TaskStatus
    priority: TaskPriority
    due_date: Optional[datetime] = None
    subtasks: List[SubtaskRead] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


# ===== Stats =====

class ChartPoint(BaseModel):
    date: str  # weekday label, e.g. "Mon"
    count: int


class TaskStats(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total: int = 0
    completed: int = 0
    pending: int = 0
    high: int = 0
    overdue: int = 0
    due_today: int = Field(0, alias="dueToday")
    chart_data: List[ChartPoint] = Field(default_factory=list, alias="chartData")
