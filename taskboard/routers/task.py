# taskboard/routers/task.py
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlmodel import Session

from taskboard.core.config import Settings, get_settings
from taskboard.db.session import get_session
from taskboard.dependencies.auth import get_current_user_id
from taskboard.schemas.task import TaskCreate, TaskRead, TaskStats, TaskUpdate
from taskboard.services import stats_service, task_service

router = APIRouter(prefix="/api/tasks", tags=["Tasks"])


@router.get("", response_model=list[TaskRead])
def get_tasks(
    # page/limit are parsed leniently by the service, so accept raw strings here
    page: Optional[str] = Query(default=None),
    limit: Optional[str] = Query(default=None),
    search: str = Query(default=""),
    status: str = Query(default="all"),
    category_id: str = Query(default=""),
    db: Session = Depends(get_session),
    user_id: int = Depends(get_current_user_id),
    settings: Settings = Depends(get_settings),
):
    return task_service.list_tasks(
        db,
        user_id,
        page=page,
        limit=limit,
        search=search,
        status=status,
        category_id=category_id,
        max_limit=settings.max_page_size,
    )


@router.get("/stats", response_model=TaskStats)
def get_task_stats(
    db: Session = Depends(get_session),
    user_id: int = Depends(get_current_user_id),
    settings: Settings = Depends(get_settings),
):
    tz = stats_service.resolve_timezone(settings.stats_timezone)
    return stats_service.get_stats(db, user_id, tz=tz)


@router.get("/{task_id}", response_model=TaskRead)
def get_task(
    task_id: int,
    db: Session = Depends(get_session),
    user_id: int = Depends(get_current_user_id),
):
    return task_service.get_task(db, user_id, task_id)


@router.post("", response_model=TaskRead, status_code=status.HTTP_201_CREATED)
def create_task(
    payload: TaskCreate,
    db: Session = Depends(get_session),
    user_id: int = Depends(get_current_user_id),
):
    return task_service.create_task(db, user_id, payload)


@router.put("/{task_id}", response_model=TaskRead)
def update_task(
    task_id: int,
    payload: TaskUpdate,
    db: Session = Depends(get_session),
    user_id: int = Depends(get_current_user_id),
):
    return task_service.update_task(db, user_id, task_id, payload)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    task_id: int,
    db: Session = Depends(get_session),
    user_id: int = Depends(get_current_user_id),
):
    task_service.delete_task(db, user_id, task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
