from fastapi import APIRouter, Depends, Response, status
from sqlmodel import Session

from taskboard.db.session import get_session
from taskboard.dependencies.auth import get_current_user_id
from taskboard.schemas.category import CategoryCreate, CategoryRead
from taskboard.services import category_service

router = APIRouter(prefix="/api/categories", tags=["Categories"])


@router.get("", response_model=list[CategoryRead])
def get_categories(
    db: Session = Depends(get_session),
    user_id: int = Depends(get_current_user_id),
):
    # 카테고리가 하나도 없으면 기본 세트를 만들어서 반환
    return category_service.ensure_categories(db, user_id)


@router.post("", response_model=CategoryRead, status_code=status.HTTP_201_CREATED)
def create_category(
    body: CategoryCreate,
    db: Session = Depends(get_session),
    user_id: int = Depends(get_current_user_id),
):
    return category_service.create_category(db, user_id, body.name, body.color)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(
    category_id: int,
    db: Session = Depends(get_session),
    user_id: int = Depends(get_current_user_id),
):
    category_service.delete_category(db, user_id, category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
