from fastapi import APIRouter, Depends

from taskboard.dependencies.auth import get_current_user
from taskboard.models.user import User
from taskboard.schemas.auth import UserRead

user_router = APIRouter(prefix="/api/users", tags=["users"])


@user_router.get("/me", response_model=UserRead)
def get_me(user: User = Depends(get_current_user)):
    return user
