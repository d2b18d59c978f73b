from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from taskboard.db.session import get_session
from taskboard.dependencies.auth import get_auth_service
from taskboard.schemas.auth import AuthTokenModel, LoginRequest, RegisterRequest, UserRead
from taskboard.services.auth_service import AuthService

auth_router = APIRouter(prefix="/api/auth", tags=["auth"])


@auth_router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    db: Session = Depends(get_session),
    auth: AuthService = Depends(get_auth_service),
):
    return auth.register(db, body.username, body.email, body.password)


@auth_router.post("/login", response_model=AuthTokenModel)
def login(
    body: LoginRequest,
    db: Session = Depends(get_session),
    auth: AuthService = Depends(get_auth_service),
):
    issued = auth.login(db, body.email, body.password)
    return AuthTokenModel(
        token=issued.token,
        expires_at=issued.expires_at,
        user=UserRead.model_validate(issued.user),
    )
