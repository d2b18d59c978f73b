from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from sqlmodel import Session

from taskboard.core.config import Settings, get_settings
from taskboard.core.errors import AuthError
from taskboard.db.session import get_session
from taskboard.models.user import User
from taskboard.services.auth_service import AuthService

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


def get_auth_service(settings: Settings = Depends(get_settings)) -> AuthService:
    return AuthService.from_settings(settings)


def _extract_jwt(request: Request, token: str | None) -> str | None:
    return token or request.cookies.get("access_token")


def get_current_user(
    request: Request,
    token: str | None = Depends(oauth2_scheme),
    db: Session = Depends(get_session),
    auth: AuthService = Depends(get_auth_service),
) -> User:
    """Strict auth dependency; raises when no/invalid token."""
    jwt_token = _extract_jwt(request, token)
    if not jwt_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing or malformed token")

    try:
        return auth.authenticate(db, jwt_token)
    except AuthError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=exc.message,
            headers={"WWW-Authenticate": "Bearer"},
        )


def get_current_user_id(user: User = Depends(get_current_user)) -> int:
    return user.id
