from typing import Optional

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer

from ..config import Settings
from ..errors import AuthError
from ..schemas import CurrentUser
from ..security import decode_access_token
from ..services import AuthService, TaskService

# auto_error is off so a missing token is rendered through AuthError like every other 401
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login", auto_error=False)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


# DATABASE Dependency
def get_db(request: Request):
    with request.app.state.database.session() as db:
        yield db


# PUBLIC_INTERFACE
def get_current_user(
    request: Request,
    token: Optional[str] = Depends(oauth2_scheme),
    settings: Settings = Depends(get_app_settings),
) -> CurrentUser:
    """
    Verifies the bearer token and attaches its identity to the request.

    The token is self-contained: no storage round-trip is made here.
    """
    if not token:
        raise AuthError("No token, authorization denied")
    user = decode_access_token(settings, token)
    request.state.user = user
    return user


def get_auth_service(
    request: Request,
    db=Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> AuthService:
    return AuthService(db, settings, request.app.state.pwd_context)


def get_task_service(
    db=Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> TaskService:
    return TaskService(db, current_user.id)
