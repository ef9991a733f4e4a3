from fastapi import APIRouter, Depends, status

from ..schemas import AuthResponse, CurrentUser, ErrorOut, LoginRequest, RegisterRequest, UserOut
from ..services import AuthService
from .deps import get_auth_service, get_current_user

router = APIRouter(prefix="/auth", tags=["Authentication"])


# PUBLIC_INTERFACE
@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    responses={400: {"model": ErrorOut}},
)
def register(body: RegisterRequest, service: AuthService = Depends(get_auth_service)):
    """
    Register a new user.
    Returns a bearer token and the public user record (excluding password).
    """
    token, user = service.register(body.username, body.email, body.password)
    return {"message": "User registered successfully", "token": token, "user": user}


# PUBLIC_INTERFACE
@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Login and get a bearer token",
    responses={400: {"model": ErrorOut}, 401: {"model": ErrorOut}},
)
def login(body: LoginRequest, service: AuthService = Depends(get_auth_service)):
    """
    User login by email and password.
    Unknown email and wrong password produce the same 401.
    """
    token, user = service.login(body.email, body.password)
    return {"message": "Login successful", "token": token, "user": user}


# PUBLIC_INTERFACE
@router.get("/me", response_model=UserOut, summary="Get current user profile")
def get_profile(
    current_user: CurrentUser = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service),
):
    """
    Get details about the current authed user.
    """
    return service.profile(current_user.id)
