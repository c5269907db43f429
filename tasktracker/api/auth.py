"""Registration and login endpoints."""

from fastapi import APIRouter, Depends, status

from ..models import User
from ..schemas.user import AuthResponse, LoginRequest, RegisterRequest, UserOut
from ..services.auth import AuthService, get_auth_service

router = APIRouter()


def _auth_response(message: str, user: User, token: str) -> AuthResponse:
    return AuthResponse(
        message=message,
        token=token,
        user=UserOut(id=user.id, username=user.username, email=user.email),
    )


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, auth: AuthService = Depends(get_auth_service)):
    user, token = auth.register(payload.username, payload.email, payload.password)
    return _auth_response("User created successfully", user, token)


@router.post("/login", response_model=AuthResponse)
def login(payload: LoginRequest, auth: AuthService = Depends(get_auth_service)):
    user, token = auth.login(payload.email, payload.password)
    return _auth_response("Login successful", user, token)
