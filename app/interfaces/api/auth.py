"""Auth API routes: register, login, profile and token lifecycle."""

from fastapi import APIRouter, Depends, status

from app.application.services.auth_service import (
    authenticate_user,
    change_password,
    register_user,
    update_profile,
)
from app.application.services.token_service import create_access_token, decode_access_token
from app.domain.models.user import User
from app.domain.repositories.user_repository import UserRepository
from app.domain.schemas.auth import (
    AuthResponse,
    ChangePasswordRequest,
    LoginRequest,
    ProfileUpdate,
    RegisterRequest,
    UserRead,
)
from app.interfaces.api.deps import get_current_user, security
from app.interfaces.deps import get_user_repository

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(body: RegisterRequest, repo: UserRepository = Depends(get_user_repository)):
    user = register_user(repo, body)
    return AuthResponse(
        message="User registered successfully",
        user=UserRead.model_validate(user),
        token=create_access_token(user.id),
    )


@router.post("/login", response_model=AuthResponse)
def login(body: LoginRequest, repo: UserRepository = Depends(get_user_repository)):
    user = authenticate_user(repo, body.email, body.password)
    return AuthResponse(
        message="Login successful",
        user=UserRead.model_validate(user),
        token=create_access_token(user.id),
    )


@router.get("/me")
def get_me(user: User = Depends(get_current_user)):
    return {"user": UserRead.model_validate(user)}


@router.put("/me")
def update_me(
    body: ProfileUpdate,
    user: User = Depends(get_current_user),
    repo: UserRepository = Depends(get_user_repository),
):
    user = update_profile(repo, user, body)
    return {"message": "Profile updated successfully", "user": UserRead.model_validate(user)}


@router.post("/change-password")
def change_my_password(
    body: ChangePasswordRequest,
    user: User = Depends(get_current_user),
    repo: UserRepository = Depends(get_user_repository),
):
    change_password(repo, user, body.current_password, body.new_password)
    return {"message": "Password changed successfully"}


@router.post("/logout")
def logout(user: User = Depends(get_current_user)):
    # tokens are stateless; the client discards its copy
    return {"message": "Logout successful"}


@router.post("/refresh")
def refresh(user: User = Depends(get_current_user)):
    return {"message": "Token refreshed successfully", "token": create_access_token(user.id)}


@router.get("/validate-token")
def validate_token(
    user: User = Depends(get_current_user),
    credentials=Depends(security),
):
    claims = decode_access_token(credentials.credentials)
    return {
        "valid": True,
        "user": UserRead.model_validate(user),
        "expiresAt": claims.expires_at,
    }
