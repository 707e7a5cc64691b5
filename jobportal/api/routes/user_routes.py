"""
User Routes

POST /user/register              - Register and send verification email
POST /user/login                 - Login, get JWT (body + cookie)
GET  /user/logout                - Clear the token cookie
GET  /user/getuser               - Current user
GET  /user/verify/{token}        - Verify email
PUT  /user/preferences           - Save preferred job categories
GET  /user/count?role=           - Count users by role
POST /user/password/forgot       - Email a reset link
PUT  /user/password/reset/{token} - Reset password and login
PUT  /user/profile               - Update profile
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from jobportal.api.deps import get_user_service
from jobportal.core.auth import TOKEN_COOKIE, get_current_user
from jobportal.core.config import get_settings
from jobportal.core.security import create_access_token
from jobportal.schemas.schemas import (
    ForgotPasswordRequest,
    LoginRequest,
    MessageResponse,
    PreferencesRequest,
    ProfileUpdate,
    RegisterRequest,
    ResetPasswordRequest,
)
from jobportal.services.mongo_service import public_user
from jobportal.services.user_service import UserService

router = APIRouter(prefix="/user", tags=["Users"])


def send_token(user: dict, response: Response, message: str) -> dict:
    """Issue a JWT, set it as an httpOnly cookie and return it in the body."""
    settings = get_settings()
    token = create_access_token(data={"sub": str(user["_id"]), "role": user["role"]})
    response.set_cookie(
        TOKEN_COOKIE,
        token,
        max_age=settings.cookie_expire_days * 24 * 60 * 60,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="none" if settings.cookie_secure else "lax",
    )
    return {"success": True, "user": public_user(user), "message": message, "token": token}


@router.post("/register", response_model=MessageResponse, status_code=201)
def register(request: RegisterRequest, service: UserService = Depends(get_user_service)):
    """Register a new account. Login is possible after email verification."""
    service.register(request)
    return MessageResponse(message="User registered! Please check your email to verify.")


@router.post("/login")
def login(request: LoginRequest, response: Response, service: UserService = Depends(get_user_service)):
    user = service.authenticate(request)
    return send_token(user, response, "User Logged In!")


@router.get("/logout", response_model=MessageResponse)
def logout(response: Response, user: dict = Depends(get_current_user)):
    response.delete_cookie(TOKEN_COOKIE)
    return MessageResponse(message="Logged Out Successfully.")


@router.get("/getuser")
def get_user(user: dict = Depends(get_current_user)):
    return {"success": True, "user": public_user(user)}


@router.get("/verify/{token}", response_model=MessageResponse)
def verify(token: str, service: UserService = Depends(get_user_service)):
    service.verify(token)
    return MessageResponse(message="Email verified successfully! You may now login.")


@router.put("/preferences")
def update_preferences(
    request: PreferencesRequest,
    user: dict = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    categories = service.update_preferences(user, request.categories)
    return {"success": True, "message": "Preferences updated.", "preferredCategories": categories}


@router.get("/count")
def user_count(
    role: Optional[str] = Query(None),
    user: dict = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    return {"success": True, "count": service.count_by_role(role)}


@router.post("/password/forgot", response_model=MessageResponse)
def forgot_password(request: ForgotPasswordRequest, service: UserService = Depends(get_user_service)):
    service.forgot_password(request.email)
    return MessageResponse(message="Password reset email sent. Check your inbox.")


@router.put("/password/reset/{token}")
def reset_password(
    token: str,
    request: ResetPasswordRequest,
    response: Response,
    service: UserService = Depends(get_user_service),
):
    user = service.reset_password(token, request)
    return send_token(user, response, "Password reset successful!")


@router.put("/profile")
def update_profile(
    request: ProfileUpdate,
    user: dict = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    user = service.update_profile(user, request)
    return {"success": True, "user": public_user(user)}
