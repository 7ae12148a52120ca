from fastapi import APIRouter, Depends, Request
from .models import UserLogin, ForgotPasswordRequest, ResetPasswordRequest, VerifyEmailRequest
from .manager import login_user, get_current_user, forgot_password, reset_password, verify_email
from modules.shared.config import Settings, get_settings
from modules.shared.email_service import EmailService, get_email_service
from modules.shared.response import success_response
from modules.users.models import User, public_user
from modules.users.store import UserStore, get_user_store

router = APIRouter()


@router.post("/login")
async def login(
    user: UserLogin,
    store: UserStore = Depends(get_user_store),
    settings: Settings = Depends(get_settings),
):
    """Authenticate user"""
    return await login_user(user, store, settings)


@router.get("/me")
async def get_me(current_user: User = Depends(get_current_user)):
    """Get current user details"""
    return success_response({"user": public_user(current_user)})


@router.post("/forgot-password")
async def forgot_password_endpoint(
    body: ForgotPasswordRequest,
    request: Request,
    store: UserStore = Depends(get_user_store),
    email_service: EmailService = Depends(get_email_service),
    settings: Settings = Depends(get_settings),
):
    """Request password reset for user"""
    return await forgot_password(body, store, email_service, settings, str(request.base_url))


@router.post("/reset-password")
async def reset_password_endpoint(
    body: ResetPasswordRequest,
    store: UserStore = Depends(get_user_store),
    email_service: EmailService = Depends(get_email_service),
):
    """Reset user password with valid token"""
    return await reset_password(body, store, email_service)


@router.post("/verify-email")
async def verify_email_endpoint(body: VerifyEmailRequest, store: UserStore = Depends(get_user_store)):
    """Confirm an email address"""
    return await verify_email(body, store)
