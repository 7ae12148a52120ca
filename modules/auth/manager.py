import logging
from typing import Optional

from fastapi import Depends, HTTPException
from fastapi.security import OAuth2PasswordBearer

from modules.auth.models import UserLogin, ForgotPasswordRequest, ResetPasswordRequest, VerifyEmailRequest
from modules.auth.utils import (
    RESET_TOKEN_TTL,
    hash_password,
    verify_password,
    create_access_token,
    decode_token,
    generate_reset_token,
)
from modules.shared.config import Settings, get_settings
from modules.shared.email_service import EmailService
from modules.shared.errors import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    ExpiredError,
    NotFoundError,
    ValidationError,
)
from modules.shared.response import success_response, error_response, internal_error_response
from modules.shared.utils import require_fields, utc_now, to_iso, parse_iso
from modules.users.models import User, public_user
from modules.users.store import UserStore, get_user_store, hash_token

# Configure logger
logger = logging.getLogger("auth.manager")

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


async def login_user(request: UserLogin, store: UserStore, settings: Settings):
    """Authenticate by username or email and return a JWT with the public user"""
    try:
        require_fields(request, ["username", "password"], "Username and password are required")
        logger.info(f"Login attempt for: {request.username}")

        user = await store.find_user_by_username(request.username)
        if not user:
            raise AuthenticationError("Invalid username")
        if user.status == "pending_approval":
            raise AuthorizationError("Your account is pending admin approval. Please wait for a confirmation email.")
        if user.status == "rejected":
            raise AuthorizationError("Your access request has been rejected. Please contact support.")
        if not verify_password(request.password, user.password_hash):
            raise AuthenticationError("Invalid password")

        token = create_access_token({"sub": user.id, "role": user.role}, settings.jwt_secret)
        logger.info(f"User '{user.username}' authenticated successfully.")
        return success_response({"user": public_user(user), "token": token})
    except DomainError as e:
        logger.warning(f"Login failed for '{request.username}': {e}")
        return error_response(str(e), e.status_code)
    except Exception:
        logger.exception("Login error")
        return internal_error_response()


async def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    store: UserStore = Depends(get_user_store),
    settings: Settings = Depends(get_settings),
) -> User:
    """Resolve the bearer token to a user record"""
    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")
    payload = decode_token(token, settings.jwt_secret)
    if not payload or not payload.get("sub"):
        raise HTTPException(status_code=401, detail="Invalid token")

    user = await store.find_user_by_id(payload["sub"])
    if not user:
        logger.warning(f"User not found for id: {payload['sub']}")
        raise HTTPException(status_code=401, detail="User not found")
    return user


async def forgot_password(
    request: ForgotPasswordRequest,
    store: UserStore,
    email_service: EmailService,
    settings: Settings,
    base_url: str,
):
    """Issue a one-hour reset token and mail the reset link"""
    try:
        require_fields(request, ["email"], "Email is required")
        logger.info(f"Password reset requested for: {request.email}")

        user = await store.find_user_by_username(request.email)
        if not user:
            # Same answer whether or not the account exists
            logger.warning(f"Password reset requested for unknown account: {request.email}")
            return success_response()

        reset_token = generate_reset_token()
        expires_at = to_iso(utc_now() + RESET_TOKEN_TTL)
        async with store.user_lock(user.id):
            await store.update_user_by_id(user.id, {
                "reset_token": hash_token(reset_token),
                "reset_token_expires_at": expires_at,
            })

        reset_url = f"{(settings.frontend_url or base_url).rstrip('/')}/reset-password?token={reset_token}"
        email_sent = await email_service.send_password_reset_email(user.email, user.full_name, reset_url)
        if email_sent:
            logger.info(f"Password reset email dispatched for user {user.id}")
        else:
            logger.warning(f"Failed to send password reset email for user {user.id}")

        if settings.dev_token_exposure:
            return success_response({"resetUrl": reset_url, "resetToken": reset_token})
        return success_response()
    except DomainError as e:
        return error_response(str(e), e.status_code)
    except Exception:
        logger.exception("Forgot password error")
        return internal_error_response()


async def reset_password(request: ResetPasswordRequest, store: UserStore, email_service: EmailService):
    """Consume a reset token and set the new password"""
    try:
        require_fields(request, ["token", "new_password"], "Token and new password are required")

        user = await store.find_user_by_reset_token(request.token)
        if not user:
            raise NotFoundError("Invalid or expired token")

        async with store.user_lock(user.id):
            # Re-read under the lock; a concurrent reset may have consumed it
            current = await store.find_user_by_id(user.id)
            if not current or current.reset_token != hash_token(request.token):
                raise NotFoundError("Invalid or expired token")

            if parse_iso(current.reset_token_expires_at) < utc_now():
                await store.update_user_by_id(current.id, {"reset_token": None, "reset_token_expires_at": None})
                raise ExpiredError("Token has expired")

            await store.update_user_by_id(current.id, {
                "password_hash": hash_password(request.new_password),
                "reset_token": None,
                "reset_token_expires_at": None,
            })
        logger.info(f"Password reset successful for user: {current.username}")

        if not await email_service.send_password_changed_email(current.email, current.full_name):
            logger.warning(f"Failed to send password change confirmation for user {current.id}")

        return success_response()
    except DomainError as e:
        logger.warning(f"Password reset rejected: {e}")
        return error_response(str(e), e.status_code)
    except Exception:
        logger.exception("Reset password error")
        return internal_error_response()


async def verify_email(request: VerifyEmailRequest, store: UserStore):
    """Mark the account's email verified and drop the verification token"""
    try:
        require_fields(request, ["token"], "Token is required")

        user = await store.find_user_by_verification_token(request.token)
        if not user:
            raise NotFoundError("Invalid or expired token")

        await store.update_user_by_id(user.id, {
            "email_verified": True,
            "verification_token": None,
            "verification_sent_at": None,
        })
        logger.info(f"Email verified for user: {user.id}")
        return success_response({"message": "Email verified successfully. You can now log in."})
    except DomainError as e:
        return error_response(str(e), e.status_code)
    except Exception:
        logger.exception("Verify email error")
        return internal_error_response()
