from typing import Optional

from modules.shared.models import CamelModel


class UserLogin(CamelModel):
    username: Optional[str] = None
    password: Optional[str] = None


class ForgotPasswordRequest(CamelModel):
    email: Optional[str] = None


class ResetPasswordRequest(CamelModel):
    token: Optional[str] = None
    new_password: Optional[str] = None


class VerifyEmailRequest(CamelModel):
    token: Optional[str] = None
