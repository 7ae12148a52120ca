from typing import Any, Dict, Literal, Optional

from modules.shared.models import CamelModel

Role = Literal["admin", "user", "guest", "founder"]
AccountStatus = Literal["pending_approval", "active", "rejected"]

# Never leaves the server
SENSITIVE_FIELDS = {"password_hash", "verification_token", "reset_token", "reset_token_expires_at"}

# Admin updates may not touch these
PROTECTED_FIELDS = {"id", "created_at"} | SENSITIVE_FIELDS


class User(CamelModel):
    id: str
    username: str
    email: str
    password_hash: str
    role: Role = "user"
    full_name: str
    phone: Optional[str] = None
    profile_photo: Optional[str] = None
    profile_picture_uploaded: Optional[bool] = None
    designation: Optional[str] = None
    status: Optional[AccountStatus] = None
    requested_at: Optional[str] = None
    approved_at: Optional[str] = None
    rejected_at: Optional[str] = None
    email_verified: Optional[bool] = None
    verification_token: Optional[str] = None
    verification_sent_at: Optional[str] = None
    reset_token: Optional[str] = None
    reset_token_expires_at: Optional[str] = None
    created_at: str
    is_profile_completed: Optional[bool] = None
    profile_completed_at: Optional[str] = None
    selected_role: Optional[str] = None


def public_user(user: User) -> dict:
    """User as JSON with credentials and tokens stripped"""
    return user.to_json(exclude=SENSITIVE_FIELDS)


class UserUpdate(CamelModel):
    user_id: Optional[str] = None
    updates: Optional[Dict[str, Any]] = None
