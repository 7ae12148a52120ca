import logging

from pydantic import ValidationError as ModelValidationError

from modules.shared.errors import DomainError, NotFoundError, ValidationError
from modules.shared.response import success_response, error_response, internal_error_response
from .models import User, UserUpdate, PROTECTED_FIELDS, public_user
from .store import UserStore

logger = logging.getLogger("users.manager")

# camelCase wire key -> snake_case attribute
_FIELD_BY_ALIAS = {field.alias or name: name for name, field in User.model_fields.items()}


def normalize_updates(updates: dict) -> dict:
    """Map wire keys onto model attributes and refuse unknown or protected ones"""
    normalized = {}
    for key, value in updates.items():
        name = _FIELD_BY_ALIAS.get(key, key if key in User.model_fields else None)
        if name is None:
            raise ValidationError(f"Unknown user field: {key}")
        if name in PROTECTED_FIELDS:
            raise ValidationError(f"Field cannot be updated: {key}")
        normalized[name] = value
    return normalized


async def list_users(store: UserStore):
    """All users, credentials and tokens stripped"""
    try:
        users = await store.get_all_users()
        logger.info(f"Listing {len(users)} users")
        return success_response({"users": [public_user(u) for u in users]})
    except Exception:
        logger.exception("Error listing users")
        return internal_error_response()


async def update_user(request: UserUpdate, store: UserStore):
    """Admin edit of a user record"""
    try:
        if not request.user_id or request.updates is None:
            raise ValidationError("userId and updates are required")

        fields = normalize_updates(request.updates)
        try:
            updated = await store.update_user_by_id(request.user_id, fields)
        except ModelValidationError as e:
            logger.warning(f"Rejected update for user {request.user_id}: {e.errors()}")
            raise ValidationError("Invalid value in updates")
        if not updated:
            raise NotFoundError("User not found")

        logger.info(f"User {request.user_id} updated by admin: {sorted(fields)}")
        return success_response()
    except DomainError as e:
        logger.warning(f"User update rejected: {e}")
        return error_response(str(e), e.status_code)
    except Exception:
        logger.exception("User update error")
        return internal_error_response()
