import asyncio
import hashlib
import hmac
import logging
from functools import lru_cache
from typing import Dict, List, Optional

from modules.shared.config import get_settings
from modules.shared.storage import JsonFileStore, data_path
from .models import User

logger = logging.getLogger(__name__)


def hash_token(token: str) -> str:
    """SHA-256 digest stored in place of a raw reset/verification token"""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


class UserStore:
    """
    User records backed by users.json.
    The file is the source of truth. The in-memory list is a read-through cache
    that is only swapped after the file write succeeds.
    """

    def __init__(self, path: str):
        self._file = JsonFileStore(path, default=[])
        self._users: Optional[List[User]] = None
        self._user_locks: Dict[str, asyncio.Lock] = {}

    async def _load(self) -> List[User]:
        if self._users is None:
            raw = await self._file.read()
            self._users = [User.model_validate(item) for item in raw]
            logger.info(f"Loaded {len(self._users)} users from {self._file.path}")
        return self._users

    async def _commit(self, users: List[User]) -> None:
        await self._file.write([u.to_json() for u in users])
        self._users = users

    def user_lock(self, user_id: str) -> asyncio.Lock:
        """Per-user lock held while a reset token is issued or consumed"""
        return self._user_locks.setdefault(user_id, asyncio.Lock())

    async def get_all_users(self) -> List[User]:
        return list(await self._load())

    async def find_user_by_username(self, identifier: str) -> Optional[User]:
        """Match on username or email"""
        for user in await self._load():
            if user.username == identifier or user.email == identifier:
                return user
        return None

    async def find_user_by_id(self, user_id: str) -> Optional[User]:
        for user in await self._load():
            if user.id == user_id:
                return user
        return None

    async def find_user_by_reset_token(self, token: str) -> Optional[User]:
        digest = hash_token(token)
        for user in await self._load():
            if user.reset_token and user.reset_token_expires_at and hmac.compare_digest(user.reset_token, digest):
                return user
        return None

    async def find_user_by_verification_token(self, token: str) -> Optional[User]:
        digest = hash_token(token)
        for user in await self._load():
            if user.verification_token and hmac.compare_digest(user.verification_token, digest):
                return user
        return None

    async def add_user(self, user: User) -> User:
        async with self._file.locked():
            users = list(await self._load())
            if any(u.id == user.id for u in users):
                raise ValueError(f"Duplicate user id: {user.id}")
            users.append(user)
            await self._commit(users)
        logger.info(f"User added: {user.username} (id: {user.id})")
        return user

    async def update_user_by_id(self, user_id: str, fields: dict) -> Optional[User]:
        """
        Merge snake_case fields into the record. A value of None clears the field.
        Returns the updated record, or None when no record has this id.
        """
        async with self._file.locked():
            users = list(await self._load())
            for index, user in enumerate(users):
                if user.id == user_id:
                    merged = user.model_dump()
                    merged.update(fields)
                    users[index] = User.model_validate(merged)
                    await self._commit(users)
                    logger.debug(f"User {user_id} updated: {sorted(fields)}")
                    return users[index]
        logger.warning(f"Update skipped: user {user_id} not found")
        return None


@lru_cache
def get_user_store() -> UserStore:
    return UserStore(data_path(get_settings().data_dir, "users.json"))
