import logging
from functools import lru_cache
from typing import Awaitable, Callable, List, Optional, Tuple

from modules.shared.config import get_settings
from modules.shared.errors import ValidationError
from modules.shared.storage import JsonFileStore, data_path
from modules.shared.utils import utc_now, to_iso
from .models import ALL_TARGETS, CLOSED_STATUSES, RequestItem, RequestStatus

logger = logging.getLogger(__name__)

Decision = Tuple[RequestStatus, dict]


def _with_status(item: RequestItem, status: RequestStatus, fields: dict) -> RequestItem:
    merged = item.model_dump()
    merged.update(fields)
    merged["status"] = status
    merged["updated_at"] = to_iso(utc_now())
    return RequestItem.model_validate(merged)


def _index_of(items: List[RequestItem], request_id: str) -> Optional[int]:
    for index, item in enumerate(items):
        if item.id == request_id:
            return index
    return None


class RequestStore:
    """Append-only ticket list in requests.json, kept in arrival order"""

    def __init__(self, path: str):
        self._file = JsonFileStore(path, default=[])

    async def _all(self) -> List[RequestItem]:
        raw = await self._file.read()
        return [RequestItem.model_validate(item) for item in raw]

    async def _save(self, items: List[RequestItem]) -> None:
        await self._file.write([item.to_json() for item in items])

    async def add_request(self, item: RequestItem) -> RequestItem:
        async with self._file.locked():
            items = await self._all()
            items.append(item)
            await self._save(items)
        logger.info(f"Request {item.id} ({item.type}) stored for target '{item.target}'")
        return item

    async def get_requests_by_target(self, target: str) -> List[RequestItem]:
        items = await self._all()
        if target == ALL_TARGETS:
            return items
        return [item for item in items if item.target == target]

    async def get_request_by_id(self, request_id: str) -> Optional[RequestItem]:
        items = await self._all()
        index = _index_of(items, request_id)
        return None if index is None else items[index]

    async def update_request_status(self, request_id: str, status: RequestStatus, **fields) -> Optional[RequestItem]:
        """Set status plus any extra snake_case fields and stamp updated_at"""
        async with self._file.locked():
            items = await self._all()
            index = _index_of(items, request_id)
            if index is None:
                return None
            items[index] = _with_status(items[index], status, fields)
            await self._save(items)
        logger.info(f"Request {request_id} moved to '{status}'")
        return items[index]

    async def transition(
        self,
        request_id: str,
        decide: Callable[[RequestItem], Awaitable[Decision]],
    ) -> Optional[RequestItem]:
        """
        Move an open ticket to the status chosen by decide(current).

        The ticket is re-read and its status checked while the file lock is
        held, and the lock stays held across decide() and the write. Side
        effects inside decide() therefore run at most once per open ticket.
        Raises ValidationError for a ticket that is already closed; returns
        None when no ticket has this id.
        """
        async with self._file.locked():
            items = await self._all()
            index = _index_of(items, request_id)
            if index is None:
                return None
            current = items[index]
            if current.status in CLOSED_STATUSES:
                raise ValidationError(f"Request is already {current.status}")

            status, fields = await decide(current)
            items[index] = _with_status(current, status, fields)
            await self._save(items)
        logger.info(f"Request {request_id} moved from '{current.status}' to '{status}'")
        return items[index]


@lru_cache
def get_request_store() -> RequestStore:
    return RequestStore(data_path(get_settings().data_dir, "requests.json"))
