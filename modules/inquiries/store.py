import logging
from datetime import datetime
from functools import lru_cache
from typing import List, Optional

from modules.shared.config import get_settings
from modules.shared.storage import JsonFileStore, data_path
from modules.shared.utils import format_local_date, format_local_time, generate_id, to_iso, utc_now
from .models import GuestInquiry, InquiryStatus

logger = logging.getLogger(__name__)


class InquiryStore:
    """Guest inquiries from both intake forms, one schema, arrival order"""

    def __init__(self, path: str):
        self._file = JsonFileStore(path, default=[])

    async def _all(self) -> List[GuestInquiry]:
        raw = await self._file.read()
        return [GuestInquiry.model_validate(item) for item in raw]

    async def _save(self, items: List[GuestInquiry]) -> None:
        await self._file.write([item.to_json() for item in items])

    async def create_inquiry(
        self,
        guest_name: str,
        subject: str,
        message: str,
        email: Optional[str] = None,
        guest_id: Optional[str] = None,
        timestamp: Optional[str] = None,
    ) -> GuestInquiry:
        now = utc_now()
        local_now = datetime.now()
        inquiry = GuestInquiry(
            id=generate_id("inq"),
            guest_id=guest_id,
            guest_name=guest_name,
            email=email,
            subject=subject,
            message=message,
            timestamp=timestamp,
            date=format_local_date(local_now),
            time=format_local_time(local_now),
            status="new",
            created_at=to_iso(now),
        )
        async with self._file.locked():
            items = await self._all()
            items.append(inquiry)
            await self._save(items)
        logger.info(f"Inquiry {inquiry.id} stored from {guest_name}")
        return inquiry

    async def list_inquiries(self, newest_first: bool = False) -> List[GuestInquiry]:
        items = await self._all()
        if newest_first:
            items.reverse()
        return items

    async def update_status(self, inquiry_id: str, status: InquiryStatus) -> Optional[GuestInquiry]:
        async with self._file.locked():
            items = await self._all()
            for index, item in enumerate(items):
                if item.id == inquiry_id:
                    items[index] = GuestInquiry.model_validate({**item.model_dump(), "status": status})
                    await self._save(items)
                    logger.info(f"Inquiry {inquiry_id} marked '{status}'")
                    return items[index]
        return None


@lru_cache
def get_inquiry_store() -> InquiryStore:
    return InquiryStore(data_path(get_settings().data_dir, "guest-inquiries.json"))
