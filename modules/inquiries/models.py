from typing import Literal, Optional

from pydantic import AliasChoices, Field

from modules.shared.models import CamelModel

InquiryStatus = Literal["new", "read", "resolved"]


class GuestInquiry(CamelModel):
    id: str
    guest_id: Optional[str] = None
    guest_name: str
    email: Optional[str] = None
    subject: str
    message: str
    timestamp: Optional[str] = None
    date: str
    time: str
    status: InquiryStatus = "new"
    created_at: str


class ContactInquiryCreate(CamelModel):
    """Contact form on the public site"""
    guest_name: Optional[str] = None
    email: Optional[str] = None
    subject: Optional[str] = None
    message: Optional[str] = None


class GuestInquiryCreate(CamelModel):
    """Inquiry from a signed-in guest session"""
    guest_id: Optional[str] = None
    guest_name: Optional[str] = None
    email: Optional[str] = Field(default=None, validation_alias=AliasChoices("guestEmail", "email"))
    subject: Optional[str] = None
    message: Optional[str] = None
    timestamp: Optional[str] = None
