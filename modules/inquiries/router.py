from fastapi import APIRouter, Depends
from .models import ContactInquiryCreate, GuestInquiryCreate
from .manager import list_contact_inquiries, list_guest_inquiries, submit_contact_inquiry, submit_guest_inquiry
from .store import InquiryStore, get_inquiry_store

router = APIRouter()


@router.get("/guest-inquiries")
async def get_contact_inquiries(store: InquiryStore = Depends(get_inquiry_store)):
    return await list_contact_inquiries(store)


@router.post("/guest-inquiries")
async def post_contact_inquiry(request: ContactInquiryCreate, store: InquiryStore = Depends(get_inquiry_store)):
    return await submit_contact_inquiry(request, store)


@router.get("/guest/inquiry")
async def get_guest_inquiries(store: InquiryStore = Depends(get_inquiry_store)):
    return await list_guest_inquiries(store)


@router.post("/guest/inquiry")
async def post_guest_inquiry(request: GuestInquiryCreate, store: InquiryStore = Depends(get_inquiry_store)):
    return await submit_guest_inquiry(request, store)
