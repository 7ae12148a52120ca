import logging

from modules.shared.errors import DomainError
from modules.shared.response import success_response, error_response, internal_error_response
from modules.shared.utils import require_fields
from .models import ContactInquiryCreate, GuestInquiryCreate
from .store import InquiryStore

logger = logging.getLogger("inquiries.manager")


async def list_contact_inquiries(store: InquiryStore):
    """Admin inbox view, newest first"""
    try:
        items = await store.list_inquiries(newest_first=True)
        return success_response({"inquiries": [item.to_json() for item in items]})
    except Exception:
        logger.exception("Error fetching inquiries")
        return internal_error_response()


async def submit_contact_inquiry(request: ContactInquiryCreate, store: InquiryStore):
    try:
        require_fields(request, ["guest_name", "email", "subject", "message"])
        inquiry = await store.create_inquiry(
            guest_name=request.guest_name,
            email=request.email,
            subject=request.subject,
            message=request.message,
        )
        return success_response({"inquiry": inquiry.to_json()})
    except DomainError as e:
        logger.warning(f"Inquiry rejected: {e}")
        return error_response(str(e), e.status_code)
    except Exception:
        logger.exception("Error creating inquiry")
        return internal_error_response()


async def list_guest_inquiries(store: InquiryStore):
    """All inquiries in arrival order with totals"""
    try:
        items = await store.list_inquiries()
        new_count = sum(1 for item in items if item.status == "new")
        return success_response(
            {
                "inquiries": [item.to_json() for item in items],
                "total": len(items),
                "newCount": new_count,
            },
            include_flag=False,
        )
    except Exception:
        logger.exception("Error fetching inquiries")
        return internal_error_response("Failed to fetch inquiries")


async def submit_guest_inquiry(request: GuestInquiryCreate, store: InquiryStore):
    try:
        require_fields(request, ["guest_id", "guest_name", "subject", "message"])
        inquiry = await store.create_inquiry(
            guest_name=request.guest_name,
            email=request.email,
            subject=request.subject,
            message=request.message,
            guest_id=request.guest_id,
            timestamp=request.timestamp,
        )
        logger.info(f"Guest {request.guest_id} submitted inquiry {inquiry.id}")
        return success_response(
            {"message": "Inquiry submitted successfully", "inquiry": inquiry.to_json()},
            status_code=201,
        )
    except DomainError as e:
        logger.warning(f"Guest inquiry rejected: {e}")
        return error_response(str(e), e.status_code)
    except Exception:
        logger.exception("Error processing inquiry")
        return internal_error_response("Failed to process inquiry")
