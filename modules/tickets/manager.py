import logging

from modules.ledger.store import LedgerStore
from modules.shared.errors import DomainError, NotFoundError, ValidationError
from modules.shared.response import success_response, error_response, internal_error_response
from modules.shared.utils import generate_id, require_fields, utc_now, to_iso
from .models import REQUEST_ACTIONS, REQUEST_TYPES, RequestAction, RequestCreate, RequestItem
from .store import Decision, RequestStore
from .utils import ADMIN, LEDGER_TYPES, approval_amount, approval_forwarding, ledger_entry_text

logger = logging.getLogger("tickets.manager")

REQUIRED_FIELDS = ["type", "title", "created_by", "payload", "target"]


async def list_requests(target: str, store: RequestStore):
    """Tickets addressed to one audience, oldest first"""
    try:
        items = await store.get_requests_by_target(target)
        logger.info(f"Retrieved {len(items)} requests for target '{target}'")
        return success_response({"requests": [item.to_json() for item in items]})
    except Exception:
        logger.exception("Error retrieving requests")
        return internal_error_response()


async def create_request(request: RequestCreate, store: RequestStore):
    """Validate and store a new ticket in pending state"""
    try:
        require_fields(request, REQUIRED_FIELDS, "Missing request data")
        if request.type not in REQUEST_TYPES:
            raise ValidationError(f"Invalid request type: {request.type}")

        item = RequestItem(
            id=generate_id("req"),
            type=request.type,
            title=request.title,
            created_by=request.created_by,
            created_by_id=request.created_by_id,
            created_by_role=request.created_by_role,
            created_by_designation=request.created_by_designation,
            payload=request.payload,
            target=request.target,
            status="pending",
            created_at=to_iso(utc_now()),
            uploaded_file=request.uploaded_file,
            signature_from=request.signature_from,
        )
        saved = await store.add_request(item)
        logger.info(f"Request {saved.id} created by {saved.created_by} for '{saved.target}'")
        return success_response({"request": saved.to_json()})
    except DomainError as e:
        logger.warning(f"Request creation rejected: {e}")
        return error_response(str(e), e.status_code)
    except Exception:
        logger.exception("Request creation error")
        return internal_error_response()


async def _approve(current: RequestItem, ledger: LedgerStore) -> Decision:
    if current.type in LEDGER_TYPES:
        amount = approval_amount(current)
        if amount is None:
            raise ValidationError("Invalid amount for approval")
        if await ledger.has_transaction_for(current.id):
            # Posted by an earlier attempt whose status write failed
            logger.warning(f"Ledger already holds request {current.id}, approving without a new posting")
            return "approved", {}
        purpose, remarks = ledger_entry_text(current)
        _, direction = LEDGER_TYPES[current.type]
        await ledger.add_ledger_transaction(
            amount=amount,
            purpose=purpose,
            remarks=remarks,
            type=direction,
            request_id=current.id,
            request_type=current.type,
        )
        return "approved", {}

    forwarded_to, target = approval_forwarding(current)
    return "forwarded", {"target": target, "forwarded_to": forwarded_to, "signature_status": "pending"}


def _sign(current: RequestItem) -> Decision:
    return "signed", {
        "signature_status": "signed",
        "target": ADMIN,
        "forwarded_to": current.signature_from or ADMIN,
    }


async def apply_action(request: RequestAction, store: RequestStore, ledger: LedgerStore):
    """Approve, reject or sign a ticket"""
    try:
        if not request.action or not request.request_id:
            raise ValidationError("Missing action or requestId")
        if request.action not in REQUEST_ACTIONS:
            raise ValidationError("Unknown action")

        async def decide(current: RequestItem) -> Decision:
            logger.info(f"Applying '{request.action}' to request {current.id} ({current.type})")
            if request.action == "approve":
                return await _approve(current, ledger)
            if request.action == "reject":
                return "rejected", {}
            return _sign(current)

        updated = await store.transition(request.request_id, decide)
        if not updated:
            raise NotFoundError("Request not found")

        result = {"request": updated.to_json()}
        if updated.status in ("forwarded", "signed"):
            result["forwardedTo"] = updated.forwarded_to
        return success_response(result)
    except DomainError as e:
        logger.warning(f"Request action rejected: {e}")
        return error_response(str(e), e.status_code)
    except Exception:
        logger.exception("Request action error")
        return internal_error_response()
