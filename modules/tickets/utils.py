import math
from typing import Optional, Tuple

from .models import RequestItem

FOUNDER = "founder"
ADMIN = "admin"

# Ticket types that move money when approved: (payload amount key, ledger direction)
LEDGER_TYPES = {
    "ta": ("amount", "debited"),
    "proposal": ("projectAmount", "credited"),
}


def is_intern(designation: Optional[str]) -> bool:
    return bool(designation) and "intern" in designation.lower()


def approval_amount(item: RequestItem) -> Optional[float]:
    """Positive finite amount from the ticket payload, or None"""
    key, _ = LEDGER_TYPES[item.type]
    raw = item.payload.get(key)
    if raw is None or isinstance(raw, bool):
        return None
    try:
        amount = float(raw)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(amount) or amount <= 0:
        return None
    return amount


def ledger_entry_text(item: RequestItem) -> Tuple[str, str]:
    """(purpose, remarks) for the ledger line of an approved ticket"""
    if item.type == "ta":
        purpose = item.payload.get("description") or "Allowance Claim"
        remarks = item.payload.get("claimType") or item.payload.get("billFileName") or ""
    else:
        purpose = item.payload.get("projectTitle") or "Project Approval"
        remarks = ""
    return str(purpose), str(remarks)


def approval_forwarding(item: RequestItem) -> Tuple[str, str]:
    """(forwarded_to, target) for a non-financial ticket approval"""
    if item.signature_from:
        forwarded_to = item.signature_from
    elif is_intern(item.created_by_designation):
        forwarded_to = ADMIN
    else:
        forwarded_to = FOUNDER
    target = FOUNDER if forwarded_to.strip().lower() == FOUNDER else ADMIN
    return forwarded_to, target
