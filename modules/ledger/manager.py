import logging

from modules.shared.response import success_response, internal_error_response
from .store import LedgerStore

logger = logging.getLogger("ledger.manager")


async def get_ledger(store: LedgerStore):
    """Read-only ledger snapshot"""
    try:
        ledger = await store.get_company_ledger()
        logger.info(f"Ledger fetched: balance {ledger.balance}, {len(ledger.transactions)} transactions")
        return success_response({"ledger": ledger.to_json()})
    except Exception:
        logger.exception("Company ledger fetch error")
        return internal_error_response("Failed to fetch company ledger")
