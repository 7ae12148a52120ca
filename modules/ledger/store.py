import logging
from functools import lru_cache
from typing import Optional

from modules.shared.config import get_settings
from modules.shared.storage import JsonFileStore, data_path
from modules.shared.utils import generate_id, utc_now, to_iso
from .models import CompanyLedger, LedgerTransaction, TransactionType

logger = logging.getLogger(__name__)


class LedgerStore:
    """Company balance and transaction history in company-ledger.json"""

    def __init__(self, path: str):
        self._file = JsonFileStore(path, default={"balance": 0, "transactions": []})

    async def get_company_ledger(self) -> CompanyLedger:
        raw = await self._file.read()
        return CompanyLedger.model_validate(raw)

    async def has_transaction_for(self, request_id: str) -> bool:
        ledger = await self.get_company_ledger()
        return any(t.request_id == request_id for t in ledger.transactions)

    async def add_ledger_transaction(
        self,
        amount: float,
        purpose: str,
        type: TransactionType,
        remarks: Optional[str] = None,
        request_id: Optional[str] = None,
        request_type: Optional[str] = None,
    ) -> CompanyLedger:
        """Record a credit or debit and return the new ledger, newest first"""
        async with self._file.locked():
            ledger = await self.get_company_ledger()
            delta = amount if type == "credited" else -amount
            next_balance = round(ledger.balance + delta, 2)

            transaction = LedgerTransaction(
                id=generate_id("txn"),
                date=to_iso(utc_now()),
                amount=amount,
                purpose=purpose,
                remarks=remarks,
                type=type,
                balance_after=next_balance,
                request_id=request_id,
                request_type=request_type,
            )
            next_ledger = CompanyLedger(
                balance=next_balance,
                transactions=[transaction, *ledger.transactions],
            )
            await self._file.write(next_ledger.to_json())

        logger.info(f"Ledger {type} {amount} for '{purpose}', balance now {next_balance}")
        return next_ledger


@lru_cache
def get_ledger_store() -> LedgerStore:
    return LedgerStore(data_path(get_settings().data_dir, "company-ledger.json"))
