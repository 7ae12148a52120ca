from typing import List, Literal, Optional

from modules.shared.models import CamelModel

TransactionType = Literal["credited", "debited"]


class LedgerTransaction(CamelModel):
    id: str
    date: str
    amount: float
    purpose: str
    remarks: Optional[str] = None
    type: TransactionType
    balance_after: float
    request_id: Optional[str] = None
    request_type: Optional[str] = None


class CompanyLedger(CamelModel):
    balance: float = 0
    transactions: List[LedgerTransaction] = []
