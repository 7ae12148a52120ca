from fastapi import APIRouter, Depends
from .manager import get_ledger
from .store import LedgerStore, get_ledger_store

router = APIRouter()


@router.get("")
async def get_company_ledger(store: LedgerStore = Depends(get_ledger_store)):
    return await get_ledger(store)
