from fastapi import APIRouter, Depends, Query
from .models import RequestAction, RequestCreate
from .manager import apply_action, create_request, list_requests
from .store import RequestStore, get_request_store
from .utils import ADMIN as DEFAULT_TARGET
from modules.ledger.store import LedgerStore, get_ledger_store

router = APIRouter()


@router.get("")
async def get_requests(
    target: str = Query(DEFAULT_TARGET),
    store: RequestStore = Depends(get_request_store),
):
    return await list_requests(target.strip() or DEFAULT_TARGET, store)


@router.post("")
async def submit_request(request: RequestCreate, store: RequestStore = Depends(get_request_store)):
    return await create_request(request, store)


@router.post("/action")
async def request_action(
    request: RequestAction,
    store: RequestStore = Depends(get_request_store),
    ledger: LedgerStore = Depends(get_ledger_store),
):
    """
    Act on a ticket.
    Expects JSON body: { "action": "approve" | "reject" | "sign", "requestId": "req-..." }
    """
    return await apply_action(request, store, ledger)
