from fastapi import APIRouter, Depends
from .models import UserUpdate
from .manager import list_users, update_user
from .store import UserStore, get_user_store

router = APIRouter()


@router.get("")
async def get_users(store: UserStore = Depends(get_user_store)):
    """List users for the admin dashboard"""
    return await list_users(store)


@router.patch("")
async def patch_user(request: UserUpdate, store: UserStore = Depends(get_user_store)):
    """Apply admin edits to a user"""
    return await update_user(request, store)
