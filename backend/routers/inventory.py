from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from core.auth import current_active_user
from db import inventory as inventory_db
from db.database import get_async_session
from db.users import User
from schemas.inventory import InventoryItemName, InventoryItemOut

router = APIRouter()


@router.get("/items", response_model=List[InventoryItemOut])
async def list_inventory_items(
    q: Optional[str] = None,
    user: User = Depends(current_active_user),
    db: AsyncSession = Depends(get_async_session),
):
    """List the current user's items, optionally filtered by a name substring (case-insensitive)."""
    return await inventory_db.list_items(db, user.id, q=(q or "").strip() or None)


@router.get("/items/{name:path}", response_model=InventoryItemOut)
async def get_inventory_item(
    name: str,
    user: User = Depends(current_active_user),
    db: AsyncSession = Depends(get_async_session),
):
    item = await inventory_db.get_item(db, user.id, name)
    if not item:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Item {name!r} not found"
        )
    return item


@router.post("/items", response_model=InventoryItemOut)
async def add_inventory_item(
    payload: InventoryItemName,
    user: User = Depends(current_active_user),
    db: AsyncSession = Depends(get_async_session),
):
    """Add one unit of an item, creating it on first add."""
    return await inventory_db.add_item(db, user.id, payload.name)


@router.post("/items/remove", response_model=Optional[InventoryItemOut])
async def remove_inventory_item(
    payload: InventoryItemName,
    user: User = Depends(current_active_user),
    db: AsyncSession = Depends(get_async_session),
):
    """
    Remove one unit of an item.

    The last unit deletes the item (reported with quantity 0). Removing an item
    that does not exist is a no-op and returns null.
    """
    return await inventory_db.remove_item(db, user.id, payload.name)
