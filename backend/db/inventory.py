"""
Inventory access layer.

Every operation is scoped by ``user_id`` and commits its own work. Adds are a single
upsert and removals lock the row before decrementing or deleting it, so concurrent
sessions working on the same item never lose an update.
"""

import logging
from typing import Dict, List, Optional
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from .item import InventoryItem

logger = logging.getLogger(__name__)

_DIALECT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def _dialect_insert(db: AsyncSession):
    dialect = db.get_bind().dialect.name
    try:
        return _DIALECT_INSERTS[dialect]
    except KeyError:
        raise NotImplementedError(f"Upsert is not supported on the {dialect!r} dialect") from None


async def list_items(db: AsyncSession, user_id: UUID, q: Optional[str] = None) -> List[Dict]:
    """
    Return every item in the user's inventory as ``{"name", "quantity"}``.

    ``q`` optionally keeps only names containing it, ignoring case. The match runs
    in Python (``str.lower``) because SQLite's ``lower()`` only folds ASCII.
    """
    res = await db.execute(
        select(InventoryItem)
        .where(InventoryItem.user_id == user_id)
        .order_by(InventoryItem.name.asc())
    )
    items = [it.to_schema for it in res.scalars().all()]
    if q:
        needle = q.lower()
        items = [it for it in items if needle in it["name"].lower()]
    return items


async def get_item(db: AsyncSession, user_id: UUID, name: str) -> Optional[Dict]:
    res = await db.execute(
        select(InventoryItem).where(
            InventoryItem.user_id == user_id,
            InventoryItem.name == name,
        )
    )
    it = res.scalar_one_or_none()
    return it.to_schema if it else None


async def add_item(db: AsyncSession, user_id: UUID, name: str) -> Dict:
    """Create the item with quantity 1, or bump an existing one by 1."""
    tbl = InventoryItem.__table__
    upsert = (
        _dialect_insert(db)(tbl)
        .values(user_id=user_id, name=name, quantity=1)
        .on_conflict_do_update(
            index_elements=[tbl.c.user_id, tbl.c.name],
            set_={"quantity": tbl.c.quantity + 1},
        )
        .returning(tbl.c.name, tbl.c.quantity)
    )
    row = (await db.execute(upsert)).one()
    await db.commit()
    logger.debug("Added %r for user %s (quantity=%s)", name, user_id, row.quantity)
    return {"name": row.name, "quantity": int(row.quantity)}


async def remove_item(db: AsyncSession, user_id: UUID, name: str) -> Optional[Dict]:
    """
    Take one unit of the item away.

    - quantity > 1: decremented.
    - quantity == 1: the row is deleted and quantity 0 is reported.
    - item missing: nothing happens, returns None.

    The row is locked (``FOR UPDATE``) before choosing between decrement and delete.
    Both statements also re-check the quantity they were chosen for; SQLite has no
    row locks, so a miss means another writer got in between and the row is read again.
    """
    tbl = InventoryItem.__table__
    key = (tbl.c.user_id == user_id) & (tbl.c.name == name)

    while True:
        quantity = (
            await db.execute(select(tbl.c.quantity).where(key).with_for_update())
        ).scalar_one_or_none()
        if quantity is None:
            await db.commit()
            logger.debug("Remove of missing item %r for user %s ignored", name, user_id)
            return None

        if quantity > 1:
            decremented = (
                await db.execute(
                    update(tbl)
                    .where(key, tbl.c.quantity > 1)
                    .values(quantity=tbl.c.quantity - 1)
                    .returning(tbl.c.name, tbl.c.quantity)
                )
            ).first()
            if decremented is not None:
                await db.commit()
                logger.debug("Removed one %r for user %s (quantity=%s)", name, user_id, decremented.quantity)
                return {"name": decremented.name, "quantity": int(decremented.quantity)}
        else:
            deleted = (
                await db.execute(
                    delete(tbl)
                    .where(key, tbl.c.quantity <= 1)
                    .returning(tbl.c.name)
                )
            ).first()
            if deleted is not None:
                await db.commit()
                logger.debug("Deleted %r for user %s", name, user_id)
                return {"name": deleted.name, "quantity": 0}
