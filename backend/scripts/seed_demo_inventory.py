import asyncio
import sys
from pathlib import Path

"""
Seed a demo user and a few inventory items into the database.
Safe to re-run: the user and any item that already exists are left as they are.

This script can be run from either:
- backend/: `python scripts/seed_demo_inventory.py`
- repo root: `python backend/scripts/seed_demo_inventory.py`
"""

# Allow running from repo root by ensuring `backend/` is on sys.path
BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from sqlalchemy import select  # noqa: E402

from db import inventory as inventory_db  # noqa: E402
from db.database import async_session_maker, create_db_and_tables  # noqa: E402
from db.users import User  # noqa: E402

from fastapi_users.password import PasswordHelper  # noqa: E402


password_helper = PasswordHelper()

DEMO_EMAIL = "demo@stockmaster.dev"
DEMO_PASSWORD = "demo-password"

# name -> how many times to add it
DEMO_ITEMS = {
    "apples": 3,
    "bananas": 2,
    "coffee beans": 1,
    "Olive oil": 1,
}


async def get_or_create_user(session, email: str, password: str) -> User:
    result = await session.execute(select(User).where(User.email == email))
    user = result.scalar_one_or_none()
    if user:
        return user

    user = User(
        email=email,
        hashed_password=password_helper.hash(password),
        is_active=True,
        is_superuser=False,
        is_verified=True,
    )
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


async def main() -> None:
    await create_db_and_tables()
    async with async_session_maker() as session:
        user = await get_or_create_user(session, DEMO_EMAIL, DEMO_PASSWORD)
        for name, count in DEMO_ITEMS.items():
            # Re-running the seed leaves existing demo items alone
            if await inventory_db.get_item(session, user.id, name):
                continue
            for _ in range(count):
                await inventory_db.add_item(session, user.id, name)

        items = await inventory_db.list_items(session, user.id)

    print(f"Seeded {DEMO_EMAIL} ({user.id}):")
    for it in items:
        print(f"  {it['name']}: {it['quantity']}")


if __name__ == "__main__":
    asyncio.run(main())
