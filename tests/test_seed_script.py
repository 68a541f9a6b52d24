"""The demo seed script can be re-run without piling up quantities."""

import importlib.util
import uuid
from pathlib import Path

import pytest

from db import inventory as inventory_db

SEED_SCRIPT = Path(__file__).resolve().parents[1] / "backend" / "scripts" / "seed_demo_inventory.py"


@pytest.fixture
def seed_module(monkeypatch, session_maker, tables):
    loader = importlib.util.spec_from_file_location("seed_demo_inventory", SEED_SCRIPT)
    module = importlib.util.module_from_spec(loader)
    loader.loader.exec_module(module)

    async def _no_create():
        pass

    monkeypatch.setattr(module, "async_session_maker", session_maker)
    monkeypatch.setattr(module, "create_db_and_tables", _no_create)
    return module


async def test_rerunning_seed_keeps_quantities(seed_module, session_maker):
    await seed_module.main()
    await seed_module.main()

    async with session_maker() as db:
        user = await seed_module.get_or_create_user(db, seed_module.DEMO_EMAIL, seed_module.DEMO_PASSWORD)
        items = await inventory_db.list_items(db, user.id)

    assert {it["name"]: it["quantity"] for it in items} == seed_module.DEMO_ITEMS
    assert isinstance(user.id, uuid.UUID)
