"""
Per-user inventory.

Each row is one named item in one user's inventory; (user_id, name) is the key.
A row with quantity <= 0 never exists: the last removal deletes it.
"""

from fastapi_users_db_sqlalchemy.generics import GUID
from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from .database import Base


class InventoryItem(Base):
    __tablename__ = "inventory_items"
    __table_args__ = (
        CheckConstraint("quantity >= 1", name="ck_inventory_items_quantity_positive"),
    )

    user_id = Column(GUID, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    name = Column(String, primary_key=True)  # case-sensitive, as stored
    quantity = Column(Integer, nullable=False, default=1)

    user = relationship("User", back_populates="inventory_items")

    @property
    def to_schema(self):
        return {"name": self.name, "quantity": int(self.quantity)}
