from pydantic import BaseModel, field_validator


class InventoryItemName(BaseModel):
    name: str

    @field_validator("name")
    @classmethod
    def _strip_required(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("item name is required")
        return v


class InventoryItemOut(BaseModel):
    name: str
    # 0 only in a removal response, once the item has been deleted
    quantity: int

    class Config:
        from_attributes = True
