"""
Pydantic schemas for inventory input validation.
"""

from typing import Optional

from pydantic import BaseModel, Field

from eventdesk.schemas.fields import FreeText, RequiredText


class InventoryItemCreate(BaseModel):
    name: RequiredText
    total_quantity: int = Field(..., ge=0)
    description: FreeText = ""


class InventoryItemUpdate(BaseModel):
    name: Optional[RequiredText] = None
    description: Optional[FreeText] = None


class AllocationRequest(BaseModel):
    item_id: int
    event_id: int
    quantity: int = Field(..., gt=0)
