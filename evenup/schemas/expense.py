from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel, Field
from typing import List

class SplitInput(BaseModel):
    user_id: int
    amount: Decimal = Field(ge=0, decimal_places=2)

class ExpenseCreate(BaseModel):
    title: str
    amount: Decimal = Field(gt=0, decimal_places=2)
    currency: str = "USD"
    category: str = "general"
    splits: List[SplitInput]

class SplitOut(BaseModel):
    user_id: int
    amount: Decimal
    paid: bool

    class Config:
        from_attributes = True

class ExpenseOut(BaseModel):
    id: int
    group_id: int
    paid_by: int
    title: str
    amount: Decimal
    currency: str
    category: str
    created_at: datetime | None = None
    splits: List[SplitOut]

    class Config:
        from_attributes = True
