from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel, Field
from typing import Literal

class PaymentCreate(BaseModel):
    to_user: int
    group_id: int | None = None
    amount: Decimal = Field(gt=0, decimal_places=2)
    currency: str = "USD"
    payment_method: str | None = None
    notes: str | None = None

class PaymentStatusUpdate(BaseModel):
    status: Literal["pending", "completed", "failed"]

class PaymentOut(BaseModel):
    id: int
    from_user: int
    to_user: int
    group_id: int | None = None
    amount: Decimal
    currency: str
    status: str
    payment_method: str | None = None
    notes: str | None = None
    created_at: datetime | None = None

    class Config:
        from_attributes = True
