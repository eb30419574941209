"""
Closed ledger data model consumed by the balance engine.

Rows read from the database are converted into these models at the ledger
boundary, so the engine can assume well-formed input: positive expense and
payment amounts, split totals matching the expense, one split per user and no
self-payments.
"""
from decimal import Decimal
from typing import List, Literal

from pydantic import BaseModel, Field, field_validator, model_validator

from evenup.core.utils import EPSILON

PaymentStatus = Literal["pending", "completed", "failed"]
MemberRole = Literal["admin", "member"]


class Split(BaseModel):
    user_id: int
    amount: Decimal = Field(ge=0)
    paid: bool = False

    class Config:
        frozen = True
        from_attributes = True


class Expense(BaseModel):
    id: int
    group_id: int
    payer_id: int
    amount: Decimal = Field(gt=0)
    currency: str = "USD"
    category: str = "general"
    title: str = ""
    splits: List[Split] = []

    class Config:
        frozen = True
        from_attributes = True

    @field_validator("splits")
    @classmethod
    def unique_split_users(cls, splits: List[Split]):
        user_ids = [s.user_id for s in splits]
        if len(user_ids) != len(set(user_ids)):
            raise ValueError("Duplicate users found in splits")
        return splits

    @model_validator(mode="after")
    def splits_match_amount(self):
        if not self.splits:
            return self

        total = sum((s.amount for s in self.splits), Decimal("0"))
        if abs(total - self.amount) >= EPSILON:
            raise ValueError(
                f"Split total ({total}) must equal expense amount ({self.amount})"
            )
        return self

    def split_for(self, user_id: int) -> Split | None:
        return next((s for s in self.splits if s.user_id == user_id), None)


class Payment(BaseModel):
    id: int
    from_user_id: int
    to_user_id: int
    group_id: int | None = None
    amount: Decimal = Field(gt=0)
    currency: str = "USD"
    status: PaymentStatus = "pending"

    class Config:
        frozen = True
        from_attributes = True

    @model_validator(mode="after")
    def not_a_self_payment(self):
        if self.from_user_id == self.to_user_id:
            raise ValueError("A payment cannot be made to yourself")
        return self

    @property
    def is_completed(self) -> bool:
        return self.status == "completed"

    def involves(self, user_id: int) -> bool:
        return user_id in (self.from_user_id, self.to_user_id)


class GroupMember(BaseModel):
    user_id: int
    role: MemberRole = "member"

    class Config:
        frozen = True
        from_attributes = True


class Group(BaseModel):
    id: int
    name: str = ""
    members: List[GroupMember] = []

    class Config:
        frozen = True
        from_attributes = True

    @property
    def member_ids(self) -> List[int]:
        return [m.user_id for m in self.members]


class MemberBalance(BaseModel):
    id: int
    # positive = is owed, negative = owes
    balance: Decimal

    class Config:
        frozen = True


class SettlementTransaction(BaseModel):
    from_user_id: int
    to_user_id: int
    amount: Decimal

    class Config:
        frozen = True


class CounterpartyBalance(BaseModel):
    id: int
    amount: Decimal

    class Config:
        frozen = True


class BalanceSummary(BaseModel):
    users_you_owe: List[CounterpartyBalance] = []
    users_who_owe_you: List[CounterpartyBalance] = []
    total_owed: Decimal = Decimal("0")
    total_owed_to_you: Decimal = Decimal("0")
    net_balance: Decimal = Decimal("0")

    class Config:
        frozen = True
