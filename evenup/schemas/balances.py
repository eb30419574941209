from decimal import Decimal
from pydantic import BaseModel
from typing import List
from evenup.schemas.ledger import BalanceSummary, MemberBalance, SettlementTransaction

class GroupBalanceOut(BaseModel):
    group_id: int
    members: List[MemberBalance]
    me: BalanceSummary
    settlements: List[SettlementTransaction]
    # balance left unmatched after every suggested settlement is paid
    unresolved: Decimal
