import logging
from decimal import Decimal
from typing import Dict, Iterable, List

from evenup.core.utils import ZERO, below_epsilon, is_settled
from evenup.schemas.ledger import MemberBalance, SettlementTransaction

logger = logging.getLogger(__name__)


def _by_magnitude(entries: List[List]) -> List[List]:
    return sorted(entries, key=lambda e: (-e[1], e[0]))


def simplify_debts(members: Iterable[MemberBalance]) -> List[SettlementTransaction]:
    """
    Greedy settlement: match the largest debtor with the largest creditor,
    pay the smaller of the two amounts, and move on from whichever side is
    cleared.

    Not guaranteed to give the fewest transactions. Balances are expected to
    sum to zero; if they don't, whatever can't be matched is left unresolved
    and no transaction is invented for it.
    """
    creditors = []
    debtors = []

    for m in members:
        if is_settled(m.balance):
            continue
        if m.balance > 0:
            creditors.append([m.id, m.balance])
        else:
            debtors.append([m.id, -m.balance])

    creditors = _by_magnitude(creditors)
    debtors = _by_magnitude(debtors)

    transfers: List[SettlementTransaction] = []
    i = 0
    j = 0

    while i < len(creditors) and j < len(debtors):
        cred_id, cred_amt = creditors[i]
        debt_id, debt_amt = debtors[j]

        pay_amt = min(cred_amt, debt_amt)

        if is_settled(pay_amt):
            # a leftover cent is not worth a transfer, leave it on the smaller side
            if is_settled(cred_amt):
                i += 1
            if is_settled(debt_amt):
                j += 1
            continue

        transfers.append(
            SettlementTransaction(
                from_user_id=debt_id,
                to_user_id=cred_id,
                amount=pay_amt,
            )
        )

        creditors[i][1] -= pay_amt
        debtors[j][1] -= pay_amt

        if below_epsilon(creditors[i][1]):
            i += 1
        if below_epsilon(debtors[j][1]):
            j += 1

    leftover = [e for e in creditors[i:] + debtors[j:] if not is_settled(e[1])]
    if leftover:
        logger.warning(
            "settlement input does not sum to zero, %d balance(s) left unresolved: %s",
            len(leftover),
            {uid: str(amt) for uid, amt in leftover},
        )

    return transfers


def compute_group_settlements(members: Iterable[MemberBalance]) -> List[SettlementTransaction]:
    return simplify_debts(members)


def apply_settlements(
    members: Iterable[MemberBalance],
    transactions: Iterable[SettlementTransaction],
) -> Dict[int, Decimal]:
    """
    Residual balance per member after every transaction is paid: the payer's
    debt shrinks, the payee's credit shrinks.
    """
    residual: Dict[int, Decimal] = {m.id: m.balance for m in members}

    for t in transactions:
        residual[t.from_user_id] = residual.get(t.from_user_id, ZERO) + t.amount
        residual[t.to_user_id] = residual.get(t.to_user_id, ZERO) - t.amount

    return residual
