import logging
from collections import defaultdict
from decimal import Decimal
from typing import Dict, Iterable, List

from evenup.core.utils import ZERO, below_epsilon, is_settled
from evenup.schemas.ledger import (
    BalanceSummary,
    CounterpartyBalance,
    Expense,
    Payment,
)

logger = logging.getLogger(__name__)


def _fold(
    expenses: Iterable[Expense],
    payments: Iterable[Payment],
    viewer_id: int,
) -> Dict[int, Decimal]:
    """
    Signed balance of viewer_id against every counterparty, before dropping
    settled entries. Positive = they owe the viewer.
    """
    balances: Dict[int, Decimal] = defaultdict(lambda: ZERO)

    for exp in expenses:
        if exp.payer_id == viewer_id:
            # viewer paid, every other unpaid split is owed to them
            for s in exp.splits:
                if s.user_id != viewer_id and not s.paid:
                    balances[s.user_id] += s.amount
        else:
            mine = exp.split_for(viewer_id)
            if mine is not None and not mine.paid:
                balances[exp.payer_id] -= mine.amount

    for p in payments:
        if not p.is_completed:
            continue

        if p.from_user_id == viewer_id:
            balances[p.to_user_id] += p.amount
        elif p.to_user_id == viewer_id:
            balances[p.from_user_id] -= p.amount

    return balances


def accumulate(
    expenses: Iterable[Expense],
    payments: Iterable[Payment],
    viewer_id: int,
) -> Dict[int, Decimal]:
    """
    Net balance of viewer_id against each other user across the given
    expenses and completed payments.

    Returns {other_user_id: signed amount}; positive means the other user
    owes the viewer, negative means the viewer owes them. Entries closer
    to zero than EPSILON are dropped. Self-payments must be filtered out before
    calling.
    """
    raw = _fold(expenses, payments, viewer_id)
    result = {uid: amt for uid, amt in raw.items() if not below_epsilon(amt)}

    logger.debug(
        "accumulated %d counterparties for user %s (%d settled)",
        len(result), viewer_id, len(raw) - len(result),
    )
    return result


def net_balances(
    expenses: Iterable[Expense],
    payments: Iterable[Payment],
    member_ids: Iterable[int],
) -> Dict[int, Decimal]:
    """
    Scope-wide net balance per member: what the member is owed minus what
    they owe, summed over every counterparty in the scope.

    For a closed scope (every payer, split user and payment party is in
    member_ids) the values sum to zero.
    """
    expenses = list(expenses)
    payments = list(payments)

    net: Dict[int, Decimal] = {}
    for member_id in member_ids:
        net[member_id] = sum(_fold(expenses, payments, member_id).values(), ZERO)

    return net


def _sorted_entries(entries: List[CounterpartyBalance]) -> List[CounterpartyBalance]:
    # largest first, ties by user id so output is deterministic
    return sorted(entries, key=lambda e: (-e.amount, e.id))


def categorize(balance_map: Dict[int, Decimal]) -> BalanceSummary:
    users_you_owe: List[CounterpartyBalance] = []
    users_who_owe_you: List[CounterpartyBalance] = []

    for uid, amount in balance_map.items():
        if is_settled(amount):
            continue

        if amount < 0:
            users_you_owe.append(CounterpartyBalance(id=uid, amount=abs(amount)))
        else:
            users_who_owe_you.append(CounterpartyBalance(id=uid, amount=amount))

    total_owed = sum((e.amount for e in users_you_owe), ZERO)
    total_owed_to_you = sum((e.amount for e in users_who_owe_you), ZERO)

    return BalanceSummary(
        users_you_owe=_sorted_entries(users_you_owe),
        users_who_owe_you=_sorted_entries(users_who_owe_you),
        total_owed=total_owed,
        total_owed_to_you=total_owed_to_you,
        net_balance=total_owed_to_you - total_owed,
    )


def compute_user_balances(
    viewer_id: int,
    expenses: Iterable[Expense],
    payments: Iterable[Payment],
) -> BalanceSummary:
    return categorize(accumulate(expenses, payments, viewer_id))
