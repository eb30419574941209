"""
Unit tests for the balance accumulator and categorizer.

No database or HTTP: the engine takes plain ledger models.
"""
from decimal import Decimal

from evenup.core.balances import accumulate, categorize, compute_user_balances, net_balances
from evenup.schemas.ledger import Expense, Payment, Split

A, B, C, D = 1, 2, 3, 4


def expense(id, payer, amount, splits, group_id=10):
    return Expense(
        id=id,
        group_id=group_id,
        payer_id=payer,
        amount=Decimal(str(amount)),
        splits=[
            Split(user_id=uid, amount=Decimal(str(amt)), paid=paid)
            for uid, amt, paid in splits
        ],
    )


def payment(id, frm, to, amount, status="completed", group_id=None):
    return Payment(
        id=id,
        from_user_id=frm,
        to_user_id=to,
        amount=Decimal(str(amount)),
        status=status,
        group_id=group_id,
    )


DINNER = expense(1, A, 90, [(A, 30, True), (B, 30, False), (C, 30, False)])


# ── Accumulator ─────────────────────────────────────────────────────────────

def test_payer_is_owed_unpaid_splits():
    assert accumulate([DINNER], [], A) == {B: Decimal("30"), C: Decimal("30")}


def test_split_user_owes_payer():
    assert accumulate([DINNER], [], B) == {A: Decimal("-30")}


def test_payer_missing_from_splits_is_allowed():
    exp = expense(2, A, 60, [(B, 30, False), (C, 30, False)])

    assert accumulate([exp], [], A) == {B: Decimal("30"), C: Decimal("30")}


def test_paid_splits_are_skipped_on_both_sides():
    exp = expense(3, A, 90, [(A, 30, False), (B, 30, True), (C, 30, False)])

    assert accumulate([exp], [], A) == {C: Decimal("30")}
    assert accumulate([exp], [], B) == {}


def test_completed_payment_clears_debt():
    balances = accumulate([DINNER], [payment(1, B, A, 30)], A)

    assert balances == {C: Decimal("30")}


def test_pending_and_failed_payments_are_ignored():
    payments = [payment(1, B, A, 30, status="pending"), payment(2, B, A, 30, status="failed")]

    assert accumulate([DINNER], payments, A) == accumulate([DINNER], [], A)


def test_overpayment_flips_direction():
    balances = accumulate([DINNER], [payment(1, B, A, 50)], B)

    # B owed 30, paid 50, so A now owes B 20
    assert balances == {A: Decimal("20")}


def test_payments_between_other_users_are_ignored():
    assert accumulate([], [payment(1, B, C, 10)], A) == {}


def test_direct_payment_without_group():
    assert accumulate([], [payment(1, A, B, 15)], A) == {B: Decimal("15")}
    assert accumulate([], [payment(1, A, B, 15)], B) == {A: Decimal("-15")}


def test_near_zero_entries_are_dropped():
    exp = expense(4, A, Decimal("10.0049999"), [(A, 10, True), (B, Decimal("0.0049999"), False)])

    assert accumulate([exp], [], A) == {}


def test_one_cent_is_within_tolerance():
    exp = expense(5, A, Decimal("10.01"), [(A, 10, True), (B, Decimal("0.01"), False)])

    # kept by the accumulator, but not reported as a debt
    assert accumulate([exp], [], A) == {B: Decimal("0.01")}

    summary = compute_user_balances(A, [exp], [])
    assert summary.users_who_owe_you == []
    assert summary.net_balance == 0


def test_just_over_one_cent_is_a_debt():
    summary = categorize({B: Decimal("0.011"), C: Decimal("-0.02")})

    assert [(e.id, e.amount) for e in summary.users_who_owe_you] == [(B, Decimal("0.011"))]
    assert [(e.id, e.amount) for e in summary.users_you_owe] == [(C, Decimal("0.02"))]


def test_accumulate_is_idempotent_and_order_independent():
    expenses = [DINNER, expense(6, B, 40, [(A, 20, False), (B, 20, True)])]
    payments = [payment(1, C, A, 10)]

    first = accumulate(expenses, payments, A)

    assert accumulate(expenses, payments, A) == first
    assert accumulate(list(reversed(expenses)), payments, A) == first


def test_accumulate_does_not_mutate_input():
    before = DINNER.model_dump()
    accumulate([DINNER], [payment(1, B, A, 30)], A)

    assert DINNER.model_dump() == before


def test_empty_input_gives_empty_map():
    assert accumulate([], [], A) == {}


# ── Net balances / conservation ─────────────────────────────────────────────

def test_net_balances_sum_to_zero():
    expenses = [
        DINNER,
        expense(7, B, Decimal("45.50"), [(A, Decimal("15.17"), False), (B, Decimal("15.17"), True), (D, Decimal("15.16"), False)]),
        expense(8, D, 12, [(C, 12, False)]),
    ]
    payments = [payment(1, B, A, 10), payment(2, C, D, 5), payment(3, A, C, 7, status="pending")]

    net = net_balances(expenses, payments, [A, B, C, D])

    assert sum(net.values()) == 0
    assert net[A] == Decimal("60") - Decimal("15.17") - Decimal("10")


def test_net_balance_matches_accumulated_counterparties():
    expenses = [DINNER, expense(9, C, 20, [(A, 10, False), (C, 10, True)])]
    payments = [payment(1, B, A, 5)]

    net = net_balances(expenses, payments, [A, B, C])

    assert net[A] == sum(accumulate(expenses, payments, A).values())


# ── Categorizer ─────────────────────────────────────────────────────────────

def test_scenario_equal_split_dinner():
    summary = compute_user_balances(A, [DINNER], [])

    assert [(e.id, e.amount) for e in summary.users_who_owe_you] == [(B, 30), (C, 30)]
    assert summary.users_you_owe == []
    assert summary.total_owed_to_you == Decimal("60")
    assert summary.net_balance == Decimal("60")


def test_scenario_dinner_with_payment():
    summary = compute_user_balances(A, [DINNER], [payment(1, B, A, 30)])

    assert [(e.id, e.amount) for e in summary.users_who_owe_you] == [(C, 30)]
    assert summary.net_balance == Decimal("30")


def test_categorize_sorts_descending_with_id_tiebreak():
    summary = categorize({
        D: Decimal("5"),
        C: Decimal("-12"),
        B: Decimal("5"),
        A: Decimal("-40"),
        9: Decimal("20"),
    })

    assert [e.id for e in summary.users_who_owe_you] == [9, B, D]
    assert [(e.id, e.amount) for e in summary.users_you_owe] == [(A, Decimal("40")), (C, Decimal("12"))]
    assert summary.total_owed == Decimal("52")
    assert summary.total_owed_to_you == Decimal("30")
    assert summary.net_balance == Decimal("-22")


def test_categorize_skips_floating_noise():
    summary = categorize({B: Decimal("0.0049999"), C: Decimal("-0.004")})

    assert summary.users_you_owe == []
    assert summary.users_who_owe_you == []
    assert summary.net_balance == 0


def test_net_balance_equals_signed_sum_of_map():
    balance_map = {B: Decimal("12.34"), C: Decimal("-56.78"), D: Decimal("9.01")}

    summary = categorize(balance_map)

    assert summary.net_balance == sum(balance_map.values())
    assert summary.net_balance == summary.total_owed_to_you - summary.total_owed


def test_group_view_matches_global_view_restricted_to_group():
    trip = [DINNER, expense(10, C, 30, [(A, 15, False), (C, 15, True)])]
    other_group = [expense(11, D, 50, [(A, 50, False)], group_id=20)]
    trip_payments = [payment(1, B, A, 30, group_id=10)]
    direct = [payment(2, A, D, 20)]

    global_view = compute_user_balances(A, trip + other_group, trip_payments + direct)
    group_view = compute_user_balances(
        A,
        [e for e in trip + other_group if e.group_id == 10],
        [p for p in trip_payments + direct if p.group_id == 10],
    )

    assert group_view.net_balance == Decimal("15")
    assert global_view.net_balance == group_view.net_balance - Decimal("50") + Decimal("20")
