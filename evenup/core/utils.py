from decimal import Decimal, getcontext

getcontext().prec = 28
ZERO = Decimal("0")

# a balance has to exceed this to count as a debt
EPSILON = Decimal("0.01")


def is_settled(amount: Decimal) -> bool:
    return abs(amount) <= EPSILON


def below_epsilon(amount: Decimal) -> bool:
    return abs(amount) < EPSILON
