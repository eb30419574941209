from evenup.models.user import User
from evenup.models.group import Group
from evenup.models.group_member import GroupMember
from evenup.models.expense import Expense
from evenup.models.expense_split import ExpenseSplit
from evenup.models.payment import Payment

__all__ = ["User", "Group", "GroupMember", "Expense", "ExpenseSplit", "Payment"]
