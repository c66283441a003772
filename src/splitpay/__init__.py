"""Balance settlement for shared group expenses."""

from splitpay.models import Debt, Expense, ExpenseStatus, GroupSnapshot, Payment, PaymentStatus, ViewerSummary
from splitpay.services.balances import compute_balances
from splitpay.services.projection import project
from splitpay.services.settlement import SettlementError, settle
from splitpay.services.validation import InvalidInput

__all__ = [
    "Debt",
    "Expense",
    "ExpenseStatus",
    "GroupSnapshot",
    "InvalidInput",
    "Payment",
    "PaymentStatus",
    "SettlementError",
    "ViewerSummary",
    "compute_balances",
    "project",
    "settle",
]
