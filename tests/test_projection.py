from decimal import Decimal

from splitpay.models import Debt, ViewerSummary
from splitpay.services.projection import project


def test_project_viewer_both_sides():
    debts = [
        Debt(from_address="X", to_address="Y", amount=Decimal("10")),
        Debt(from_address="Z", to_address="X", amount=Decimal("4")),
    ]
    assert project(debts, "X") == ViewerSummary(owes=Decimal("10"), is_owed=Decimal("4"))


def test_project_is_case_insensitive():
    debts = [Debt(from_address="0xABC", to_address="0xdef", amount=Decimal("7.5"))]
    assert project(debts, "0xabc").owes == Decimal("7.5")
    assert project(debts, "0XDEF ").is_owed == Decimal("7.5")


def test_project_uninvolved_viewer():
    debts = [Debt(from_address="X", to_address="Y", amount=Decimal("10"))]
    assert project(debts, "W") == ViewerSummary(owes=Decimal(0), is_owed=Decimal(0))
    assert project([], "W") == ViewerSummary(owes=Decimal(0), is_owed=Decimal(0))
