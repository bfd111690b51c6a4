"""Budget arithmetic over project transactions.

Budgets are stored as free-text amounts; anything that does not parse as
a number counts as zero.
"""

import math
from collections.abc import Iterable

from pydantic import BaseModel

from nexus.domain.project.models import Project
from nexus.domain.shared.numbers import percent
from nexus.domain.types import TransactionType


class PortfolioSummary(BaseModel):
    """Budget totals across a list of projects."""

    revenue: float
    expenses: float
    profit: float
    margin_percent: float


def budget_total(project: Project) -> float:
    """Parse the project's budget text, 0.0 if it is not a finite number."""
    if not project.budget:
        return 0.0
    try:
        value = float(project.budget.replace(",", ""))
    except ValueError:
        return 0.0
    return value if math.isfinite(value) else 0.0


def spent(project: Project) -> float:
    """Sum of expense transactions."""
    return sum(t.amount for t in project.transactions if t.type == TransactionType.EXPENSE)


def received(project: Project) -> float:
    """Sum of income transactions."""
    return sum(t.amount for t in project.transactions if t.type == TransactionType.INCOME)


def remaining(project: Project) -> float:
    """Budget left after expenses (negative when overspent)."""
    return budget_total(project) - spent(project)


def budget_usage_percent(project: Project) -> float:
    """Expenses as a percentage of budget; 0.0 when there is no budget."""
    return percent(spent(project), budget_total(project))


def expenses_by_category(project: Project) -> dict[str, float]:
    """Expense totals keyed by category, in first-seen order."""
    totals: dict[str, float] = {}
    for tx in project.transactions:
        if tx.type == TransactionType.EXPENSE:
            totals[tx.category] = totals.get(tx.category, 0.0) + tx.amount
    return totals


def portfolio_summary(projects: Iterable[Project]) -> PortfolioSummary:
    """Revenue (sum of budgets), expenses, profit and margin."""
    projects = list(projects)
    revenue = sum(budget_total(p) for p in projects)
    expenses = sum(spent(p) for p in projects)
    profit = revenue - expenses
    return PortfolioSummary(
        revenue=revenue,
        expenses=expenses,
        profit=profit,
        margin_percent=round(percent(profit, revenue), 1),
    )
