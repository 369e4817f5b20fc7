"""
Decumulation Calculations

Sizing a retirement corpus and drawing it down with withdrawals that grow
with inflation.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from fincalc.calculations.accumulation import deflate
from fincalc.calculations.amortization import growth_factor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DecumulationYear:
    """One year of withdrawals from a corpus."""

    year: int
    opening_balance: float
    withdrawal: float
    growth_on_balance: float
    closing_balance: float
    real_opening_balance: float
    real_withdrawal: float
    real_closing_balance: float
    age: Optional[int] = None


def real_return_rate(nominal_percent: float, inflation_percent: float) -> float:
    """Inflation-adjusted return as a decimal (Fisher relation)."""
    return (1 + nominal_percent / 100) / (1 + inflation_percent / 100) - 1


def required_corpus(
    annual_expense_at_retirement: float,
    post_retirement_return_percent: float,
    inflation_percent: float,
    years_in_retirement: float,
) -> float:
    """
    Calculate the corpus that funds inflation-growing expenses.

    Annuity due on the real return rate: the first withdrawal happens at the
    start of retirement.

    Args:
        annual_expense_at_retirement: First year's expenses in future money
        post_retirement_return_percent: Annual return on the corpus, percent
        inflation_percent: Annual growth of expenses, percent
        years_in_retirement: Number of withdrawal years

    Returns:
        Corpus needed on the first day of retirement
    """
    real_rate = real_return_rate(post_retirement_return_percent, inflation_percent)

    if real_rate == 0:
        return annual_expense_at_retirement * years_in_retirement

    annuity_factor = (1 - growth_factor(real_rate, -years_in_retirement)) / real_rate
    return annual_expense_at_retirement * annuity_factor * (1 + real_rate)


def build_decumulation_schedule(
    corpus: float,
    first_year_withdrawal: float,
    post_retirement_return_percent: float,
    inflation_percent: float,
    years: int,
    start_age: Optional[int] = None,
    inflation_offset_years: int = 0,
) -> Tuple[DecumulationYear, ...]:
    """
    Simulate yearly withdrawals from a corpus.

    Withdrawals happen at the start of each year and never exceed the balance;
    the rest grows for the year. Once the corpus is exhausted the schedule
    keeps running with zero withdrawals for the full horizon.

    Args:
        corpus: Balance at the start of year 1
        first_year_withdrawal: Withdrawal scheduled for year 1
        post_retirement_return_percent: Annual return on the balance, percent
        inflation_percent: Annual growth of withdrawals, percent
        years: Horizon in whole years
        start_age: Age at the start of year 1; rows are annotated with the
            age reached at the end of each year
        inflation_offset_years: Years already elapsed before year 1, so real
            values are expressed in money of that earlier date

    Returns:
        One DecumulationYear per year
    """
    post_return = post_retirement_return_percent / 100
    balance = max(0.0, corpus)
    scheduled = first_year_withdrawal
    schedule = []

    for year in range(1, int(years) + 1):
        opening_balance = balance
        withdrawal = min(scheduled, opening_balance) if opening_balance > 0 else 0.0
        remaining = max(0.0, opening_balance - withdrawal)
        growth = remaining * post_return
        closing_balance = remaining + growth
        elapsed = inflation_offset_years + year

        schedule.append(
            DecumulationYear(
                year=year,
                opening_balance=opening_balance,
                withdrawal=withdrawal,
                growth_on_balance=growth,
                closing_balance=closing_balance,
                real_opening_balance=deflate(opening_balance, inflation_percent, elapsed),
                real_withdrawal=deflate(withdrawal, inflation_percent, elapsed),
                real_closing_balance=deflate(closing_balance, inflation_percent, elapsed),
                age=None if start_age is None else start_age + year,
            )
        )

        balance = closing_balance
        scheduled *= 1 + inflation_percent / 100

    exhausted = depletion_year(schedule)
    if exhausted is not None:
        logger.debug("Corpus exhausted in year %d of %d", exhausted, len(schedule))
    return tuple(schedule)


def depletion_year(schedule) -> Optional[int]:
    """First year that ends with nothing left, or None if the corpus lasts."""
    for row in schedule:
        if row.closing_balance <= 0:
            return row.year
    return None
