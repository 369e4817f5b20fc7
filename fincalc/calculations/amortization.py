"""
Loan Amortization Calculations

Implements the equal monthly installment (EMI) and the year-by-year
principal/interest breakdown shared by every loan-backed calculator.
"""

import logging
import math
from dataclasses import dataclass
from typing import Tuple

logger = logging.getLogger(__name__)

MONTHS_PER_YEAR = 12


def growth_factor(rate: float, periods: float) -> float:
    """
    Compound growth (1 + rate) ** periods.

    Returns NaN instead of raising when the base is not positive or the
    result is too large for a float.
    """
    base = 1 + rate
    if not base > 0:
        return float("nan")
    try:
        return base ** periods
    except OverflowError:
        return float("nan")



@dataclass(frozen=True)
class AmortizationYear:
    """One year of an amortization schedule."""

    year: int
    opening_balance: float
    principal_paid: float
    interest_paid: float
    closing_balance: float


def compute_emi(
    principal: float, annual_rate_percent: float, tenure_years: float
) -> float:
    """
    Calculate the equal monthly installment for a loan.

    Uses the standard annuity formula, falling back to straight-line
    repayment when the rate is zero.

    Args:
        principal: Loan amount
        annual_rate_percent: Annual interest rate in percent (e.g., 8.5)
        tenure_years: Loan tenure in years

    Returns:
        Monthly payment, or NaN when the inputs cannot describe a loan
    """
    months = tenure_years * MONTHS_PER_YEAR
    if not (0 < principal < float("inf") and annual_rate_percent >= 0):
        return float("nan")
    if not 0 < months < float("inf"):
        return float("nan")

    monthly_rate = annual_rate_percent / 100 / MONTHS_PER_YEAR

    growth = growth_factor(monthly_rate, months)
    if monthly_rate == 0 or growth == 1:
        return principal / months

    emi = principal * monthly_rate * growth / (growth - 1)
    return emi if math.isfinite(emi) else float("nan")


def build_amortization_schedule(
    principal: float,
    annual_rate_percent: float,
    tenure_years: int,
    clamp_on_zero_balance: bool = False,
) -> Tuple[AmortizationYear, ...]:
    """
    Generate a yearly amortization schedule by simulating monthly payments.

    Args:
        principal: Loan amount
        annual_rate_percent: Annual interest rate in percent
        tenure_years: Loan tenure in whole years
        clamp_on_zero_balance: Stop taking payments within a year once the
            balance is exhausted instead of always running 12 months

    Returns:
        One record per year of tenure; empty when the inputs are invalid
    """
    emi = compute_emi(principal, annual_rate_percent, tenure_years)
    if math.isnan(emi):
        return ()

    monthly_rate = annual_rate_percent / 100 / MONTHS_PER_YEAR
    balance = principal
    opening_balance = principal
    schedule = []

    for year in range(1, int(tenure_years) + 1):
        yearly_principal = 0.0
        yearly_interest = 0.0

        for _ in range(MONTHS_PER_YEAR):
            if clamp_on_zero_balance and balance <= 0:
                break
            interest = balance * monthly_rate
            principal_pmt = emi - interest
            yearly_interest += interest
            yearly_principal += principal_pmt
            balance -= principal_pmt

        closing_balance = max(0.0, balance)
        schedule.append(
            AmortizationYear(
                year=year,
                opening_balance=opening_balance,
                principal_paid=yearly_principal,
                interest_paid=yearly_interest,
                closing_balance=closing_balance,
            )
        )
        opening_balance = closing_balance

    logger.debug(
        "Built %d-year amortization schedule (EMI %.2f, clamp=%s)",
        len(schedule),
        emi,
        clamp_on_zero_balance,
    )
    return tuple(schedule)


def total_interest(schedule: Tuple[AmortizationYear, ...]) -> float:
    """Calculate total interest paid over the schedule."""
    return sum(row.interest_paid for row in schedule)


def suggested_income_range(
    emi: float, aggressive_ratio: float, conservative_ratio: float
) -> Tuple[float, float]:
    """
    Calculate the monthly income band that supports an EMI.

    Args:
        emi: Monthly installment
        aggressive_ratio: Largest share of income the EMI may take (e.g., 0.45)
        conservative_ratio: Comfortable share of income (e.g., 0.30)

    Returns:
        (minimum income, comfortable income)
    """
    return emi / aggressive_ratio, emi / conservative_ratio
