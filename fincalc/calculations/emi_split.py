"""
EMI Split Calculations

Splits a flat loan EMI between rent received on the property and the
owner's own pocket, with rent escalating every year.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from fincalc.calculations.amortization import (
    MONTHS_PER_YEAR,
    AmortizationYear,
    build_amortization_schedule,
    compute_emi,
    growth_factor,
)
from fincalc.calculations.validation import InputValidator

# Gross rental yield used to suggest a starting rent
DEFAULT_RENTAL_YIELD = 0.03


@dataclass(frozen=True)
class EMISplitYear:
    """How one year's EMI is covered."""

    year: int
    monthly_rent: float
    rent_covered: float  # Monthly EMI share paid by rent
    own_pocket: float  # Monthly EMI share paid by the owner
    yearly_rent: float
    yearly_own_pocket: float


@dataclass(frozen=True)
class EMISplitResult:
    """EMI split summary and yearly breakdown."""

    property_value: float
    loan_amount: float
    down_payment: float
    emi: float
    first_year_rent: float
    first_year_own_pocket: float
    total_rent_received: float
    total_own_pocket: float
    total_emi_paid: float
    rent_percentage: float
    own_pocket_percentage: float
    break_even_year: Optional[int]
    break_even_month: Optional[int]
    yearly_breakdown: Tuple[EMISplitYear, ...]
    amortization: Tuple[AmortizationYear, ...]


def suggested_monthly_rent(property_value: float) -> float:
    """Starting rent implied by the default gross rental yield."""
    return property_value * DEFAULT_RENTAL_YIELD / MONTHS_PER_YEAR


def calculate_emi_split(
    property_value: float,
    down_payment_percent: float,
    annual_rate_percent: float,
    tenure_years: float,
    monthly_rent: float,
    rent_increase_percent: float,
) -> EMISplitResult:
    """
    Calculate how much of the EMI rent covers over the loan tenure.

    Args:
        property_value: Purchase price of the property
        down_payment_percent: Share of the price paid upfront, in percent
        annual_rate_percent: Loan interest rate in percent
        tenure_years: Loan tenure in whole years
        monthly_rent: Rent received in the first year, per month
        rent_increase_percent: Annual rent escalation in percent

    Returns:
        EMISplitResult; break-even fields are None if rent never covers the EMI

    Raises:
        InvalidInputError: If any input is invalid
    """
    check = InputValidator()
    check.positive("property_value", property_value)
    check.percentage("down_payment_percent", down_payment_percent)
    check.require(
        down_payment_percent != 100, "down_payment_percent must leave a loan amount"
    )
    check.interest_rate("annual_rate_percent", annual_rate_percent)
    check.whole_years("tenure_years", tenure_years)
    check.non_negative("monthly_rent", monthly_rent)
    check.rate("rent_increase_percent", rent_increase_percent)
    check.raise_if_invalid()

    years = int(tenure_years)
    loan_amount = property_value * (1 - down_payment_percent / 100)
    emi = compute_emi(loan_amount, annual_rate_percent, years)
    rent_growth = rent_increase_percent / 100

    rows = []
    total_rent = 0.0
    total_own_pocket = 0.0
    break_even_year = None

    for year in range(1, years + 1):
        current_rent = monthly_rent * growth_factor(rent_growth, year - 1)
        if break_even_year is None and current_rent >= emi:
            break_even_year = year

        rent_covered = min(current_rent, emi)
        own_pocket = max(0.0, emi - current_rent)
        yearly_rent = rent_covered * MONTHS_PER_YEAR
        yearly_own_pocket = own_pocket * MONTHS_PER_YEAR
        total_rent += yearly_rent
        total_own_pocket += yearly_own_pocket

        rows.append(
            EMISplitYear(
                year=year,
                monthly_rent=current_rent,
                rent_covered=rent_covered,
                own_pocket=own_pocket,
                yearly_rent=yearly_rent,
                yearly_own_pocket=yearly_own_pocket,
            )
        )

    total_emi_paid = emi * MONTHS_PER_YEAR * years
    # Rent only rises at year boundaries, so it covers the EMI from the first
    # month of the break-even year
    break_even_month = None if break_even_year is None else 1

    return EMISplitResult(
        property_value=property_value,
        loan_amount=loan_amount,
        down_payment=property_value - loan_amount,
        emi=emi,
        first_year_rent=min(monthly_rent, emi),
        first_year_own_pocket=max(0.0, emi - monthly_rent),
        total_rent_received=total_rent,
        total_own_pocket=total_own_pocket,
        total_emi_paid=total_emi_paid,
        rent_percentage=total_rent / total_emi_paid * 100,
        own_pocket_percentage=total_own_pocket / total_emi_paid * 100,
        break_even_year=break_even_year,
        break_even_month=break_even_month,
        yearly_breakdown=tuple(rows),
        amortization=build_amortization_schedule(
            loan_amount, annual_rate_percent, years
        ),
    )
