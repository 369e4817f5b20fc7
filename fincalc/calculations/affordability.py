"""
Loan Affordability

One parameterized calculator for every consumer loan type. Each product is
a small configuration record: default price, loan-to-value percentage,
rate, tenure and the income ratio pair used to suggest a salary band.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from fincalc.calculations.amortization import (
    MONTHS_PER_YEAR,
    AmortizationYear,
    build_amortization_schedule,
    compute_emi,
    suggested_income_range,
)
from fincalc.calculations.validation import InputValidator, InvalidInputError


@dataclass(frozen=True)
class LoanProduct:
    """Per-product defaults and affordability policy."""

    key: str
    title: str
    description: str
    default_price: float
    loan_percentage: Optional[float]  # None: the price is the loan amount
    interest_rate: float  # Annual percent
    tenure_years: int
    step: float  # Suggested input increment for the price field
    income_ratio_aggressive: float  # Max share of income the EMI may take
    income_ratio_conservative: float  # Comfortable share of income
    clamp_on_zero_balance: bool


@dataclass(frozen=True)
class AffordabilityResult:
    """EMI, totals and suggested income for one loan."""

    loan_type: str
    price: float
    loan_amount: float
    down_payment: float
    monthly_emi: float
    total_interest: float
    total_payable: float
    total_cost: float
    suggested_income_min: float
    suggested_income_max: float
    yearly_breakdown: Tuple[AmortizationYear, ...]


LOAN_PRODUCTS: Dict[str, LoanProduct] = {
    "home": LoanProduct(
        key="home",
        title="Home Affordability",
        description="Calculate how much home you can afford based on your income",
        default_price=5_000_000,
        loan_percentage=80,
        interest_rate=8.5,
        tenure_years=20,
        step=100_000,
        income_ratio_aggressive=0.45,
        income_ratio_conservative=0.30,
        clamp_on_zero_balance=False,
    ),
    "car": LoanProduct(
        key="car",
        title="Car Affordability",
        description="Calculate monthly EMI and total cost for your car loan",
        default_price=1_000_000,
        loan_percentage=80,
        interest_rate=8.5,
        tenure_years=5,
        step=50_000,
        income_ratio_aggressive=0.40,
        income_ratio_conservative=0.30,
        clamp_on_zero_balance=False,
    ),
    "education": LoanProduct(
        key="education",
        title="Education Loan",
        description="Calculate EMI and total cost for your education loan",
        default_price=500_000,
        loan_percentage=90,
        interest_rate=9.5,
        tenure_years=10,
        step=50_000,
        income_ratio_aggressive=0.35,
        income_ratio_conservative=0.25,
        clamp_on_zero_balance=True,
    ),
    "personal": LoanProduct(
        key="personal",
        title="Personal Loan",
        description="Calculate EMI and total cost for your personal loan",
        default_price=300_000,
        loan_percentage=None,
        interest_rate=14,
        tenure_years=3,
        step=25_000,
        income_ratio_aggressive=0.30,
        income_ratio_conservative=0.20,
        clamp_on_zero_balance=True,
    ),
    "bike": LoanProduct(
        key="bike",
        title="Two-Wheeler Loan",
        description="Calculate monthly EMI and total cost for your bike loan",
        default_price=150_000,
        loan_percentage=90,
        interest_rate=10,
        tenure_years=3,
        step=10_000,
        income_ratio_aggressive=0.15,
        income_ratio_conservative=0.10,
        clamp_on_zero_balance=True,
    ),
    "phone": LoanProduct(
        key="phone",
        title="Phone Affordability",
        description="Calculate how much phone you can afford based on your income",
        default_price=100_000,
        loan_percentage=100,
        interest_rate=0,  # Promotional no-cost EMI
        tenure_years=1,
        step=10_000,
        income_ratio_aggressive=0.15,
        income_ratio_conservative=0.10,
        clamp_on_zero_balance=True,
    ),
}


def get_loan_product(loan_type: str) -> LoanProduct:
    """Look up a loan product by key."""
    try:
        return LOAN_PRODUCTS[loan_type]
    except KeyError:
        known = ", ".join(sorted(LOAN_PRODUCTS))
        raise InvalidInputError([f"unknown loan type '{loan_type}' (expected {known})"])


def calculate_affordability(
    loan_type: str,
    price: Optional[float] = None,
    loan_percentage: Optional[float] = None,
    annual_rate_percent: Optional[float] = None,
    tenure_years: Optional[float] = None,
) -> AffordabilityResult:
    """
    Calculate EMI, total cost and the income needed to carry a loan.

    Arguments left as None fall back to the product defaults.

    Args:
        loan_type: Product key (home, car, education, personal, bike, phone)
        price: Purchase price, or the loan amount for personal loans
        loan_percentage: Share of the price financed, in percent
        annual_rate_percent: Annual interest rate in percent
        tenure_years: Loan tenure in whole years

    Returns:
        AffordabilityResult with the yearly amortization breakdown

    Raises:
        InvalidInputError: If the loan type or any input is invalid
    """
    product = get_loan_product(loan_type)

    price = product.default_price if price is None else price
    rate = product.interest_rate if annual_rate_percent is None else annual_rate_percent
    tenure = product.tenure_years if tenure_years is None else tenure_years
    if product.loan_percentage is None:
        loan_percent = 100.0
    elif loan_percentage is None:
        loan_percent = product.loan_percentage
    else:
        loan_percent = loan_percentage

    check = InputValidator()
    check.positive("price", price)
    check.interest_rate("annual_rate_percent", rate)
    check.whole_years("tenure_years", tenure)
    check.percentage("loan_percentage", loan_percent)
    check.require(loan_percent != 0, "loan_percentage must be greater than 0")
    check.raise_if_invalid()

    loan_amount = price * loan_percent / 100
    down_payment = price - loan_amount
    months = int(tenure) * MONTHS_PER_YEAR

    monthly_emi = compute_emi(loan_amount, rate, tenure)
    total_payable = monthly_emi * months
    income_min, income_max = suggested_income_range(
        monthly_emi,
        product.income_ratio_aggressive,
        product.income_ratio_conservative,
    )

    return AffordabilityResult(
        loan_type=product.key,
        price=price,
        loan_amount=loan_amount,
        down_payment=down_payment,
        monthly_emi=monthly_emi,
        total_interest=total_payable - loan_amount,
        total_payable=total_payable,
        total_cost=down_payment + total_payable,
        suggested_income_min=income_min,
        suggested_income_max=income_max,
        yearly_breakdown=build_amortization_schedule(
            loan_amount,
            rate,
            int(tenure),
            clamp_on_zero_balance=product.clamp_on_zero_balance,
        ),
    )
