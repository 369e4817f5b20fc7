"""
Rent vs Buy Calculations

Runs two net-worth tracks over the loan tenure:

- Buy: appreciating property minus the outstanding loan and the
  maintenance paid so far.
- Rent: the down payment plus any EMI-over-rent surplus invested every
  year, minus the rent paid so far.
"""

from dataclasses import dataclass
from typing import Tuple

from fincalc.calculations.amortization import (
    MONTHS_PER_YEAR,
    build_amortization_schedule,
    compute_emi,
    growth_factor,
)
from fincalc.calculations.validation import InputValidator


@dataclass(frozen=True)
class RentVsBuyYear:
    """Both scenarios at the end of one year."""

    year: int
    rent_paid: float
    investment_value: float
    emi_paid: float
    remaining_loan: float
    property_value: float
    maintenance_paid: float
    net_worth_rent: float
    net_worth_buy: float


@dataclass(frozen=True)
class RentVsBuyResult:
    """Outcome of both scenarios at the end of the horizon."""

    loan_amount: float
    down_payment: float
    emi: float
    total_rent_paid: float
    investment_value: float
    total_rent_cost: float
    net_worth_rent: float
    total_emi_paid: float
    property_value: float
    total_maintenance_paid: float
    total_buy_cost: float
    net_worth_buy: float
    difference: float  # Buy minus rent
    better_option: str  # "buy" or "rent"
    yearly_breakdown: Tuple[RentVsBuyYear, ...]


def calculate_rent_vs_buy(
    property_value: float,
    down_payment_percent: float,
    annual_rate_percent: float,
    tenure_years: float,
    monthly_rent: float,
    rent_increase_percent: float,
    investment_return_percent: float,
    property_appreciation_percent: float,
    maintenance_percent: float,
) -> RentVsBuyResult:
    """
    Compare buying with a loan against renting and investing the difference.

    Args:
        property_value: Purchase price of the property
        down_payment_percent: Share of the price paid upfront, in percent
        annual_rate_percent: Loan interest rate in percent
        tenure_years: Loan tenure and comparison horizon in whole years
        monthly_rent: Rent in the first year, per month
        rent_increase_percent: Annual rent escalation in percent
        investment_return_percent: Annual return on the renter's portfolio
        property_appreciation_percent: Annual growth of the property value
        maintenance_percent: Yearly maintenance as a percent of property value

    Returns:
        RentVsBuyResult with a yearly breakdown of both tracks

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
    check.rate("investment_return_percent", investment_return_percent)
    check.rate("property_appreciation_percent", property_appreciation_percent)
    check.percentage("maintenance_percent", maintenance_percent)
    check.raise_if_invalid()

    years = int(tenure_years)
    down_payment = property_value * down_payment_percent / 100
    loan_amount = property_value - down_payment
    emi = compute_emi(loan_amount, annual_rate_percent, years)
    amortization = build_amortization_schedule(loan_amount, annual_rate_percent, years)

    rent_growth = rent_increase_percent / 100
    invest_return = investment_return_percent / 100
    appreciation = property_appreciation_percent / 100
    maintenance_rate = maintenance_percent / 100
    annual_emi = emi * MONTHS_PER_YEAR

    rows = []
    total_rent_paid = 0.0
    investment_value = down_payment
    current_value = property_value
    total_maintenance = 0.0
    total_emi_paid = 0.0
    remaining_loan = loan_amount

    for loan_year in amortization:
        year = loan_year.year
        current_rent = monthly_rent * growth_factor(rent_growth, year - 1)
        annual_rent = current_rent * MONTHS_PER_YEAR
        total_rent_paid += annual_rent

        surplus = max(0.0, emi - current_rent) * MONTHS_PER_YEAR
        investment_value = investment_value * (1 + invest_return) + surplus

        total_emi_paid += annual_emi
        remaining_loan = loan_year.closing_balance

        current_value *= 1 + appreciation
        annual_maintenance = current_value * maintenance_rate
        total_maintenance += annual_maintenance

        rows.append(
            RentVsBuyYear(
                year=year,
                rent_paid=annual_rent,
                investment_value=investment_value,
                emi_paid=annual_emi,
                remaining_loan=remaining_loan,
                property_value=current_value,
                maintenance_paid=annual_maintenance,
                net_worth_rent=investment_value - total_rent_paid,
                net_worth_buy=current_value - remaining_loan - total_maintenance,
            )
        )

    net_worth_rent = investment_value - total_rent_paid
    net_worth_buy = current_value - remaining_loan - total_maintenance
    difference = net_worth_buy - net_worth_rent

    return RentVsBuyResult(
        loan_amount=loan_amount,
        down_payment=down_payment,
        emi=emi,
        total_rent_paid=total_rent_paid,
        investment_value=investment_value,
        total_rent_cost=total_rent_paid - investment_value,
        net_worth_rent=net_worth_rent,
        total_emi_paid=total_emi_paid,
        property_value=current_value,
        total_maintenance_paid=total_maintenance,
        total_buy_cost=total_emi_paid + total_maintenance,
        net_worth_buy=net_worth_buy,
        difference=difference,
        better_option="buy" if difference > 0 else "rent",
        yearly_breakdown=tuple(rows),
    )
