"""
Loan calculator API endpoints.

EMI and amortization, per-product affordability, the EMI split between rent
and own pocket, and rent vs buy.
"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from fincalc.calculations import affordability, amortization, emi_split, rent_vs_buy
from fincalc.calculations.validation import InputValidator, InvalidInputError

logger = logging.getLogger(__name__)

router = APIRouter()


class LoanInput(BaseModel):
    """Input for EMI and amortization calculation."""

    principal: float = 4_000_000
    annual_rate: float = 8.5
    tenure_years: int = 20


def _validate_loan(inputs: LoanInput) -> None:
    check = InputValidator()
    check.positive("principal", inputs.principal)
    check.interest_rate("annual_rate", inputs.annual_rate)
    check.whole_years("tenure_years", inputs.tenure_years)
    check.raise_if_invalid()


@router.post("/emi")
async def calculate_emi(inputs: LoanInput):
    """Calculate the fixed monthly installment."""
    try:
        _validate_loan(inputs)
    except InvalidInputError as e:
        logger.warning("Rejected emi request: %s", e)
        raise HTTPException(status_code=400, detail=e.errors)

    emi = amortization.compute_emi(
        inputs.principal, inputs.annual_rate, inputs.tenure_years
    )
    months = inputs.tenure_years * amortization.MONTHS_PER_YEAR
    return {
        "emi": emi,
        "total_payable": emi * months,
        "total_interest": emi * months - inputs.principal,
    }


class AmortizationInput(LoanInput):
    """Input for a yearly amortization schedule."""

    clamp_on_zero_balance: bool = False


@router.post("/amortization")
async def calculate_amortization(inputs: AmortizationInput):
    """Generate the yearly loan amortization schedule."""
    try:
        _validate_loan(inputs)
    except InvalidInputError as e:
        logger.warning("Rejected amortization request: %s", e)
        raise HTTPException(status_code=400, detail=e.errors)

    schedule = amortization.build_amortization_schedule(
        inputs.principal,
        inputs.annual_rate,
        inputs.tenure_years,
        clamp_on_zero_balance=inputs.clamp_on_zero_balance,
    )
    return {
        "emi": amortization.compute_emi(
            inputs.principal, inputs.annual_rate, inputs.tenure_years
        ),
        "schedule": schedule,
        "total_interest": amortization.total_interest(schedule),
        "total_principal": sum(row.principal_paid for row in schedule),
    }


@router.get("/products")
async def list_loan_products():
    """List the loan products and their defaults."""
    return list(affordability.LOAN_PRODUCTS.values())


class AffordabilityInput(BaseModel):
    """Input for loan affordability; omitted fields use the product defaults."""

    price: Optional[float] = None
    loan_percentage: Optional[float] = None
    interest_rate: Optional[float] = None
    tenure_years: Optional[int] = None


@router.post("/affordability/{loan_type}")
async def calculate_affordability(loan_type: str, inputs: AffordabilityInput):
    """Calculate EMI, totals, suggested income and the yearly breakdown."""
    try:
        return affordability.calculate_affordability(
            loan_type,
            price=inputs.price,
            loan_percentage=inputs.loan_percentage,
            annual_rate_percent=inputs.interest_rate,
            tenure_years=inputs.tenure_years,
        )
    except InvalidInputError as e:
        logger.warning("Rejected affordability request: %s", e)
        raise HTTPException(status_code=400, detail=e.errors)


class EMISplitInput(BaseModel):
    """Input for the EMI split calculation."""

    property_value: float = 5_000_000
    down_payment_percent: float = 20
    interest_rate: float = 8.5
    tenure_years: int = 20
    # Defaults to a 3% annual rental yield on the property value
    monthly_rent: Optional[float] = None
    rent_increase_percent: float = 8


@router.post("/emi-split")
async def calculate_emi_split(inputs: EMISplitInput):
    """Split each year's EMI between rent received and own pocket."""
    monthly_rent = inputs.monthly_rent
    if monthly_rent is None:
        monthly_rent = emi_split.suggested_monthly_rent(inputs.property_value)

    try:
        return emi_split.calculate_emi_split(
            property_value=inputs.property_value,
            down_payment_percent=inputs.down_payment_percent,
            annual_rate_percent=inputs.interest_rate,
            tenure_years=inputs.tenure_years,
            monthly_rent=monthly_rent,
            rent_increase_percent=inputs.rent_increase_percent,
        )
    except InvalidInputError as e:
        logger.warning("Rejected emi-split request: %s", e)
        raise HTTPException(status_code=400, detail=e.errors)


class RentVsBuyInput(BaseModel):
    """Input for the rent vs buy comparison."""

    property_value: float = 5_000_000
    down_payment_percent: float = 20
    interest_rate: float = 8.5
    tenure_years: int = 20
    monthly_rent: float = 15_000
    rent_increase_percent: float = 5
    investment_return_percent: float = 12
    property_appreciation_percent: float = 6
    maintenance_percent: float = 0.5


@router.post("/rent-vs-buy")
async def calculate_rent_vs_buy(inputs: RentVsBuyInput):
    """Compare net worth after renting and investing vs buying."""
    try:
        return rent_vs_buy.calculate_rent_vs_buy(
            property_value=inputs.property_value,
            down_payment_percent=inputs.down_payment_percent,
            annual_rate_percent=inputs.interest_rate,
            tenure_years=inputs.tenure_years,
            monthly_rent=inputs.monthly_rent,
            rent_increase_percent=inputs.rent_increase_percent,
            investment_return_percent=inputs.investment_return_percent,
            property_appreciation_percent=inputs.property_appreciation_percent,
            maintenance_percent=inputs.maintenance_percent,
        )
    except InvalidInputError as e:
        logger.warning("Rejected rent-vs-buy request: %s", e)
        raise HTTPException(status_code=400, detail=e.errors)
