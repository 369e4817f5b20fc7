"""
Retirement planner API endpoint.
"""

import logging

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from fincalc.calculations.retirement import plan_retirement
from fincalc.calculations.validation import InvalidInputError

logger = logging.getLogger(__name__)

router = APIRouter()


class RetirementInput(BaseModel):
    """Input for the retirement planner."""

    current_age: int = 30
    retirement_age: int = 60
    life_expectancy: int = 85
    monthly_expenses: float = 50_000
    inflation_rate: float = 6
    pre_retirement_return: float = 12
    post_retirement_return: float = 8
    current_savings: float = 0


@router.post("/plan")
async def create_retirement_plan(inputs: RetirementInput):
    """Calculate the corpus, the monthly SIP and both phase projections."""
    try:
        return plan_retirement(
            current_age=inputs.current_age,
            retirement_age=inputs.retirement_age,
            life_expectancy=inputs.life_expectancy,
            current_monthly_expenses=inputs.monthly_expenses,
            inflation_percent=inputs.inflation_rate,
            pre_retirement_return_percent=inputs.pre_retirement_return,
            post_retirement_return_percent=inputs.post_retirement_return,
            current_savings=inputs.current_savings,
        )
    except InvalidInputError as e:
        logger.warning("Rejected retirement request: %s", e)
        raise HTTPException(status_code=400, detail=e.errors)
