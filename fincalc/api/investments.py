"""
Investment calculator API endpoints.

Goal planning across asset classes, the four-asset comparison and the
head-to-head comparison of two plans.
"""

import logging
from typing import Dict, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from fincalc.calculations import comparison, goals
from fincalc.calculations.accumulation import ContributionMode
from fincalc.calculations.validation import InvalidInputError

logger = logging.getLogger(__name__)

router = APIRouter()


class GoalInput(BaseModel):
    """Input for the goal planner."""

    target_amount: float = 5_000_000
    mode: ContributionMode = ContributionMode.sip
    calculation: goals.CalculationMode = goals.CalculationMode.investment

    # Investment calculation
    years: float = 10

    # Time calculation
    monthly_amount: float = 10_000
    lumpsum_amount: float = 500_000

    step_up_percent: float = 10
    # Expected return overrides keyed by asset class (equity, gold, debt, fd)
    returns: Optional[Dict[str, float]] = None


@router.post("/goal")
async def plan_goal(inputs: GoalInput):
    """Plan a goal for every asset class."""
    try:
        return goals.compare_goal_across_assets(
            target=inputs.target_amount,
            mode=inputs.mode,
            calculation=inputs.calculation,
            years=inputs.years,
            monthly_amount=inputs.monthly_amount,
            lumpsum_amount=inputs.lumpsum_amount,
            step_up_percent=inputs.step_up_percent,
            returns=inputs.returns,
        )
    except InvalidInputError as e:
        logger.warning("Rejected goal request: %s", e)
        raise HTTPException(status_code=400, detail=e.errors)


class ComparisonInput(BaseModel):
    """Input for the four-asset comparison."""

    mode: ContributionMode = ContributionMode.sip
    # Defaults to 10,000 a month, or 100,000 once for lumpsum
    amount: Optional[float] = None
    years: int = 10
    step_up_percent: float = 10
    returns: Optional[Dict[str, float]] = None


@router.post("/comparison")
async def compare_asset_classes(inputs: ComparisonInput):
    """Project one plan across equity, gold, debt and fixed deposit."""
    amount = inputs.amount
    if amount is None:
        amount = 100_000 if inputs.mode is ContributionMode.lumpsum else 10_000

    try:
        return comparison.compare_asset_classes(
            inputs.mode,
            amount,
            inputs.years,
            step_up_percent=inputs.step_up_percent,
            returns=inputs.returns,
        )
    except InvalidInputError as e:
        logger.warning("Rejected comparison request: %s", e)
        raise HTTPException(status_code=400, detail=e.errors)


class PlanInput(BaseModel):
    """One side of the head-to-head comparison."""

    mode: ContributionMode = ContributionMode.sip
    amount: float = 10_000
    annual_return: float = 12
    years: int = 10
    step_up_percent: float = 10

    def to_inputs(self) -> comparison.InvestmentInputs:
        return comparison.InvestmentInputs(
            mode=self.mode,
            amount=self.amount,
            annual_return_percent=self.annual_return,
            years=self.years,
            step_up_percent=self.step_up_percent,
        )


class TwoInvestmentInput(BaseModel):
    """Input for the head-to-head comparison."""

    first: PlanInput = PlanInput()
    second: PlanInput = PlanInput(annual_return=10)
    inflation_rate: float = 6


@router.post("/comparison-two")
async def compare_two_investments(inputs: TwoInvestmentInput):
    """Compare two plans in nominal and inflation-adjusted terms."""
    try:
        return comparison.compare_two_investments(
            inputs.first.to_inputs(),
            inputs.second.to_inputs(),
            inflation_percent=inputs.inflation_rate,
        )
    except InvalidInputError as e:
        logger.warning("Rejected comparison-two request: %s", e)
        raise HTTPException(status_code=400, detail=e.errors)
