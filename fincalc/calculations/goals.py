"""
Goal Planner Calculations

For a target amount, works out either the contribution needed within a
time frame or the time needed for a given contribution, for each of the
four asset classes.
"""

import enum
from dataclasses import dataclass
from typing import Dict, Optional

from fincalc.calculations.accumulation import (
    ContributionMode,
    GoalStatus,
    required_contribution,
    required_time,
)
from fincalc.calculations.assets import ASSET_NAMES, EXPECTED_RETURNS, resolve_returns
from fincalc.calculations.validation import InputValidator, InvalidInputError


class CalculationMode(str, enum.Enum):
    """What the goal planner solves for."""

    investment = "investment"
    time = "time"


@dataclass(frozen=True)
class GoalResult:
    """Goal plan for one asset class."""

    asset_class: str
    name: str
    target_amount: float
    required_monthly: Optional[float]
    required_lumpsum: Optional[float]
    required_years: Optional[float]
    total_invested: Optional[float]
    total_returns: Optional[float]
    expected_return_percent: float
    status: GoalStatus = GoalStatus.reached


def _parse_mode(mode, check: InputValidator) -> Optional[ContributionMode]:
    try:
        return ContributionMode(mode)
    except ValueError:
        check.fail(f"unknown investment mode '{mode}'")
        return None


def _validate_common(
    check: InputValidator,
    asset_class: str,
    target: float,
    expected_return_percent: float,
    step_up_percent: float,
) -> None:
    check.require(
        asset_class in EXPECTED_RETURNS, f"unknown asset class '{asset_class}'"
    )
    check.positive("target", target)
    check.rate("expected_return_percent", expected_return_percent)
    check.rate("step_up_percent", step_up_percent)


def plan_goal_investment(
    asset_class: str,
    target: float,
    years: float,
    mode: ContributionMode,
    expected_return_percent: Optional[float] = None,
    step_up_percent: float = 0.0,
) -> GoalResult:
    """
    Calculate the contribution needed to reach a target in a fixed time.

    Args:
        asset_class: equity, gold, debt or fd
        target: Goal amount
        years: Time to the goal in years
        mode: sip, stepup or lumpsum
        expected_return_percent: Annual return; defaults to the asset class's
        step_up_percent: Annual contribution growth for step-up SIPs

    Returns:
        GoalResult with required_monthly (SIP modes) or required_lumpsum set

    Raises:
        InvalidInputError: If any input is invalid
    """
    if expected_return_percent is None:
        expected_return_percent = EXPECTED_RETURNS.get(asset_class, 0.0)

    check = InputValidator()
    mode = _parse_mode(mode, check)
    _validate_common(check, asset_class, target, expected_return_percent, step_up_percent)
    check.years("years", years)
    check.raise_if_invalid()

    requirement = required_contribution(
        target, expected_return_percent, years, mode, step_up_percent
    )

    return GoalResult(
        asset_class=asset_class,
        name=ASSET_NAMES[asset_class],
        target_amount=target,
        required_monthly=requirement.required_monthly,
        required_lumpsum=requirement.required_lumpsum,
        required_years=None,
        total_invested=requirement.total_invested,
        total_returns=target - requirement.total_invested,
        expected_return_percent=expected_return_percent,
    )


def plan_goal_time(
    asset_class: str,
    target: float,
    mode: ContributionMode,
    monthly_amount: Optional[float] = None,
    lumpsum_amount: Optional[float] = None,
    expected_return_percent: Optional[float] = None,
    step_up_percent: float = 0.0,
) -> GoalResult:
    """
    Calculate how long a contribution takes to reach a target.

    Args:
        asset_class: equity, gold, debt or fd
        target: Goal amount
        mode: sip, stepup or lumpsum
        monthly_amount: Monthly contribution (SIP modes)
        lumpsum_amount: One-time contribution (lumpsum mode)
        expected_return_percent: Annual return; defaults to the asset class's
        step_up_percent: Annual contribution growth for step-up SIPs

    Returns:
        GoalResult with required_years set, or status unreachable with no
        year count when the goal cannot be met within 100 years

    Raises:
        InvalidInputError: If any input is invalid
    """
    if expected_return_percent is None:
        expected_return_percent = EXPECTED_RETURNS.get(asset_class, 0.0)

    check = InputValidator()
    mode = _parse_mode(mode, check)
    _validate_common(check, asset_class, target, expected_return_percent, step_up_percent)
    if mode is ContributionMode.lumpsum:
        check.positive("lumpsum_amount", lumpsum_amount)
        contribution = lumpsum_amount
    else:
        check.positive("monthly_amount", monthly_amount)
        contribution = monthly_amount
    check.raise_if_invalid()

    outcome = required_time(
        contribution, expected_return_percent, target, mode, step_up_percent
    )
    total_returns = None
    if outcome.total_invested is not None:
        total_returns = target - outcome.total_invested

    return GoalResult(
        asset_class=asset_class,
        name=ASSET_NAMES[asset_class],
        target_amount=target,
        required_monthly=None if mode is ContributionMode.lumpsum else contribution,
        required_lumpsum=contribution if mode is ContributionMode.lumpsum else None,
        required_years=outcome.years,
        total_invested=outcome.total_invested,
        total_returns=total_returns,
        expected_return_percent=expected_return_percent,
        status=outcome.status,
    )


def compare_goal_across_assets(
    target: float,
    mode: ContributionMode,
    calculation: CalculationMode = CalculationMode.investment,
    years: Optional[float] = None,
    monthly_amount: Optional[float] = None,
    lumpsum_amount: Optional[float] = None,
    step_up_percent: float = 0.0,
    returns: Optional[Dict[str, float]] = None,
) -> Dict[str, GoalResult]:
    """
    Run the goal plan for every asset class.

    Args:
        target: Goal amount
        mode: sip, stepup or lumpsum
        calculation: Solve for the investment amount or for the time
        years: Time to the goal (investment calculation)
        monthly_amount: Monthly contribution (time calculation, SIP modes)
        lumpsum_amount: One-time contribution (time calculation, lumpsum)
        step_up_percent: Annual contribution growth for step-up SIPs
        returns: Expected return overrides keyed by asset class

    Returns:
        GoalResult per asset class, in equity, gold, debt, fd order
    """
    try:
        calculation = CalculationMode(calculation)
    except ValueError:
        raise InvalidInputError([f"unknown calculation mode '{calculation}'"])

    rates = resolve_returns(returns)
    results = {}
    for asset_class, rate in rates.items():
        if calculation is CalculationMode.investment:
            results[asset_class] = plan_goal_investment(
                asset_class, target, years, mode, rate, step_up_percent
            )
        else:
            results[asset_class] = plan_goal_time(
                asset_class,
                target,
                mode,
                monthly_amount=monthly_amount,
                lumpsum_amount=lumpsum_amount,
                expected_return_percent=rate,
                step_up_percent=step_up_percent,
            )
    return results
