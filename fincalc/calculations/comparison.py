"""
Investment Comparison Calculations

Two ways to compare projections:

- Across asset classes: the same contribution plan run against the four
  asset classes and ranked by maturity value.
- Head to head: two independently configured plans, nominal and
  inflation-adjusted.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from fincalc.calculations.accumulation import (
    AccumulationYear,
    ContributionMode,
    build_intra_year_schedule,
    build_monthly_compounded_schedule,
    deflate,
)
from fincalc.calculations.assets import ASSET_NAMES, resolve_returns
from fincalc.calculations.validation import InputValidator


@dataclass(frozen=True)
class InvestmentInputs:
    """One contribution plan."""

    mode: ContributionMode
    amount: float  # Monthly amount for SIP modes, one-time amount for lumpsum
    annual_return_percent: float
    years: int
    step_up_percent: float = 0.0


@dataclass(frozen=True)
class InvestmentProjection:
    """Summary of one projected plan."""

    name: str
    annual_return_percent: float
    total_invested: float
    maturity_amount: float
    total_returns: float
    absolute_returns_percent: float
    real_maturity_amount: float
    real_total_returns: float
    real_absolute_returns_percent: float
    yearly_breakdown: Tuple[AccumulationYear, ...]


@dataclass(frozen=True)
class AssetComparison:
    """The same plan across every asset class."""

    mode: ContributionMode
    years: int
    projections: Dict[str, InvestmentProjection]
    ranking: Tuple[str, ...]  # Asset classes, highest maturity first
    best_asset_class: str


@dataclass(frozen=True)
class ProjectionDifference:
    """First plan minus second; percentages are relative to the second."""

    invested: float
    maturity: float
    returns: float
    real_maturity: float
    real_returns: float
    invested_percent: Optional[float]
    maturity_percent: Optional[float]
    returns_percent: Optional[float]
    real_maturity_percent: Optional[float]
    real_returns_percent: Optional[float]


@dataclass(frozen=True)
class TwoInvestmentComparison:
    """Head-to-head comparison of two plans."""

    inflation_percent: float
    first: InvestmentProjection
    second: InvestmentProjection
    difference: ProjectionDifference


def summarize_projection(
    name: str,
    annual_return_percent: float,
    schedule: Tuple[AccumulationYear, ...],
    inflation_percent: float = 0.0,
) -> InvestmentProjection:
    """Collapse a yearly schedule into maturity and return figures."""
    last = schedule[-1]
    total_invested = last.cumulative_invested
    maturity = last.corpus_value
    real_maturity = deflate(maturity, inflation_percent, last.year)

    return InvestmentProjection(
        name=name,
        annual_return_percent=annual_return_percent,
        total_invested=total_invested,
        maturity_amount=maturity,
        total_returns=maturity - total_invested,
        absolute_returns_percent=(maturity - total_invested) / total_invested * 100,
        real_maturity_amount=real_maturity,
        real_total_returns=real_maturity - total_invested,
        real_absolute_returns_percent=(
            (real_maturity - total_invested) / total_invested * 100
        ),
        yearly_breakdown=schedule,
    )


def _validate_plan(
    check: InputValidator, label: str, mode, amount, years, step_up_percent
) -> Optional[ContributionMode]:
    check.positive(f"{label}amount", amount)
    check.whole_years(f"{label}years", years)
    check.rate(f"{label}step_up_percent", step_up_percent)
    try:
        return ContributionMode(mode)
    except ValueError:
        check.fail(f"{label}unknown investment mode '{mode}'")
        return None


def compare_asset_classes(
    mode: ContributionMode,
    amount: float,
    years: int,
    step_up_percent: float = 0.0,
    returns: Optional[Dict[str, float]] = None,
) -> AssetComparison:
    """
    Project one contribution plan across equity, gold, debt and fixed deposit.

    Uses intra-year contribution growth (see build_intra_year_schedule).

    Args:
        mode: sip, stepup or lumpsum
        amount: Monthly amount for SIP modes, one-time amount for lumpsum
        years: Horizon in whole years
        step_up_percent: Annual increase of the monthly amount (stepup only)
        returns: Expected return overrides keyed by asset class

    Returns:
        AssetComparison with every projection and the ranking

    Raises:
        InvalidInputError: If any input is invalid
    """
    check = InputValidator()
    mode = _validate_plan(check, "", mode, amount, years, step_up_percent)
    check.raise_if_invalid()
    rates = resolve_returns(returns)

    projections = {}
    for asset_class, rate in rates.items():
        schedule = build_intra_year_schedule(
            mode, amount, rate, int(years), step_up_percent
        )
        projections[asset_class] = summarize_projection(
            ASSET_NAMES[asset_class], rate, schedule
        )

    ranking = tuple(
        sorted(
            projections,
            key=lambda key: projections[key].maturity_amount,
            reverse=True,
        )
    )
    return AssetComparison(
        mode=mode,
        years=int(years),
        projections=projections,
        ranking=ranking,
        best_asset_class=ranking[0],
    )


def _relative(first: float, second: float) -> Optional[float]:
    if second == 0:
        return None
    return (first - second) / second * 100


def compare_two_investments(
    first: InvestmentInputs,
    second: InvestmentInputs,
    inflation_percent: float = 0.0,
) -> TwoInvestmentComparison:
    """
    Compare two contribution plans in nominal and real terms.

    Uses monthly compounding corrected to the annual rate
    (see build_monthly_compounded_schedule).

    Args:
        first: The plan being evaluated
        second: The reference plan
        inflation_percent: Annual inflation for real values

    Returns:
        TwoInvestmentComparison with both projections and their difference

    Raises:
        InvalidInputError: If either plan or the inflation rate is invalid
    """
    check = InputValidator()
    modes = []
    for label, plan in (("first.", first), ("second.", second)):
        modes.append(
            _validate_plan(
                check, label, plan.mode, plan.amount, plan.years, plan.step_up_percent
            )
        )
        check.rate(f"{label}annual_return_percent", plan.annual_return_percent)
    check.rate("inflation_percent", inflation_percent)
    check.raise_if_invalid()

    projections = []
    plans = (("Investment 1", first), ("Investment 2", second))
    for (name, plan), mode in zip(plans, modes):
        schedule = build_monthly_compounded_schedule(
            mode,
            plan.amount,
            plan.annual_return_percent,
            int(plan.years),
            plan.step_up_percent,
            inflation_percent,
        )
        projections.append(
            summarize_projection(
                name, plan.annual_return_percent, schedule, inflation_percent
            )
        )

    one, two = projections
    return TwoInvestmentComparison(
        inflation_percent=inflation_percent,
        first=one,
        second=two,
        difference=ProjectionDifference(
            invested=one.total_invested - two.total_invested,
            maturity=one.maturity_amount - two.maturity_amount,
            returns=one.total_returns - two.total_returns,
            real_maturity=one.real_maturity_amount - two.real_maturity_amount,
            real_returns=one.real_total_returns - two.real_total_returns,
            invested_percent=_relative(one.total_invested, two.total_invested),
            maturity_percent=_relative(one.maturity_amount, two.maturity_amount),
            returns_percent=_relative(one.total_returns, two.total_returns),
            real_maturity_percent=_relative(
                one.real_maturity_amount, two.real_maturity_amount
            ),
            real_returns_percent=_relative(
                one.real_total_returns, two.real_total_returns
            ),
        ),
    )
