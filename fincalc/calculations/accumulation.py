"""
Accumulation Calculations

Growth of SIP, step-up SIP and lumpsum contributions under compound return.
Solves in both directions (target -> contribution, contribution -> time)
and builds year-by-year projections in the two compounding conventions the
calculators use.
"""

import enum
import logging
import math
from dataclasses import dataclass
from itertools import count, islice
from typing import Iterator, Optional, Tuple

import numpy as np

from fincalc.calculations.amortization import MONTHS_PER_YEAR, growth_factor

logger = logging.getLogger(__name__)

# Hard ceiling for the step-up SIP time search: 100 years
MAX_SEARCH_MONTHS = 1200
# Return and step-up rates closer than this use the equal-rate formula
EQUAL_RATE_TOLERANCE = 1e-5


class ContributionMode(str, enum.Enum):
    """How money goes in."""

    sip = "sip"
    stepup = "stepup"
    lumpsum = "lumpsum"


class GoalStatus(str, enum.Enum):
    """Outcome of a time-to-goal search."""

    reached = "reached"
    unreachable = "unreachable"


@dataclass(frozen=True)
class AccumulationYear:
    """Portfolio state at the end of one year."""

    year: int
    invested_this_year: float
    cumulative_invested: float
    corpus_value: float
    real_corpus_value: float
    age: Optional[int] = None
    real_cumulative_invested: Optional[float] = None


@dataclass(frozen=True)
class ContributionRequirement:
    """Contribution needed to hit a target in a fixed time."""

    mode: ContributionMode
    required_monthly: Optional[float]
    required_lumpsum: Optional[float]
    total_invested: float


@dataclass(frozen=True)
class TimeRequirement:
    """Time needed to hit a target with a fixed contribution."""

    mode: ContributionMode
    status: GoalStatus
    months: Optional[float]
    years: Optional[float]
    total_invested: Optional[float]


def monthly_equivalent_rate(annual_percent: float) -> float:
    """Convert an annual rate in percent to the true monthly-equivalent rate."""
    return growth_factor(annual_percent / 100, 1 / MONTHS_PER_YEAR) - 1


def deflate(nominal: float, inflation_percent: float, years: float) -> float:
    """Express a future amount in today's money."""
    factor = growth_factor(inflation_percent / 100, years)
    if not 0 < factor < float("inf"):
        return float("nan")
    return nominal / factor


def _unsolvable(mode: ContributionMode) -> ContributionRequirement:
    nan = float("nan")
    if mode is ContributionMode.lumpsum:
        return ContributionRequirement(mode, None, nan, nan)
    return ContributionRequirement(mode, nan, None, nan)


def required_contribution(
    target: float,
    annual_return_percent: float,
    years: float,
    mode: ContributionMode,
    step_up_percent: float = 0.0,
) -> ContributionRequirement:
    """
    Calculate the contribution that grows to a target.

    SIP and step-up SIP contributions are made at the end of each month and
    compound at the true monthly-equivalent rate. Step-up contributions grow
    every month at the monthly equivalent of the annual step-up.

    Args:
        target: Amount to accumulate
        annual_return_percent: Expected annual return in percent
        years: Investment horizon in years
        mode: sip, stepup or lumpsum
        step_up_percent: Annual contribution growth for step-up SIPs

    Returns:
        ContributionRequirement with the monthly or lumpsum amount populated,
        NaN-valued when the inputs cannot be solved
    """
    mode = ContributionMode(mode)
    months = years * MONTHS_PER_YEAR

    if not (
        0 < target < float("inf")
        and 0 < months < float("inf")
        and annual_return_percent > -100
    ):
        return _unsolvable(mode)

    annual_return = annual_return_percent / 100
    monthly_return = monthly_equivalent_rate(annual_return_percent)

    if mode is ContributionMode.lumpsum:
        lumpsum = target / growth_factor(annual_return, years)
        if not math.isfinite(lumpsum):
            return _unsolvable(mode)
        return ContributionRequirement(mode, None, lumpsum, lumpsum)

    if mode is ContributionMode.sip:
        growth = growth_factor(monthly_return, months) - 1
        if monthly_return == 0 or growth == 0:
            monthly = target / months
        else:
            monthly = target * monthly_return / growth
        if not math.isfinite(monthly):
            return _unsolvable(mode)
        return ContributionRequirement(mode, monthly, None, monthly * months)

    monthly_step_up = monthly_equivalent_rate(step_up_percent)
    if abs(monthly_return - monthly_step_up) < EQUAL_RATE_TOLERANCE:
        logger.debug("Return and step-up rates coincide; using equal-rate formula")
        monthly = target / (months * growth_factor(monthly_return, months - 1))
    else:
        power_r = growth_factor(monthly_return, months)
        power_s = growth_factor(monthly_step_up, months)
        if power_r == power_s:
            return _unsolvable(mode)
        monthly = target * (monthly_return - monthly_step_up) / (power_r - power_s)

    if not math.isfinite(monthly):
        return _unsolvable(mode)
    total_invested = float(np.sum(monthly * (1 + monthly_step_up) ** np.arange(months)))
    return ContributionRequirement(mode, monthly, None, total_invested)


def iter_monthly_growth(
    monthly_amount: float,
    annual_return_percent: float,
    step_up_percent: float = 0.0,
) -> Iterator[Tuple[int, float, float]]:
    """
    Simulate end-of-month contributions forever.

    Yields:
        (month number starting at 1, contribution that month, portfolio value)
    """
    monthly_return = monthly_equivalent_rate(annual_return_percent)
    monthly_step_up = monthly_equivalent_rate(step_up_percent)
    value = 0.0

    for month in count(1):
        contribution = monthly_amount * growth_factor(monthly_step_up, month - 1)
        value = value * (1 + monthly_return) + contribution
        yield month, contribution, value


def _unreachable(mode: ContributionMode) -> TimeRequirement:
    return TimeRequirement(mode, GoalStatus.unreachable, None, None, None)


def required_time(
    contribution: float,
    annual_return_percent: float,
    target: float,
    mode: ContributionMode,
    step_up_percent: float = 0.0,
) -> TimeRequirement:
    """
    Calculate how long a contribution takes to grow to a target.

    Lumpsum and SIP use closed forms. Step-up SIP has no closed form and is
    searched month by month up to MAX_SEARCH_MONTHS.

    Args:
        contribution: Monthly amount (SIP modes) or one-time amount (lumpsum)
        annual_return_percent: Expected annual return in percent
        target: Amount to accumulate
        mode: sip, stepup or lumpsum
        step_up_percent: Annual contribution growth for step-up SIPs

    Returns:
        TimeRequirement; status is unreachable when the target cannot be
        met (non-positive growth, or beyond the search ceiling)
    """
    mode = ContributionMode(mode)
    if not (contribution > 0 and target > 0 and annual_return_percent > -100):
        return _unreachable(mode)

    annual_return = annual_return_percent / 100

    if mode is ContributionMode.lumpsum:
        if contribution >= target:
            years = 0.0
        elif annual_return <= 0:
            return _unreachable(mode)
        else:
            years = math.log(target / contribution) / math.log(1 + annual_return)
        return TimeRequirement(
            mode, GoalStatus.reached, years * MONTHS_PER_YEAR, years, contribution
        )

    if mode is ContributionMode.sip:
        monthly_return = monthly_equivalent_rate(annual_return_percent)
        if monthly_return == 0:
            months = target / contribution
        else:
            growth = 1 + target * monthly_return / contribution
            if growth <= 0:
                return _unreachable(mode)
            months = math.log(growth) / math.log(1 + monthly_return)
        return TimeRequirement(
            mode,
            GoalStatus.reached,
            months,
            months / MONTHS_PER_YEAR,
            contribution * months,
        )

    total_invested = 0.0
    simulation = iter_monthly_growth(contribution, annual_return_percent, step_up_percent)
    for month, amount, value in islice(simulation, MAX_SEARCH_MONTHS):
        total_invested += amount
        if value >= target:
            return TimeRequirement(
                mode,
                GoalStatus.reached,
                month,
                month / MONTHS_PER_YEAR,
                total_invested,
            )

    logger.debug(
        "Step-up SIP of %.2f did not reach %.2f within %d months",
        contribution,
        target,
        MAX_SEARCH_MONTHS,
    )
    return _unreachable(mode)


def build_intra_year_schedule(
    mode: ContributionMode,
    amount: float,
    annual_return_percent: float,
    years: int,
    step_up_percent: float = 0.0,
    inflation_percent: float = 0.0,
) -> Tuple[AccumulationYear, ...]:
    """
    Project a portfolio year by year with intra-year contribution growth.

    Each year the existing balance grows by the full annual return, then each
    month's contribution is added grown for the remaining part of the year.
    Step-up SIPs raise the monthly amount once a year.

    Args:
        mode: sip, stepup or lumpsum
        amount: Monthly amount (SIP modes) or one-time amount (lumpsum)
        annual_return_percent: Expected annual return in percent
        years: Horizon in whole years
        step_up_percent: Annual increase of the monthly amount (stepup only)
        inflation_percent: Used for the real (today's money) value

    Returns:
        One AccumulationYear per year
    """
    mode = ContributionMode(mode)
    annual_return = annual_return_percent / 100
    schedule = []
    value = 0.0
    cumulative = 0.0

    for year in range(1, int(years) + 1):
        if mode is ContributionMode.lumpsum:
            invested = amount if year == 1 else 0.0
            value = (value + invested) * (1 + annual_return)
        else:
            monthly = amount
            if mode is ContributionMode.stepup:
                monthly = amount * growth_factor(step_up_percent / 100, year - 1)
            invested = monthly * MONTHS_PER_YEAR
            value = value * (1 + annual_return)
            for month in range(1, MONTHS_PER_YEAR + 1):
                remaining_fraction = (MONTHS_PER_YEAR - month) / MONTHS_PER_YEAR
                value += monthly * growth_factor(annual_return, remaining_fraction)

        cumulative += invested
        schedule.append(
            AccumulationYear(
                year=year,
                invested_this_year=invested,
                cumulative_invested=cumulative,
                corpus_value=value,
                real_corpus_value=deflate(value, inflation_percent, year),
            )
        )

    return tuple(schedule)


def build_monthly_compounded_schedule(
    mode: ContributionMode,
    amount: float,
    annual_return_percent: float,
    years: int,
    step_up_percent: float = 0.0,
    inflation_percent: float = 0.0,
) -> Tuple[AccumulationYear, ...]:
    """
    Project a portfolio year by year with nominal monthly compounding.

    Contributions are added at the start of each month and compound at
    annual_return / 12; at year end the value is moved from the monthly
    compounding basis back to the true annual rate. Lumpsums compound
    annually.

    Args:
        mode: sip, stepup or lumpsum
        amount: Monthly amount (SIP modes) or one-time amount (lumpsum)
        annual_return_percent: Expected annual return in percent
        years: Horizon in whole years
        step_up_percent: Annual increase of the monthly amount (stepup only)
        inflation_percent: Used for the real (today's money) value

    Returns:
        One AccumulationYear per year
    """
    mode = ContributionMode(mode)
    annual_return = annual_return_percent / 100
    nominal_monthly = annual_return / MONTHS_PER_YEAR
    schedule = []
    value = 0.0
    cumulative = 0.0
    monthly = amount

    for year in range(1, int(years) + 1):
        if mode is ContributionMode.lumpsum:
            invested = amount if year == 1 else 0.0
            value = amount * growth_factor(annual_return, year)
        else:
            invested = 0.0
            for _ in range(MONTHS_PER_YEAR):
                invested += monthly
                value = (value + monthly) * (1 + nominal_monthly)
            value = (
                value
                / growth_factor(nominal_monthly, MONTHS_PER_YEAR)
                * (1 + annual_return)
            )
            if mode is ContributionMode.stepup:
                monthly *= 1 + step_up_percent / 100

        cumulative += invested
        schedule.append(
            AccumulationYear(
                year=year,
                invested_this_year=invested,
                cumulative_invested=cumulative,
                corpus_value=value,
                real_corpus_value=deflate(value, inflation_percent, year),
            )
        )

    return tuple(schedule)
