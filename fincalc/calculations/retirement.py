"""
Retirement Planner Calculations

Joins the two phases of a retirement plan at the retirement age:

1. Size the corpus that funds inflation-growing expenses through life
   expectancy (annuity due on the real post-retirement return).
2. Work out the monthly SIP that closes the gap between that corpus and
   what current savings will grow to.
3. Project the accumulation phase year by year.
4. Project the withdrawal phase year by year from the required corpus.

Every row carries both nominal and real (today's money) values.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from fincalc.calculations.accumulation import AccumulationYear, deflate
from fincalc.calculations.amortization import MONTHS_PER_YEAR, growth_factor
from fincalc.calculations.decumulation import (
    DecumulationYear,
    build_decumulation_schedule,
    depletion_year,
    required_corpus,
)
from fincalc.calculations.validation import InputValidator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RetirementPlan:
    """Corpus target, required savings and both phase projections."""

    current_age: int
    retirement_age: int
    life_expectancy: int
    years_to_retirement: int
    years_in_retirement: int
    required_corpus: float
    required_corpus_real: float
    future_value_of_savings: float
    corpus_gap: float
    monthly_investment_needed: float
    total_investment: float
    total_returns: float
    inflation_adjusted_expenses: float  # Monthly, at retirement
    annual_expenses_at_retirement: float
    current_expenses_equivalent: float
    depletion_age: Optional[int]
    accumulation: Tuple[AccumulationYear, ...]
    decumulation: Tuple[DecumulationYear, ...]


def monthly_sip_for_future_value(
    future_value: float, annual_return_percent: float, months: int
) -> float:
    """
    Monthly SIP, paid at the start of each month, that grows to a future value.

    Compounds at annual_return / 12 (future value of an annuity due).
    """
    monthly_rate = annual_return_percent / 100 / MONTHS_PER_YEAR
    if monthly_rate == 0:
        return future_value / months
    growth = growth_factor(monthly_rate, months)
    return future_value / ((growth - 1) / monthly_rate * (1 + monthly_rate))


def _validate(
    current_age,
    retirement_age,
    life_expectancy,
    current_monthly_expenses,
    inflation_percent,
    pre_retirement_return_percent,
    post_retirement_return_percent,
    current_savings,
) -> None:
    check = InputValidator()
    check.non_negative("current_age", current_age)
    check.positive("retirement_age", retirement_age)
    check.positive("life_expectancy", life_expectancy)
    check.positive("current_monthly_expenses", current_monthly_expenses)
    check.rate("inflation_percent", inflation_percent)
    check.rate("pre_retirement_return_percent", pre_retirement_return_percent)
    check.rate("post_retirement_return_percent", post_retirement_return_percent)
    check.non_negative("current_savings", current_savings)
    check.raise_if_invalid()

    check.whole_years("years to retirement", retirement_age - current_age)
    check.whole_years("years in retirement", life_expectancy - retirement_age)
    check.raise_if_invalid()


def plan_retirement(
    current_age: int,
    retirement_age: int,
    life_expectancy: int,
    current_monthly_expenses: float,
    inflation_percent: float,
    pre_retirement_return_percent: float,
    post_retirement_return_percent: float,
    current_savings: float = 0.0,
) -> RetirementPlan:
    """
    Build a full retirement plan.

    Args:
        current_age: Age today
        retirement_age: Age at which withdrawals start
        life_expectancy: Age the corpus must last to
        current_monthly_expenses: Monthly expenses in today's money
        inflation_percent: Annual inflation in percent
        pre_retirement_return_percent: Annual return while saving
        post_retirement_return_percent: Annual return while withdrawing
        current_savings: Amount already invested today

    Returns:
        RetirementPlan

    Raises:
        InvalidInputError: If any input is invalid or the ages are out of order
    """
    _validate(
        current_age,
        retirement_age,
        life_expectancy,
        current_monthly_expenses,
        inflation_percent,
        pre_retirement_return_percent,
        post_retirement_return_percent,
        current_savings,
    )

    years_to_retirement = int(retirement_age - current_age)
    years_in_retirement = int(life_expectancy - retirement_age)
    inflation = inflation_percent / 100
    pre_return = pre_retirement_return_percent / 100

    monthly_expenses_at_retirement = (
        current_monthly_expenses * growth_factor(inflation, years_to_retirement)
    )
    annual_expenses = monthly_expenses_at_retirement * MONTHS_PER_YEAR

    corpus = required_corpus(
        annual_expenses,
        post_retirement_return_percent,
        inflation_percent,
        years_in_retirement,
    )

    savings_at_retirement = current_savings * growth_factor(
        pre_return, years_to_retirement
    )
    corpus_gap = max(0.0, corpus - savings_at_retirement)
    months = years_to_retirement * MONTHS_PER_YEAR
    monthly_sip = monthly_sip_for_future_value(
        corpus_gap, pre_retirement_return_percent, months
    )
    total_investment = monthly_sip * months + current_savings

    accumulation = []
    corpus_value = current_savings
    total_invested = current_savings
    yearly_investment = monthly_sip * MONTHS_PER_YEAR

    for year in range(1, years_to_retirement + 1):
        total_invested += yearly_investment
        # Contributions made at the start of the year grow for the full year
        corpus_value = (corpus_value + yearly_investment) * (1 + pre_return)
        accumulation.append(
            AccumulationYear(
                year=year,
                invested_this_year=yearly_investment,
                cumulative_invested=total_invested,
                corpus_value=corpus_value,
                real_corpus_value=deflate(corpus_value, inflation_percent, year),
                age=int(current_age) + year,
                real_cumulative_invested=deflate(
                    total_invested, inflation_percent, year
                ),
            )
        )

    decumulation = build_decumulation_schedule(
        corpus,
        annual_expenses,
        post_retirement_return_percent,
        inflation_percent,
        years_in_retirement,
        start_age=int(retirement_age),
        inflation_offset_years=years_to_retirement,
    )

    depleted = depletion_year(decumulation)
    # Funds that run dry before the final year mean the corpus falls short
    if depleted is not None and depleted < years_in_retirement:
        logger.info(
            "Required corpus depleted at age %d, before life expectancy %d",
            int(retirement_age) + depleted,
            int(life_expectancy),
        )

    return RetirementPlan(
        current_age=int(current_age),
        retirement_age=int(retirement_age),
        life_expectancy=int(life_expectancy),
        years_to_retirement=years_to_retirement,
        years_in_retirement=years_in_retirement,
        required_corpus=corpus,
        required_corpus_real=deflate(corpus, inflation_percent, years_to_retirement),
        future_value_of_savings=savings_at_retirement,
        corpus_gap=corpus_gap,
        monthly_investment_needed=monthly_sip,
        total_investment=total_investment,
        total_returns=corpus - total_investment,
        inflation_adjusted_expenses=monthly_expenses_at_retirement,
        annual_expenses_at_retirement=annual_expenses,
        current_expenses_equivalent=current_monthly_expenses,
        depletion_age=None if depleted is None else int(retirement_age) + depleted,
        accumulation=tuple(accumulation),
        decumulation=decumulation,
    )
