"""
Tests for the accumulation engine.
"""

import math
from itertools import islice

import pytest

from fincalc.calculations.accumulation import (
    MAX_SEARCH_MONTHS,
    ContributionMode,
    GoalStatus,
    build_intra_year_schedule,
    build_monthly_compounded_schedule,
    deflate,
    iter_monthly_growth,
    monthly_equivalent_rate,
    required_contribution,
    required_time,
)


def value_after(monthly, annual_return, months, step_up=0.0):
    """Portfolio value after a number of simulated months."""
    *_, (_, _, value) = islice(
        iter_monthly_growth(monthly, annual_return, step_up), months
    )
    return value


class TestRates:
    """Test rate conversions."""

    def test_monthly_equivalent_rate(self):
        """Test 12% a year is about 0.9489% a month."""
        assert abs(monthly_equivalent_rate(12) - 0.009489) < 1e-6

    def test_monthly_rate_compounds_back_to_annual(self):
        """Test twelve monthly periods give back the annual rate."""
        monthly = monthly_equivalent_rate(7)
        assert abs((1 + monthly) ** 12 - 1.07) < 1e-12

    def test_deflate(self):
        """Test real value divides by compounded inflation."""
        assert deflate(1_000_000, 6, 10) == pytest.approx(1_000_000 / 1.06 ** 10)
        assert deflate(500, 0, 30) == 500

    def test_rate_at_or_below_minus_100_is_nan(self):
        """Test a rate that wipes out the base gives NaN, not a complex number."""
        assert math.isnan(monthly_equivalent_rate(-100))
        assert math.isnan(monthly_equivalent_rate(-150))

    def test_deflate_over_huge_horizon_is_nan(self):
        """Test inflation compounded past float range gives NaN."""
        assert math.isnan(deflate(1_000_000, 6, 100_000))


class TestRequiredContribution:
    """Test the contribution needed to reach a target."""

    def test_lumpsum_present_value(self):
        """Test lumpsum is the discounted target."""
        result = required_contribution(1_000_000, 10, 2, ContributionMode.lumpsum)
        assert abs(result.required_lumpsum - 826_446.28) < 0.01
        assert result.required_monthly is None
        assert result.total_invested == result.required_lumpsum

    def test_sip_reaches_target(self):
        """Test the required SIP grows back to the target."""
        result = required_contribution(1_000_000, 12, 10, ContributionMode.sip)
        assert value_after(result.required_monthly, 12, 120) == pytest.approx(
            1_000_000, rel=1e-9
        )
        assert result.total_invested == pytest.approx(result.required_monthly * 120)

    def test_sip_zero_return(self):
        """Test a zero return spreads the target evenly."""
        result = required_contribution(120_000, 0, 1, ContributionMode.sip)
        assert result.required_monthly == 10_000

    def test_stepup_reaches_target(self):
        """Test the required step-up SIP grows back to the target."""
        result = required_contribution(
            5_000_000, 12, 10, ContributionMode.stepup, step_up_percent=10
        )
        assert value_after(result.required_monthly, 12, 120, 10) == pytest.approx(
            5_000_000, rel=1e-9
        )

    def test_stepup_equal_rates(self):
        """Test the equal-rate branch when return matches step-up."""
        result = required_contribution(
            5_000_000, 10, 10, ContributionMode.stepup, step_up_percent=10
        )
        assert math.isfinite(result.required_monthly)
        assert value_after(result.required_monthly, 10, 120, 10) == pytest.approx(
            5_000_000, rel=1e-9
        )

    def test_stepup_needs_less_than_flat_sip(self):
        """Test a growing contribution starts lower than a flat one."""
        flat = required_contribution(5_000_000, 12, 10, ContributionMode.sip)
        stepped = required_contribution(
            5_000_000, 12, 10, ContributionMode.stepup, step_up_percent=10
        )
        assert stepped.required_monthly < flat.required_monthly
        assert stepped.total_invested > 0

    def test_invalid_inputs_give_nan(self):
        """Test invalid inputs produce NaN values."""
        result = required_contribution(0, 12, 10, ContributionMode.sip)
        assert math.isnan(result.required_monthly)
        result = required_contribution(1_000_000, 12, 0, ContributionMode.lumpsum)
        assert math.isnan(result.required_lumpsum)

    @pytest.mark.parametrize("mode", list(ContributionMode))
    def test_huge_horizon_gives_nan(self, mode):
        """Test a horizon too long to compound gives NaN instead of overflowing."""
        result = required_contribution(
            5_000_000, 12, 100_000, mode, step_up_percent=10
        )
        if mode is ContributionMode.lumpsum:
            assert math.isnan(result.required_lumpsum)
        else:
            assert math.isnan(result.required_monthly)
        assert math.isnan(result.total_invested)

    def test_stepup_below_minus_100_gives_nan(self):
        """Test a step-up that wipes out the contribution gives NaN."""
        result = required_contribution(
            1_000_000, 12, 10, ContributionMode.stepup, step_up_percent=-150
        )
        assert math.isnan(result.required_monthly)


class TestRequiredTime:
    """Test the time needed to reach a target."""

    def test_lumpsum_doubling(self):
        """Test a lumpsum doubles in about 7.27 years at 10%."""
        result = required_time(100_000, 10, 200_000, ContributionMode.lumpsum)
        assert result.status is GoalStatus.reached
        assert abs(result.years - 7.2725) < 0.001

    def test_lumpsum_already_met(self):
        """Test a lumpsum at or above the target needs no time."""
        result = required_time(500_000, 10, 400_000, ContributionMode.lumpsum)
        assert result.status is GoalStatus.reached
        assert result.years == 0

    def test_lumpsum_without_growth_is_unreachable(self):
        """Test a lumpsum below target never grows at zero return."""
        result = required_time(100_000, 0, 200_000, ContributionMode.lumpsum)
        assert result.status is GoalStatus.unreachable
        assert result.years is None

    def test_sip_time_matches_required_contribution(self):
        """Test the SIP time closed form inverts the SIP amount."""
        monthly = required_contribution(
            2_000_000, 12, 10, ContributionMode.sip
        ).required_monthly
        result = required_time(monthly, 12, 2_000_000, ContributionMode.sip)
        assert result.status is GoalStatus.reached
        assert abs(result.years - 10) < 1e-9

    def test_sip_zero_return(self):
        """Test SIP time without growth is target over contribution."""
        result = required_time(10_000, 0, 1_200_000, ContributionMode.sip)
        assert result.months == 120

    def test_sip_negative_return_unreachable(self):
        """Test a negative return that caps the portfolio below target."""
        result = required_time(1_000, -50, 10_000_000, ContributionMode.sip)
        assert result.status is GoalStatus.unreachable

    def test_stepup_search(self):
        """Test the step-up search stops at the first month reaching target."""
        result = required_time(
            10_000, 12, 5_000_000, ContributionMode.stepup, step_up_percent=10
        )
        assert result.status is GoalStatus.reached
        assert value_after(10_000, 12, result.months, 10) >= 5_000_000
        assert value_after(10_000, 12, result.months - 1, 10) < 5_000_000

    def test_stepup_search_terminates(self):
        """Test an unreachable step-up target stops at the search ceiling."""
        result = required_time(1, 0, 1e12, ContributionMode.stepup)
        assert result.status is GoalStatus.unreachable
        assert result.months is None
        assert result.total_invested is None
        assert value_after(1, 0, MAX_SEARCH_MONTHS) < 1e12


class TestIntraYearSchedule:
    """Test the year-by-year projection with intra-year growth."""

    def test_lumpsum(self):
        """Test a lumpsum compounds annually."""
        schedule = build_intra_year_schedule(ContributionMode.lumpsum, 100_000, 10, 2)
        assert abs(schedule[-1].corpus_value - 121_000) < 1e-6
        assert schedule[-1].cumulative_invested == 100_000
        assert schedule[1].invested_this_year == 0

    def test_sip_matches_monthly_simulation(self):
        """Test intra-year growth equals end-of-month compounding."""
        schedule = build_intra_year_schedule(ContributionMode.sip, 10_000, 12, 10)
        assert schedule[-1].corpus_value == pytest.approx(
            value_after(10_000, 12, 120), rel=1e-9
        )
        assert schedule[-1].cumulative_invested == 1_200_000

    def test_stepup_raises_contribution_yearly(self):
        """Test step-up increases the yearly investment."""
        schedule = build_intra_year_schedule(
            ContributionMode.stepup, 10_000, 12, 3, step_up_percent=10
        )
        assert schedule[0].invested_this_year == 120_000
        assert abs(schedule[2].invested_this_year - 145_200) < 1e-6

    def test_real_values(self):
        """Test real corpus is deflated by the elapsed years."""
        schedule = build_intra_year_schedule(
            ContributionMode.sip, 10_000, 12, 5, inflation_percent=6
        )
        for row in schedule:
            expected = row.corpus_value / 1.06 ** row.year
            assert row.real_corpus_value == pytest.approx(expected)


class TestMonthlyCompoundedSchedule:
    """Test the year-by-year projection with monthly compounding."""

    def test_lumpsum(self):
        """Test a lumpsum compounds annually."""
        schedule = build_monthly_compounded_schedule(
            ContributionMode.lumpsum, 100_000, 10, 2
        )
        assert abs(schedule[-1].corpus_value - 121_000) < 1e-6

    def test_sip_zero_return(self):
        """Test a zero return keeps the value at the amount invested."""
        schedule = build_monthly_compounded_schedule(ContributionMode.sip, 5_000, 0, 3)
        assert abs(schedule[-1].corpus_value - 180_000) < 1e-6
        assert schedule[-1].cumulative_invested == 180_000

    def test_stepup_invests_more_each_year(self):
        """Test step-up contributions grow after each year."""
        schedule = build_monthly_compounded_schedule(
            ContributionMode.stepup, 10_000, 12, 3, step_up_percent=10
        )
        invested = [row.invested_this_year for row in schedule]
        assert invested[0] == 120_000
        assert abs(invested[1] - 132_000) < 1e-6
        assert invested[2] > invested[1]

    def test_value_grows(self):
        """Test a positive return grows the value every year."""
        schedule = build_monthly_compounded_schedule(ContributionMode.sip, 10_000, 12, 10)
        for previous, current in zip(schedule, schedule[1:]):
            assert current.corpus_value > previous.corpus_value
        assert schedule[-1].corpus_value > schedule[-1].cumulative_invested
