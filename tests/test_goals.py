"""
Tests for the goal planner.
"""

import pytest

from fincalc.calculations.accumulation import ContributionMode, GoalStatus
from fincalc.calculations.goals import (
    CalculationMode,
    compare_goal_across_assets,
    plan_goal_investment,
    plan_goal_time,
)
from fincalc.calculations.validation import InvalidInputError


class TestPlanGoalInvestment:
    """Test the contribution needed for a goal."""

    def test_sip(self):
        """Test a SIP goal in equity."""
        result = plan_goal_investment("equity", 5_000_000, 10, ContributionMode.sip)
        assert result.name == "Equity Fund"
        assert result.expected_return_percent == 12
        assert result.required_monthly > 0
        assert result.required_lumpsum is None
        assert result.required_years is None
        assert result.total_returns == pytest.approx(
            5_000_000 - result.total_invested
        )
        assert result.status is GoalStatus.reached

    def test_lumpsum(self):
        """Test a lumpsum goal is the discounted target."""
        result = plan_goal_investment("gold", 1_000_000, 2, "lumpsum")
        assert result.required_lumpsum == pytest.approx(1_000_000 / 1.1 ** 2)
        assert result.required_monthly is None

    def test_lower_return_needs_more(self):
        """Test a safer asset class needs a larger SIP."""
        equity = plan_goal_investment("equity", 5_000_000, 10, "sip")
        fd = plan_goal_investment("fd", 5_000_000, 10, "sip")
        assert fd.required_monthly > equity.required_monthly

    def test_return_override(self):
        """Test an explicit expected return replaces the default."""
        result = plan_goal_investment(
            "debt", 1_000_000, 2, "lumpsum", expected_return_percent=10
        )
        assert result.expected_return_percent == 10
        assert result.required_lumpsum == pytest.approx(1_000_000 / 1.1 ** 2)

    def test_invalid_inputs(self):
        """Test every problem is reported."""
        with pytest.raises(InvalidInputError) as excinfo:
            plan_goal_investment("crypto", -1, 0, "weekly")
        assert len(excinfo.value.errors) == 4


class TestPlanGoalTime:
    """Test the time needed for a goal."""

    def test_sip_time(self):
        """Test SIP time is positive and consistent with invested amount."""
        result = plan_goal_time("equity", 5_000_000, "sip", monthly_amount=10_000)
        assert result.status is GoalStatus.reached
        assert result.required_years > 10
        assert result.total_invested == pytest.approx(
            10_000 * result.required_years * 12
        )

    def test_stepup_unreachable(self):
        """Test an unreachable step-up goal reports no time."""
        result = plan_goal_time(
            "fd",
            1e15,
            "stepup",
            monthly_amount=1,
            expected_return_percent=0,
            step_up_percent=0,
        )
        assert result.status is GoalStatus.unreachable
        assert result.required_years is None
        assert result.total_invested is None
        assert result.total_returns is None

    def test_lumpsum_needs_lumpsum_amount(self):
        """Test the lumpsum amount is required in lumpsum mode."""
        with pytest.raises(InvalidInputError):
            plan_goal_time("equity", 5_000_000, "lumpsum", monthly_amount=10_000)

    def test_lumpsum_time(self):
        """Test lumpsum time is reported with the lumpsum amount."""
        result = plan_goal_time("debt", 200_000, "lumpsum", lumpsum_amount=100_000)
        assert result.required_lumpsum == 100_000
        assert result.required_monthly is None
        assert result.required_years > 10


class TestCompareGoalAcrossAssets:
    """Test running a goal across every asset class."""

    def test_investment_mode(self):
        """Test every asset class gets a plan."""
        results = compare_goal_across_assets(5_000_000, "sip", years=10)
        assert list(results) == ["equity", "gold", "debt", "fd"]
        assert results["equity"].required_monthly < results["fd"].required_monthly

    def test_time_mode(self):
        """Test time calculation across asset classes."""
        results = compare_goal_across_assets(
            5_000_000,
            ContributionMode.stepup,
            calculation=CalculationMode.time,
            monthly_amount=10_000,
            step_up_percent=10,
        )
        assert all(r.status is GoalStatus.reached for r in results.values())
        assert results["equity"].required_years <= results["fd"].required_years

    def test_return_overrides(self):
        """Test per-class return overrides."""
        results = compare_goal_across_assets(
            5_000_000, "sip", years=10, returns={"fd": 12}
        )
        assert results["fd"].required_monthly == pytest.approx(
            results["equity"].required_monthly
        )

    def test_unknown_asset_override(self):
        """Test an override for an unknown asset class is rejected."""
        with pytest.raises(InvalidInputError):
            compare_goal_across_assets(5_000_000, "sip", years=10, returns={"land": 9})

    def test_unknown_calculation(self):
        """Test an unknown calculation mode is rejected."""
        with pytest.raises(InvalidInputError):
            compare_goal_across_assets(5_000_000, "sip", calculation="both", years=10)
