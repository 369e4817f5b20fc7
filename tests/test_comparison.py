"""
Tests for the investment comparisons.
"""

import pytest

from fincalc.calculations.accumulation import ContributionMode
from fincalc.calculations.comparison import (
    InvestmentInputs,
    compare_asset_classes,
    compare_two_investments,
)
from fincalc.calculations.validation import InvalidInputError


class TestCompareAssetClasses:
    """Test one plan across the four asset classes."""

    def test_ranking(self):
        """Test asset classes rank by expected return."""
        result = compare_asset_classes(ContributionMode.sip, 10_000, 10)
        assert result.ranking == ("equity", "gold", "debt", "fd")
        assert result.best_asset_class == "equity"

    def test_projection_figures(self):
        """Test the summary of a projection."""
        result = compare_asset_classes("sip", 10_000, 10)
        equity = result.projections["equity"]
        assert equity.name == "Equity Fund"
        assert equity.total_invested == 1_200_000
        assert len(equity.yearly_breakdown) == 10
        assert equity.total_returns == pytest.approx(
            equity.maturity_amount - equity.total_invested
        )
        assert equity.absolute_returns_percent == pytest.approx(
            equity.total_returns / 1_200_000 * 100
        )

    def test_lumpsum(self):
        """Test lumpsum maturity is compound growth."""
        result = compare_asset_classes("lumpsum", 100_000, 10)
        fd = result.projections["fd"]
        assert fd.maturity_amount == pytest.approx(100_000 * 1.065 ** 10)
        assert fd.total_invested == 100_000

    def test_return_overrides_change_ranking(self):
        """Test overriding a return can change the best asset class."""
        result = compare_asset_classes("stepup", 10_000, 10, 10, returns={"fd": 20})
        assert result.best_asset_class == "fd"
        assert result.ranking[-1] == "debt"

    def test_invalid_inputs(self):
        """Test invalid plans raise."""
        with pytest.raises(InvalidInputError):
            compare_asset_classes("sip", 0, 10)
        with pytest.raises(InvalidInputError):
            compare_asset_classes("monthly", 10_000, 10)
        with pytest.raises(InvalidInputError):
            compare_asset_classes("sip", 10_000, 10, returns={"gold": -120})


class TestCompareTwoInvestments:
    """Test the head-to-head comparison."""

    def test_identical_plans(self):
        """Test identical plans have no difference."""
        plan = InvestmentInputs(ContributionMode.sip, 10_000, 12, 10)
        result = compare_two_investments(plan, plan, inflation_percent=6)
        assert result.difference.maturity == 0
        assert result.difference.maturity_percent == 0
        assert result.first.name == "Investment 1"
        assert result.second.name == "Investment 2"

    def test_higher_return_wins(self):
        """Test the higher return plan matures higher."""
        first = InvestmentInputs(ContributionMode.sip, 10_000, 12, 10, 10)
        second = InvestmentInputs(ContributionMode.sip, 10_000, 10, 10, 10)
        result = compare_two_investments(first, second, inflation_percent=6)
        assert result.difference.maturity > 0
        assert result.difference.invested == 0
        assert result.difference.maturity_percent == pytest.approx(
            result.difference.maturity / result.second.maturity_amount * 100
        )

    def test_real_values(self):
        """Test real maturity is deflated over the horizon."""
        plan = InvestmentInputs(ContributionMode.lumpsum, 100_000, 12, 10)
        result = compare_two_investments(plan, plan, inflation_percent=6)
        assert result.first.maturity_amount == pytest.approx(100_000 * 1.12 ** 10)
        assert result.first.real_maturity_amount == pytest.approx(
            100_000 * 1.12 ** 10 / 1.06 ** 10
        )
        assert result.first.real_total_returns == pytest.approx(
            result.first.real_maturity_amount - 100_000
        )

    def test_mixed_modes(self):
        """Test a lumpsum against a step-up SIP."""
        lumpsum = InvestmentInputs(ContributionMode.lumpsum, 1_200_000, 12, 10)
        stepup = InvestmentInputs(ContributionMode.stepup, 10_000, 12, 10, 10)
        result = compare_two_investments(lumpsum, stepup)
        assert result.second.total_invested > 1_200_000
        assert result.difference.invested < 0
        assert result.first.real_maturity_amount == result.first.maturity_amount

    def test_invalid_plan(self):
        """Test both plans are validated together."""
        bad = InvestmentInputs("weekly", -5, 12, 0)
        with pytest.raises(InvalidInputError) as excinfo:
            compare_two_investments(bad, bad, inflation_percent=-150)
        errors = excinfo.value.errors
        assert any(e.startswith("first.") for e in errors)
        assert any(e.startswith("second.") for e in errors)
        assert any(e.startswith("inflation_percent") for e in errors)
