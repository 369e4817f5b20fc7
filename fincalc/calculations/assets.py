"""
Asset classes compared by the goal planner and the investment comparison.
"""

from typing import Dict, Optional

from fincalc.calculations.validation import InputValidator

# Default expected annual returns in percent (long-run historical averages)
EXPECTED_RETURNS: Dict[str, float] = {
    "equity": 12,
    "gold": 10,
    "debt": 7,
    "fd": 6.5,
}

ASSET_NAMES: Dict[str, str] = {
    "equity": "Equity Fund",
    "gold": "Gold",
    "debt": "Debt Fund",
    "fd": "Fixed Deposit",
}


def resolve_returns(overrides: Optional[Dict[str, float]] = None) -> Dict[str, float]:
    """
    Merge user-supplied expected returns over the defaults.

    Raises:
        InvalidInputError: On an unknown asset class or an invalid rate
    """
    returns = dict(EXPECTED_RETURNS)
    check = InputValidator()
    for asset_class, rate in (overrides or {}).items():
        known = asset_class in EXPECTED_RETURNS
        check.require(known, f"unknown asset class '{asset_class}'")
        if known:
            check.rate(f"{asset_class} return", rate)
            returns[asset_class] = rate
    check.raise_if_invalid()
    return returns
