"""
Financial Calculation Engine

Core calculation modules for the loan, investment and retirement calculators.
Engines (amortization, accumulation, decumulation) are pure functions that
return NaN on invalid input; the composite calculators validate up front and
raise InvalidInputError.
"""

from fincalc.calculations import (
    accumulation,
    affordability,
    amortization,
    assets,
    comparison,
    decumulation,
    emi_split,
    goals,
    rent_vs_buy,
    retirement,
    validation,
)

__all__ = [
    "accumulation",
    "affordability",
    "amortization",
    "assets",
    "comparison",
    "decumulation",
    "emi_split",
    "goals",
    "rent_vs_buy",
    "retirement",
    "validation",
]
