"""
Input Validation

Checks shared by the composite calculators. Engine primitives never raise;
the calculators validate up front and raise InvalidInputError instead of
letting NaN or infinity leak into a schedule.
"""

from typing import List, Optional

import numpy as np

# Longest loan tenure or investment horizon accepted, in years
MAX_YEARS = 100
# Highest annual rate (interest, return, inflation, growth) accepted, in percent
MAX_RATE_PERCENT = 100


class InvalidInputError(ValueError):
    """Raised when calculator inputs cannot produce a meaningful result."""

    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


class InputValidator:
    """
    Collects every problem with a set of inputs before raising.

    Usage:
        check = InputValidator()
        check.positive("principal", principal)
        check.interest_rate("annual_rate_percent", rate)
        check.raise_if_invalid()
    """

    def __init__(self):
        self.errors: List[str] = []

    def _finite(self, name: str, value: Optional[float]) -> bool:
        if value is None or not np.isfinite(value):
            self.errors.append(f"{name} must be a finite number")
            return False
        return True

    def positive(self, name: str, value: Optional[float]) -> None:
        if self._finite(name, value) and value <= 0:
            self.errors.append(f"{name} must be greater than 0")

    def non_negative(self, name: str, value: Optional[float]) -> None:
        if self._finite(name, value) and value < 0:
            self.errors.append(f"{name} must not be negative")

    def rate(self, name: str, value: Optional[float]) -> None:
        """A percentage rate may be negative but never at or below -100%."""
        if not self._finite(name, value):
            return
        if value <= -100:
            self.errors.append(f"{name} must be greater than -100")
        elif value > MAX_RATE_PERCENT:
            self.errors.append(f"{name} must be at most {MAX_RATE_PERCENT}")

    def interest_rate(self, name: str, value: Optional[float]) -> None:
        if not self._finite(name, value):
            return
        if value < 0:
            self.errors.append(f"{name} must not be negative")
        elif value > MAX_RATE_PERCENT:
            self.errors.append(f"{name} must be at most {MAX_RATE_PERCENT}")

    def percentage(self, name: str, value: Optional[float]) -> None:
        if self._finite(name, value) and not 0 <= value <= 100:
            self.errors.append(f"{name} must be between 0 and 100")

    def years(self, name: str, value: Optional[float]) -> None:
        """A horizon in years, possibly fractional."""
        if not self._finite(name, value):
            return
        if value <= 0:
            self.errors.append(f"{name} must be greater than 0")
        elif value > MAX_YEARS:
            self.errors.append(f"{name} must be at most {MAX_YEARS}")

    def whole_years(self, name: str, value: Optional[float]) -> None:
        if not self._finite(name, value):
            return
        if value <= 0:
            self.errors.append(f"{name} must be greater than 0")
        elif value > MAX_YEARS:
            self.errors.append(f"{name} must be at most {MAX_YEARS}")
        elif float(value) != int(value):
            self.errors.append(f"{name} must be a whole number of years")

    def require(self, condition: bool, message: str) -> None:
        if not condition:
            self.errors.append(message)

    def fail(self, message: str) -> None:
        self.errors.append(message)

    def raise_if_invalid(self) -> None:
        if self.errors:
            raise InvalidInputError(self.errors)
