"""
API routes for the calculators.
"""

from fastapi import APIRouter

from fincalc.api import investments, loans, retirement

router = APIRouter()

# Include sub-routers
router.include_router(loans.router, prefix="/loans", tags=["loans"])
router.include_router(investments.router, prefix="/investments", tags=["investments"])
router.include_router(retirement.router, prefix="/retirement", tags=["retirement"])
