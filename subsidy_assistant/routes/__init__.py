"""
API routes for the IT Subsidy Assistant
"""

from .subsidies import router as subsidies_router
from .eligibility import router as eligibility_router
from .diagnosis import router as diagnosis_router

__all__ = [
    "subsidies_router",
    "eligibility_router",
    "diagnosis_router"
]
