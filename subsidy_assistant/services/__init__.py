"""
Services package for the IT Subsidy Assistant
"""

from .eligibility_matcher import EligibilityMatcher, eligibility_matcher, match_all
from .catalog_loader import CatalogValidationError, load_catalog, load_catalog_file
from .mongo_service import MongoService, get_store
from .diagnosis_service import DiagnosisService

__all__ = [
    "EligibilityMatcher",
    "eligibility_matcher",
    "match_all",
    "CatalogValidationError",
    "load_catalog",
    "load_catalog_file",
    "MongoService",
    "get_store",
    "DiagnosisService"
]
