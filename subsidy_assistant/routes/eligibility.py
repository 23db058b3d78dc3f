"""
API routes for eligibility matching
"""
import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException

from ..models.matching import EvaluateRequest, MatchRequest, MatchResponse, MatchResult
from ..services.catalog_loader import CatalogValidationError, load_catalog
from ..services.eligibility_matcher import eligibility_matcher
from ..services.matching_service import match_applicant
from ..services.mongo_service import MongoService, get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/eligibility", tags=["eligibility"])


@router.post("/match", response_model=MatchResponse)
async def match_subsidies(request: MatchRequest, store: MongoService = Depends(get_store)):
    """
    Rank the active subsidy catalog for a company profile and its answers
    """
    try:
        return await match_applicant(
            store,
            company_info=request.company_info,
            answers=request.answers,
            overrides=request.overrides,
            subsidy_ids=request.subsidy_ids
        )

    except Exception as e:
        logger.error(f"Error matching subsidies: {e}")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to match subsidies: {str(e)}"
        )


@router.post("/evaluate", response_model=List[MatchResult])
async def evaluate_catalog(request: EvaluateRequest):
    """
    Rank an inline catalog for a flat applicant profile
    """
    try:
        catalog = load_catalog(request.catalog)
    except CatalogValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return eligibility_matcher.match_all(catalog, request.applicant)


@router.get("/operators", response_model=List[str])
async def get_supported_operators():
    """
    List the predicate operators the matcher understands
    """
    return eligibility_matcher.supported_operators
