"""
Matching against the stored subsidy catalog
"""
import logging
import time
from typing import Any, List, Mapping, Optional

from ..config import settings
from ..models.matching import MatchResponse, MatchResult
from .eligibility_matcher import eligibility_matcher
from .profile_builder import build_applicant_profile

logger = logging.getLogger(__name__)


def count_recommendations(results: List[MatchResult], threshold: Optional[int] = None) -> int:
    """Number of results scoring at or above the recommendation threshold"""
    if threshold is None:
        threshold = settings.recommendation_threshold
    return sum(1 for result in results if result.match_score >= threshold)


async def match_applicant(
    store,
    company_info: Optional[Mapping[str, Any]] = None,
    answers: Optional[Mapping[str, Any]] = None,
    overrides: Optional[Mapping[str, Any]] = None,
    subsidy_ids: Optional[List[str]] = None,
    session_id: Optional[str] = None
) -> MatchResponse:
    """
    Build the applicant profile and rank the active catalog for it

    Args:
        store: Storage service providing list_subsidies()
        company_info: Structured company record fields
        answers: Diagnostic answers by question key
        overrides: Explicit per-answer overrides
        subsidy_ids: Restrict matching to these subsidies
        session_id: Diagnosis session the match belongs to, if any

    Returns:
        MatchResponse with ranked results
    """
    start_time = time.time()

    catalog = await store.list_subsidies(status="active", subsidy_ids=subsidy_ids)
    applicant = build_applicant_profile(company_info, answers, overrides)
    results = eligibility_matcher.match_all(catalog, applicant)

    processing_time = (time.time() - start_time) * 1000
    recommendation_count = count_recommendations(results)
    logger.info(
        f"Matching completed: {recommendation_count}/{len(results)} subsidies recommended "
        f"in {processing_time:.1f}ms"
    )

    return MatchResponse(
        session_id=session_id,
        total_subsidies_checked=len(results),
        recommendation_count=recommendation_count,
        matched_subsidies=results
    )
