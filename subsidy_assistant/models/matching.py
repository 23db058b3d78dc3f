"""
Pydantic models for match results and matching requests
"""
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, ConfigDict


def get_current_utc_time():
    """Get current UTC time for default values"""
    return datetime.now(timezone.utc)


class EligibilityStatus(str, Enum):
    ELIGIBLE = "eligible"
    POTENTIALLY_ELIGIBLE = "potentially_eligible"
    NOT_ELIGIBLE = "not_eligible"


class MatchResult(BaseModel):
    """Result of matching an applicant against one subsidy"""
    subsidy_id: str = Field(..., description="Subsidy identifier")
    subsidy_name: str = Field(..., description="Subsidy name")
    match_score: int = Field(..., ge=0, le=100, description="Weighted share of rules passed (0-100)")
    eligibility_status: EligibilityStatus
    reasons: List[str] = Field(default_factory=list, description="Explanations for passed rules")
    missing_requirements: List[str] = Field(default_factory=list, description="Explanations for failed rules")
    next_steps: List[str] = Field(default_factory=list, description="Suggested follow-up actions")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "subsidy_id": "it-donyu",
                "subsidy_name": "IT導入補助金",
                "match_score": 75,
                "eligibility_status": "potentially_eligible",
                "reasons": ["subsidy_purposeが適切な値です"],
                "missing_requirements": ["employee_countの情報が不足しています"],
                "next_steps": [
                    "不足している要件を確認してください",
                    "以下の条件を満たす必要があります: employee_countの情報が不足しています",
                    "詳細な診断を受けることをお勧めします"
                ]
            }
        }
    )


class MatchRequest(BaseModel):
    """Match an applicant against the stored subsidy catalog"""
    company_info: Dict[str, Any] = Field(default_factory=dict, description="Structured company record fields")
    answers: Dict[str, Any] = Field(default_factory=dict, description="Diagnostic answers by question key")
    overrides: Dict[str, Any] = Field(default_factory=dict, description="Explicit per-answer overrides")
    subsidy_ids: Optional[List[str]] = Field(None, description="Specific subsidies to check (if None, check all active)")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "company_info": {"industry": "it", "employee_count": 15, "annual_revenue": 8000},
                "answers": {"subsidy_purpose": "it_introduction"},
                "overrides": {}
            }
        }
    )


class EvaluateRequest(BaseModel):
    """Match an applicant against an inline catalog"""
    catalog: List[Dict[str, Any]] = Field(default_factory=list, description="Raw subsidy catalog entries")
    applicant: Dict[str, Any] = Field(default_factory=dict, description="Flat applicant attributes")


class MatchResponse(BaseModel):
    """Ranked match results for one applicant"""
    session_id: Optional[str] = Field(None, description="Diagnosis session, when matched from one")
    total_subsidies_checked: int = Field(..., description="Number of subsidies evaluated")
    recommendation_count: int = Field(..., description="Results at or above the recommendation threshold")
    matched_subsidies: List[MatchResult] = Field(default_factory=list)
    checked_at: datetime = Field(default_factory=get_current_utc_time)
