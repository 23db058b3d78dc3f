"""
Models package for the IT Subsidy Assistant
"""

from .subsidy import (
    EligibilityPredicate,
    SubsidyProgram
)

from .matching import (
    EligibilityStatus,
    MatchResult,
    MatchRequest,
    EvaluateRequest,
    MatchResponse
)

from .diagnosis import (
    CompanyInfo,
    DiagnosisData,
    DiagnosisSession,
    DiagnosisAnswer,
    StartDiagnosisRequest,
    StartDiagnosisResponse,
    AnswerDiagnosisRequest,
    AnswerDiagnosisResponse,
    SessionDetailResponse
)

__all__ = [
    # Catalog models
    "EligibilityPredicate",
    "SubsidyProgram",

    # Matching models
    "EligibilityStatus",
    "MatchResult",
    "MatchRequest",
    "EvaluateRequest",
    "MatchResponse",

    # Diagnosis models
    "CompanyInfo",
    "DiagnosisData",
    "DiagnosisSession",
    "DiagnosisAnswer",
    "StartDiagnosisRequest",
    "StartDiagnosisResponse",
    "AnswerDiagnosisRequest",
    "AnswerDiagnosisResponse",
    "SessionDetailResponse"
]
