"""
Pydantic models for diagnosis sessions and answers
"""
from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, Field, ConfigDict

from .matching import MatchResult


def get_current_utc_time():
    """Get current UTC time for default values"""
    return datetime.now(timezone.utc)


class CompanyInfo(BaseModel):
    """Structured company record collected during diagnosis"""
    name: Optional[str] = None
    industry: Optional[str] = None
    employee_count: Optional[int] = Field(None, ge=0)
    annual_revenue: Optional[float] = Field(None, ge=0)
    established_date: Optional[str] = None
    location: Optional[str] = None


class DiagnosisData(BaseModel):
    current_step: str = "basic_info"
    answers: Dict[str, Any] = Field(default_factory=dict)
    progress: int = Field(0, ge=0, le=100)


class DiagnosisSession(BaseModel):
    """Guided questionnaire run stored in MongoDB"""
    id: str = Field(..., description="Session identifier (uuid4)")
    user_id: Optional[str] = None
    session_token: str
    company_info: CompanyInfo = Field(default_factory=CompanyInfo)
    diagnosis_data: DiagnosisData = Field(default_factory=DiagnosisData)
    matched_subsidies: List[MatchResult] = Field(default_factory=list)
    status: Literal["in_progress", "completed", "abandoned"] = Field(default="in_progress")
    created_at: datetime = Field(default_factory=get_current_utc_time)
    updated_at: datetime = Field(default_factory=get_current_utc_time)
    completed_at: Optional[datetime] = None


class DiagnosisAnswer(BaseModel):
    session_id: str
    question_key: str
    answer: Any = None
    answered_at: datetime = Field(default_factory=get_current_utc_time)


class InitialData(BaseModel):
    company_name: Optional[str] = None
    industry: Optional[str] = None


class StartDiagnosisRequest(BaseModel):
    user_id: Optional[str] = None
    initial_data: Optional[InitialData] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "initial_data": {"company_name": "株式会社サンプル", "industry": "it"}
            }
        }
    )


class StartDiagnosisResponse(BaseModel):
    session_id: str
    session_token: str
    current_step: str
    progress: int


class AnswerDiagnosisRequest(BaseModel):
    session_id: str = Field(..., min_length=1)
    question_key: str = Field(..., min_length=1)
    answer: Any = None
    current_step: Optional[str] = None
    progress: Optional[int] = Field(None, ge=0, le=100)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "session_id": "3f1c0b8e-6a55-4f43-9a47-1a0e4b0c2d11",
                "question_key": "employee_count",
                "answer": "15",
                "current_step": "company_size",
                "progress": 40
            }
        }
    )


class AnswerDiagnosisResponse(BaseModel):
    success: bool = True
    session_id: str
    current_step: str
    progress: int


class SessionDetailResponse(BaseModel):
    session: DiagnosisSession
    answers: List[DiagnosisAnswer] = Field(default_factory=list)
