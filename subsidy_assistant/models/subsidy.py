"""
Pydantic models for subsidy programs and their eligibility rules
"""
from typing import Any, List, Literal, Optional
from pydantic import BaseModel, Field, ConfigDict


class EligibilityPredicate(BaseModel):
    """Single weighted eligibility condition"""
    field_name: str = Field(..., min_length=1, description="Applicant attribute to check")
    operator: str = Field(..., description="Comparison operator")
    value: Any = Field(None, description="Reference value, list, or [min, max] pair")
    weight: Optional[float] = Field(None, gt=0, description="Relative weight (1 when unset)")
    rule_type: Optional[str] = Field(None, description="Free-form rule category label")


class SubsidyProgram(BaseModel):
    """Subsidy program with its eligibility rules"""
    id: str = Field(..., min_length=1, description="Unique identifier for the subsidy")
    name: str = Field(..., min_length=1, description="Display name of the subsidy")
    eligibility_rules: List[EligibilityPredicate] = Field(default_factory=list)
    description: Optional[str] = Field(None, description="Short summary of the program")
    max_amount: Optional[int] = Field(None, ge=0, description="Maximum grant in yen")
    subsidy_rate: Optional[str] = Field(None, description="Share of costs covered, e.g. 2/3")
    application_period: Optional[str] = Field(None, description="When applications are accepted")
    required_documents: List[str] = Field(default_factory=list)
    status: Literal["active", "inactive"] = Field(default="active")

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "id": "it-donyu",
                "name": "IT導入補助金",
                "eligibility_rules": [
                    {
                        "rule_type": "company_size",
                        "field_name": "employee_count",
                        "operator": "less_than_or_equal",
                        "value": 300,
                        "weight": 2
                    },
                    {
                        "rule_type": "purpose",
                        "field_name": "subsidy_purpose",
                        "operator": "in",
                        "value": ["it_introduction", "productivity_improvement"],
                        "weight": 3
                    }
                ],
                "max_amount": 4500000,
                "subsidy_rate": "3/4",
                "status": "active"
            }
        }
    )
