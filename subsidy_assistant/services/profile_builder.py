"""
Builds the flat applicant attribute mapping consumed by the matcher
"""
import logging
import math
from typing import Any, Dict, Iterable, Mapping, Optional

from ..utils.coercion import to_js_string

logger = logging.getLogger(__name__)


def _parse_float(answer: Any) -> Optional[float]:
    if isinstance(answer, bool):
        return None
    try:
        number = float(str(answer).strip())
    except (TypeError, ValueError):
        return None
    # company sizes and revenues are never negative
    return number if math.isfinite(number) and number >= 0 else None


def _parse_int(answer: Any) -> Optional[int]:
    number = _parse_float(answer)
    return int(number) if number is not None else None


def _parse_text(answer: Any) -> Optional[str]:
    # scalars are stored as text; structured answers have no company field
    if answer is None or isinstance(answer, (dict, list, tuple)):
        return None
    return to_js_string(answer)


# diagnosis question key -> (company_info field, parser)
COMPANY_FIELD_MAP = {
    "company_name": ("name", _parse_text),
    "industry": ("industry", _parse_text),
    "employee_count": ("employee_count", _parse_int),
    "annual_revenue": ("annual_revenue", _parse_float),
    "established_date": ("established_date", _parse_text),
    "location": ("location", _parse_text),
}


def answers_to_mapping(answers: Optional[Iterable[Mapping[str, Any]]]) -> Dict[str, Any]:
    """Convert stored answer records into {question_key: answer}; later records win"""
    mapping: Dict[str, Any] = {}
    for record in answers or []:
        key = record.get("question_key")
        if key:
            mapping[key] = record.get("answer")
    return mapping


def build_applicant_profile(
    company_info: Optional[Mapping[str, Any]] = None,
    diagnosis_answers: Optional[Mapping[str, Any]] = None,
    answer_overrides: Optional[Mapping[str, Any]] = None
) -> Dict[str, Any]:
    """
    Merge the three attribute layers into one applicant profile

    Args:
        company_info: Structured company record fields
        diagnosis_answers: Free-form diagnostic answers by question key
        answer_overrides: Explicit per-answer overrides

    Returns:
        Flat mapping where later layers override earlier ones
    """
    profile: Dict[str, Any] = {}

    # unset company fields should not count as answered
    for key, value in (company_info or {}).items():
        if value is not None:
            profile[key] = value

    profile.update(diagnosis_answers or {})
    profile.update(answer_overrides or {})
    return profile


def update_company_info(
    company_info: Optional[Mapping[str, Any]],
    question_key: str,
    answer: Any
) -> Dict[str, Any]:
    """
    Reflect a diagnosis answer onto the structured company record

    Returns:
        A new company_info dict; the input is not modified
    """
    updated = dict(company_info or {})
    target = COMPANY_FIELD_MAP.get(question_key)
    if target is None:
        return updated

    field, parser = target
    parsed = parser(answer)
    if parsed is None:
        logger.warning(f"Could not use {question_key} answer {answer!r}; leaving company info unset")
        updated.pop(field, None)
    else:
        updated[field] = parsed
    return updated
