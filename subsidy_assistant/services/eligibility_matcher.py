"""
Weighted eligibility matching of an applicant against subsidy programs
"""
import logging
import math
from typing import Any, List, Mapping, Sequence, Tuple

from ..models.matching import EligibilityStatus, MatchResult
from ..models.subsidy import EligibilityPredicate, SubsidyProgram
from ..utils.coercion import (
    round_half_up,
    same_value_zero,
    strict_equals,
    to_js_string,
    to_number,
)

logger = logging.getLogger(__name__)

ELIGIBLE_THRESHOLD = 80
POTENTIALLY_ELIGIBLE_THRESHOLD = 50
MAX_LISTED_REQUIREMENTS = 3

NEXT_STEPS_ELIGIBLE = [
    "申請書類の準備を開始してください",
    "必要書類リストを確認してください",
    "申請期限を確認してください",
]
NEXT_STEPS_NOT_ELIGIBLE = [
    "他の補助金制度を検討してください",
    "要件を満たすための改善計画を立ててください",
    "専門家に相談することをお勧めします",
]

Evaluation = Tuple[bool, str]


def effective_weight(predicate: EligibilityPredicate) -> float:
    """Predicate weight, or 1 when it is unset or not a positive number"""
    weight = getattr(predicate, "weight", None)
    is_number = isinstance(weight, (int, float)) and not isinstance(weight, bool)
    if is_number and 0 < weight < math.inf:
        return weight
    return 1


def classify_score(match_score: int) -> EligibilityStatus:
    if match_score >= ELIGIBLE_THRESHOLD:
        return EligibilityStatus.ELIGIBLE
    if match_score >= POTENTIALLY_ELIGIBLE_THRESHOLD:
        return EligibilityStatus.POTENTIALLY_ELIGIBLE
    return EligibilityStatus.NOT_ELIGIBLE


def generate_next_steps(status: EligibilityStatus, missing_requirements: Sequence[str]) -> List[str]:
    """Guidance lines derived from the tier and the first few unmet requirements"""
    if status == EligibilityStatus.ELIGIBLE:
        return list(NEXT_STEPS_ELIGIBLE)

    if status == EligibilityStatus.POTENTIALLY_ELIGIBLE:
        steps = ["不足している要件を確認してください"]
        if missing_requirements:
            listed = ", ".join(missing_requirements[:MAX_LISTED_REQUIREMENTS])
            steps.append(f"以下の条件を満たす必要があります: {listed}")
        steps.append("詳細な診断を受けることをお勧めします")
        return steps

    return list(NEXT_STEPS_NOT_ELIGIBLE)


class EligibilityMatcher:
    """Scores applicant profiles against subsidy eligibility rules"""

    def __init__(self):
        self.operators = {
            'equals': self._equals,
            'not_equals': self._not_equals,
            'greater_than': self._greater_than,
            'less_than': self._less_than,
            'greater_than_or_equal': self._greater_than_or_equal,
            'less_than_or_equal': self._less_than_or_equal,
            'contains': self._contains,
            'in': self._in,
            'between': self._between
        }

    @property
    def supported_operators(self) -> List[str]:
        return list(self.operators)

    def match_all(
        self,
        catalog: Sequence[SubsidyProgram],
        applicant: Mapping[str, Any]
    ) -> List[MatchResult]:
        """
        Score every program in the catalog for one applicant

        Args:
            catalog: Subsidy programs to evaluate
            applicant: Flat applicant attributes

        Returns:
            One MatchResult per program, highest score first; ties keep
            catalog order
        """
        results = [self.score_program(program, applicant) for program in catalog]
        # sorted() is stable, so equal scores stay in catalog order
        ranked = sorted(results, key=lambda result: result.match_score, reverse=True)

        eligible_count = sum(1 for r in ranked if r.eligibility_status == EligibilityStatus.ELIGIBLE)
        logger.debug(f"Matched {len(ranked)} subsidies, {eligible_count} eligible")
        return ranked

    def score_program(self, program: SubsidyProgram, applicant: Mapping[str, Any]) -> MatchResult:
        """Score a single program"""
        total_weight = 0.0
        passed_weight = 0.0
        reasons: List[str] = []
        missing_requirements: List[str] = []

        for predicate in program.eligibility_rules:
            passed, reason = self.evaluate_predicate(predicate, applicant)
            weight = effective_weight(predicate)
            total_weight += weight
            if passed:
                passed_weight += weight
                reasons.append(reason)
            else:
                missing_requirements.append(reason)

        match_score = round_half_up(passed_weight / total_weight * 100) if total_weight > 0 else 0
        status = classify_score(match_score)

        return MatchResult(
            subsidy_id=program.id,
            subsidy_name=program.name,
            match_score=match_score,
            eligibility_status=status,
            reasons=reasons,
            missing_requirements=missing_requirements,
            next_steps=generate_next_steps(status, missing_requirements)
        )

    def evaluate_predicate(
        self,
        predicate: EligibilityPredicate,
        applicant: Mapping[str, Any]
    ) -> Evaluation:
        """
        Evaluate a single predicate against the applicant

        Returns:
            (passed, reason) where reason is phrased for display
        """
        field = getattr(predicate, "field_name", None)
        try:
            value = applicant.get(field) if field else None

            if value is None:
                return False, f"{field}の情報が不足しています"

            op_func = self.operators.get(predicate.operator)
            if not op_func:
                logger.warning(f"Unknown operator: {predicate.operator}")
                return False, f"不明な評価条件: {predicate.operator}"

            return op_func(field, value, predicate.value)

        except Exception as e:
            logger.error(f"Error evaluating rule {field} {getattr(predicate, 'operator', None)}: {e}")
            return False, f"{field}の評価中にエラーが発生しました"

    # Operator functions
    def _equals(self, field: str, value: Any, expected: Any) -> Evaluation:
        if strict_equals(value, expected):
            return True, f"{field}が条件を満たしています"
        return False, f"{field}が{to_js_string(expected)}である必要があります"

    def _not_equals(self, field: str, value: Any, expected: Any) -> Evaluation:
        if not strict_equals(value, expected):
            return True, f"{field}が条件を満たしています"
        return False, f"{field}が{to_js_string(expected)}でない必要があります"

    def _greater_than(self, field: str, value: Any, expected: Any) -> Evaluation:
        limit = to_js_string(expected)
        if to_number(value) > to_number(expected):
            return True, f"{field}が{limit}を超えています"
        return False, f"{field}が{limit}を超える必要があります"

    def _less_than(self, field: str, value: Any, expected: Any) -> Evaluation:
        limit = to_js_string(expected)
        if to_number(value) < to_number(expected):
            return True, f"{field}が{limit}未満です"
        return False, f"{field}が{limit}未満である必要があります"

    def _greater_than_or_equal(self, field: str, value: Any, expected: Any) -> Evaluation:
        limit = to_js_string(expected)
        if to_number(value) >= to_number(expected):
            return True, f"{field}が{limit}以上です"
        return False, f"{field}が{limit}以上である必要があります"

    def _less_than_or_equal(self, field: str, value: Any, expected: Any) -> Evaluation:
        limit = to_js_string(expected)
        if to_number(value) <= to_number(expected):
            return True, f"{field}が{limit}以下です"
        return False, f"{field}が{limit}以下である必要があります"

    def _contains(self, field: str, value: Any, expected: Any) -> Evaluation:
        needle = to_js_string(expected)
        if needle in to_js_string(value):
            return True, f"{field}に必要な要素が含まれています"
        return False, f"{field}に{needle}を含む必要があります"

    def _in(self, field: str, value: Any, expected: Any) -> Evaluation:
        candidates = expected if isinstance(expected, (list, tuple)) else [expected]
        if any(same_value_zero(candidate, value) for candidate in candidates):
            return True, f"{field}が適切な値です"
        return False, f"{field}が指定された値のいずれかである必要があります"

    def _between(self, field: str, value: Any, expected: Any) -> Evaluation:
        bounds = list(expected) if isinstance(expected, (list, tuple)) else []
        low = bounds[0] if len(bounds) > 0 else None
        high = bounds[1] if len(bounds) > 1 else None
        fail_reason = f"{field}が{to_js_string(low)}から{to_js_string(high)}の間である必要があります"

        if len(bounds) != 2:
            return False, fail_reason

        number = to_number(value)
        if to_number(low) <= number <= to_number(high):
            return True, f"{field}が範囲内です"
        return False, fail_reason


# Global matcher instance
eligibility_matcher = EligibilityMatcher()


def match_all(catalog: Sequence[SubsidyProgram], applicant: Mapping[str, Any]) -> List[MatchResult]:
    """Rank the catalog for one applicant using the shared matcher"""
    return eligibility_matcher.match_all(catalog, applicant)
