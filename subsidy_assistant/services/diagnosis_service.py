"""
Diagnosis session workflow: start, answer, complete, re-match
"""
import logging
import secrets
import uuid
from datetime import datetime, timezone
from typing import Any, Optional

from ..models.diagnosis import (
    CompanyInfo,
    DiagnosisAnswer,
    DiagnosisSession,
    InitialData,
    SessionDetailResponse,
)
from ..models.matching import MatchResponse
from .matching_service import match_applicant
from .profile_builder import answers_to_mapping, update_company_info

logger = logging.getLogger(__name__)


BASIC_QUESTIONS = [
    {
        "id": "company_name",
        "question": "会社名を教えてください",
        "type": "text",
        "required": True,
        "placeholder": "株式会社○○"
    },
    {
        "id": "industry",
        "question": "業種を選択してください",
        "type": "select",
        "required": True,
        "options": [
            {"value": "manufacturing", "label": "製造業"},
            {"value": "retail", "label": "小売業"},
            {"value": "services", "label": "サービス業"},
            {"value": "it", "label": "IT・情報サービス業"},
            {"value": "construction", "label": "建設業"},
            {"value": "other", "label": "その他"}
        ]
    },
    {
        "id": "employee_count",
        "question": "従業員数を教えてください",
        "type": "number",
        "required": True,
        "placeholder": "例: 50"
    },
    {
        "id": "annual_revenue",
        "question": "年間売上高を教えてください（万円）",
        "type": "number",
        "required": True,
        "placeholder": "例: 5000"
    },
    {
        "id": "location",
        "question": "所在地を教えてください",
        "type": "select",
        "required": True,
        "options": [
            {"value": "tokyo", "label": "東京都"},
            {"value": "osaka", "label": "大阪府"},
            {"value": "kanagawa", "label": "神奈川県"},
            {"value": "aichi", "label": "愛知県"},
            {"value": "other", "label": "その他"}
        ]
    },
    {
        "id": "subsidy_purpose",
        "question": "補助金の利用目的を教えてください",
        "type": "select",
        "required": True,
        "options": [
            {"value": "it_introduction", "label": "IT導入・デジタル化"},
            {"value": "equipment_investment", "label": "設備投資"},
            {"value": "sales_expansion", "label": "販路開拓・拡大"},
            {"value": "productivity_improvement", "label": "生産性向上"},
            {"value": "other", "label": "その他"}
        ]
    }
]


class SessionNotFoundError(LookupError):
    """Raised when a diagnosis session does not exist"""


class SessionStateError(ValueError):
    """Raised when a session is not in a state that allows the operation"""


class DiagnosisService:
    """Runs diagnosis sessions against an injected storage service"""

    def __init__(self, store):
        self.store = store

    async def _require_session(self, session_id: str) -> DiagnosisSession:
        session = await self.store.get_session(session_id)
        if session is None:
            raise SessionNotFoundError(f"Session not found: {session_id}")
        return session

    async def start_session(
        self,
        user_id: Optional[str] = None,
        initial_data: Optional[InitialData] = None
    ) -> DiagnosisSession:
        """Create a new in-progress session"""
        company_info = CompanyInfo()
        if initial_data:
            company_info = CompanyInfo(
                name=initial_data.company_name,
                industry=initial_data.industry
            )

        session = DiagnosisSession(
            id=str(uuid.uuid4()),
            user_id=user_id,
            session_token=secrets.token_urlsafe(32),
            company_info=company_info
        )
        await self.store.create_session(session)
        logger.info(f"Diagnosis session started: {session.id}")
        return session

    async def record_answer(
        self,
        session_id: str,
        question_key: str,
        answer: Any,
        current_step: Optional[str] = None,
        progress: Optional[int] = None
    ) -> DiagnosisSession:
        """
        Save an answer and fold it into the session

        Raises:
            SessionNotFoundError: unknown session
            SessionStateError: session is not in progress
        """
        session = await self._require_session(session_id)
        if session.status != "in_progress":
            raise SessionStateError("Session is not in progress")

        company_info = CompanyInfo(
            **update_company_info(session.company_info.model_dump(), question_key, answer)
        )

        await self.store.upsert_answer(
            DiagnosisAnswer(session_id=session_id, question_key=question_key, answer=answer)
        )

        session.company_info = company_info
        data = session.diagnosis_data
        data.answers = {**data.answers, question_key: answer}
        if current_step:
            data.current_step = current_step
        if progress is not None:
            data.progress = progress

        await self.store.update_session(session)
        return session

    async def get_session_detail(self, session_id: str) -> SessionDetailResponse:
        session = await self._require_session(session_id)
        answers = await self.store.get_answers(session_id)
        return SessionDetailResponse(session=session, answers=answers)

    async def _match_session(self, session: DiagnosisSession) -> MatchResponse:
        answers = await self.store.get_answers(session.id)
        return await match_applicant(
            self.store,
            company_info=session.company_info.model_dump(),
            answers=session.diagnosis_data.answers,
            overrides=answers_to_mapping(a.model_dump() for a in answers),
            session_id=session.id
        )

    async def complete_session(self, session_id: str) -> MatchResponse:
        """
        Run matching, store the results and mark the session completed

        Raises:
            SessionNotFoundError: unknown session
            SessionStateError: session already completed
        """
        session = await self._require_session(session_id)
        if session.status == "completed":
            raise SessionStateError("Session already completed")

        response = await self._match_session(session)

        session.status = "completed"
        session.completed_at = datetime.now(timezone.utc)
        session.matched_subsidies = response.matched_subsidies
        await self.store.update_session(session)

        logger.info(f"Diagnosis session completed: {session_id}")
        return response

    async def rematch_session(self, session_id: str) -> MatchResponse:
        """Re-run matching for a session without changing its status"""
        session = await self._require_session(session_id)
        return await self._match_session(session)
