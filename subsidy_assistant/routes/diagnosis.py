"""
API routes for diagnosis sessions
"""
import logging
from fastapi import APIRouter, Depends, HTTPException

from ..models.diagnosis import (
    AnswerDiagnosisRequest,
    AnswerDiagnosisResponse,
    SessionDetailResponse,
    StartDiagnosisRequest,
    StartDiagnosisResponse,
)
from ..models.matching import MatchResponse
from ..services.diagnosis_service import (
    BASIC_QUESTIONS,
    DiagnosisService,
    SessionNotFoundError,
    SessionStateError,
)
from ..services.mongo_service import MongoService, get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/diagnosis", tags=["diagnosis"])


def get_diagnosis_service(store: MongoService = Depends(get_store)) -> DiagnosisService:
    return DiagnosisService(store)


@router.get("/basic-questions")
async def get_basic_questions():
    """
    The six basic questions every diagnosis starts with
    """
    return {"success": True, "data": BASIC_QUESTIONS}


@router.post("/start", response_model=StartDiagnosisResponse, status_code=201)
async def start_diagnosis(
    request: StartDiagnosisRequest,
    service: DiagnosisService = Depends(get_diagnosis_service)
):
    """
    Start a new diagnosis session
    """
    try:
        session = await service.start_session(
            user_id=request.user_id,
            initial_data=request.initial_data
        )
        return StartDiagnosisResponse(
            session_id=session.id,
            session_token=session.session_token,
            current_step=session.diagnosis_data.current_step,
            progress=session.diagnosis_data.progress
        )

    except Exception as e:
        logger.error(f"Failed to start diagnosis: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to start diagnosis: {str(e)}")


@router.post("/answer", response_model=AnswerDiagnosisResponse)
async def answer_diagnosis(
    request: AnswerDiagnosisRequest,
    service: DiagnosisService = Depends(get_diagnosis_service)
):
    """
    Save one answer for an in-progress session
    """
    try:
        session = await service.record_answer(
            session_id=request.session_id,
            question_key=request.question_key,
            answer=request.answer,
            current_step=request.current_step,
            progress=request.progress
        )
        return AnswerDiagnosisResponse(
            session_id=session.id,
            current_step=session.diagnosis_data.current_step,
            progress=session.diagnosis_data.progress
        )

    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except SessionStateError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to save answer: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to save answer: {str(e)}")


@router.get("/session/{session_id}", response_model=SessionDetailResponse)
async def get_diagnosis_session(
    session_id: str,
    service: DiagnosisService = Depends(get_diagnosis_service)
):
    """
    Get a session together with its stored answers
    """
    try:
        return await service.get_session_detail(session_id)

    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to get session {session_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to get session: {str(e)}")


@router.post("/complete/{session_id}", response_model=MatchResponse)
async def complete_diagnosis(
    session_id: str,
    service: DiagnosisService = Depends(get_diagnosis_service)
):
    """
    Complete a session and match it against the subsidy catalog
    """
    try:
        return await service.complete_session(session_id)

    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except SessionStateError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to complete session {session_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to complete session: {str(e)}")


@router.post("/match/{session_id}", response_model=MatchResponse)
async def rematch_diagnosis(
    session_id: str,
    service: DiagnosisService = Depends(get_diagnosis_service)
):
    """
    Re-run subsidy matching for a session
    """
    try:
        return await service.rematch_session(session_id)

    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to match session {session_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to match session: {str(e)}")
