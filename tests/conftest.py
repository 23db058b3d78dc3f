from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from subsidy_assistant.main import app
from subsidy_assistant.models.diagnosis import DiagnosisAnswer, DiagnosisSession
from subsidy_assistant.models.subsidy import SubsidyProgram
from subsidy_assistant.services.catalog_loader import load_catalog_file
from subsidy_assistant.services.mongo_service import get_store


class InMemoryStore:
    """Stand-in for MongoService with the same async interface"""

    def __init__(self, catalog: Optional[List[SubsidyProgram]] = None):
        self.subsidies: List[SubsidyProgram] = list(catalog or [])
        self.sessions: Dict[str, DiagnosisSession] = {}
        self.answers: Dict[str, Dict[str, DiagnosisAnswer]] = {}

    async def list_subsidies(self, status=None, subsidy_ids=None):
        return [
            s for s in self.subsidies
            if (status is None or s.status == status)
            and (subsidy_ids is None or s.id in subsidy_ids)
        ]

    async def get_subsidy(self, subsidy_id):
        return next((s for s in self.subsidies if s.id == subsidy_id), None)

    async def create_subsidy(self, subsidy):
        if await self.get_subsidy(subsidy.id):
            return False
        self.subsidies.append(subsidy)
        return True

    async def create_session(self, session):
        self.sessions[session.id] = session.model_copy(deep=True)
        return session

    async def get_session(self, session_id):
        session = self.sessions.get(session_id)
        return session.model_copy(deep=True) if session else None

    async def update_session(self, session):
        if session.id not in self.sessions:
            return False
        self.sessions[session.id] = session.model_copy(deep=True)
        return True

    async def upsert_answer(self, answer):
        self.answers.setdefault(answer.session_id, {})[answer.question_key] = answer
        return True

    async def get_answers(self, session_id):
        return list(self.answers.get(session_id, {}).values())


@pytest.fixture
def store():
    return InMemoryStore(load_catalog_file())


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()
