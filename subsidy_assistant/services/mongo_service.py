"""
MongoDB service for database operations
"""
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ASCENDING
from pymongo.errors import DuplicateKeyError
import logging

from ..config import settings
from ..models.diagnosis import DiagnosisAnswer, DiagnosisSession
from ..models.subsidy import SubsidyProgram
from .catalog_loader import parse_catalog_entry

logger = logging.getLogger(__name__)


def _strip_id(doc: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in doc.items() if k != "_id"}


class MongoService:
    """Service for MongoDB operations"""

    def __init__(self):
        self.client: Optional[AsyncIOMotorClient] = None
        self.db = None

    async def connect(self):
        """Connect to MongoDB"""
        try:
            self.client = AsyncIOMotorClient(settings.mongodb_url)
            self.db = self.client[settings.mongodb_db_name]

            # Test connection
            await self.client.admin.command('ping')
            await self.db.subsidies.create_index("id", unique=True)
            await self.db.diagnosis_sessions.create_index("id", unique=True)
            await self.db.diagnosis_answers.create_index(
                [("session_id", ASCENDING), ("question_key", ASCENDING)], unique=True
            )
            logger.info("Connected to MongoDB successfully")

        except Exception as e:
            logger.error(f"Failed to connect to MongoDB: {e}")
            raise

    async def close(self):
        """Close MongoDB connection"""
        if self.client:
            self.client.close()
            logger.info("MongoDB connection closed")

    async def health_check(self) -> bool:
        """Check MongoDB connection health"""
        try:
            await self.client.admin.command('ping')
            return True
        except Exception:
            return False

    # Subsidy catalog operations
    async def list_subsidies(
        self,
        status: Optional[str] = None,
        subsidy_ids: Optional[List[str]] = None
    ) -> List[SubsidyProgram]:
        """Get subsidies in insertion order, optionally filtered"""
        try:
            filter_query: Dict[str, Any] = {}
            if status:
                filter_query["status"] = status
            if subsidy_ids is not None:
                filter_query["id"] = {"$in": subsidy_ids}

            cursor = self.db.subsidies.find(filter_query).sort("_id", ASCENDING)
            subsidies = []
            async for doc in cursor:
                subsidies.append(parse_catalog_entry(_strip_id(doc)))
            return subsidies
        except Exception as e:
            logger.error(f"Failed to get subsidies: {e}")
            raise

    async def get_subsidy(self, subsidy_id: str) -> Optional[SubsidyProgram]:
        """Get subsidy by ID"""
        try:
            doc = await self.db.subsidies.find_one({"id": subsidy_id})
            if doc:
                return parse_catalog_entry(_strip_id(doc))
            return None
        except Exception as e:
            logger.error(f"Failed to get subsidy: {e}")
            raise

    async def create_subsidy(self, subsidy: SubsidyProgram) -> bool:
        """Insert a subsidy; False if the id already exists"""
        try:
            await self.db.subsidies.insert_one(subsidy.model_dump())
            logger.info(f"Subsidy created: {subsidy.id}")
            return True
        except DuplicateKeyError:
            logger.warning(f"Subsidy already exists: {subsidy.id}")
            return False
        except Exception as e:
            logger.error(f"Failed to create subsidy: {e}")
            raise

    async def count_subsidies(self) -> int:
        return await self.db.subsidies.count_documents({})

    async def seed_subsidies(self, catalog: List[SubsidyProgram]) -> int:
        """Seed the catalog when the collection is empty; returns inserted count"""
        try:
            if await self.count_subsidies() > 0:
                return 0
            if not catalog:
                return 0
            await self.db.subsidies.insert_many([s.model_dump() for s in catalog])
            logger.info(f"Seeded {len(catalog)} subsidies")
            return len(catalog)
        except Exception as e:
            logger.error(f"Failed to seed subsidies: {e}")
            raise

    # Diagnosis session operations
    async def create_session(self, session: DiagnosisSession) -> DiagnosisSession:
        """Create a new diagnosis session"""
        try:
            await self.db.diagnosis_sessions.insert_one(session.model_dump(mode="json"))
            logger.info(f"Diagnosis session created: {session.id}")
            return session
        except Exception as e:
            logger.error(f"Failed to create diagnosis session: {e}")
            raise

    async def get_session(self, session_id: str) -> Optional[DiagnosisSession]:
        """Get diagnosis session by ID"""
        try:
            doc = await self.db.diagnosis_sessions.find_one({"id": session_id})
            if doc:
                return DiagnosisSession(**_strip_id(doc))
            return None
        except Exception as e:
            logger.error(f"Failed to get diagnosis session: {e}")
            raise

    async def update_session(self, session: DiagnosisSession) -> bool:
        """Replace a stored session, refreshing updated_at"""
        try:
            session.updated_at = datetime.now(timezone.utc)
            result = await self.db.diagnosis_sessions.replace_one(
                {"id": session.id},
                session.model_dump(mode="json")
            )
            return result.matched_count > 0
        except Exception as e:
            logger.error(f"Failed to update diagnosis session: {e}")
            raise

    # Diagnosis answer operations
    async def upsert_answer(self, answer: DiagnosisAnswer) -> bool:
        """Store an answer, replacing any earlier answer to the same question"""
        try:
            await self.db.diagnosis_answers.update_one(
                {"session_id": answer.session_id, "question_key": answer.question_key},
                {"$set": answer.model_dump(mode="json")},
                upsert=True
            )
            return True
        except Exception as e:
            logger.error(f"Failed to store diagnosis answer: {e}")
            raise

    async def get_answers(self, session_id: str) -> List[DiagnosisAnswer]:
        """Get all answers for a session in answer order"""
        try:
            cursor = self.db.diagnosis_answers.find({"session_id": session_id}).sort("answered_at", ASCENDING)
            answers = []
            async for doc in cursor:
                answers.append(DiagnosisAnswer(**_strip_id(doc)))
            return answers
        except Exception as e:
            logger.error(f"Failed to get diagnosis answers: {e}")
            raise


# Global MongoDB service instance
mongo_service = MongoService()


def get_store() -> MongoService:
    """FastAPI dependency returning the storage service"""
    return mongo_service
