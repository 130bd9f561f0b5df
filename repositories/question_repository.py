# repositories/question_repository.py
import asyncio
import logging
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pydantic import ValidationError
from pymongo import ReturnDocument

from errors import InvalidQuestionIdError, QuestionValidationError, pydantic_error_details
from models.question import Question
from repositories.filters import QuestionFilters, build_question_filter

logger = logging.getLogger(__name__)

# Most recently updated first, _id breaks ties between equal timestamps
NEWEST_FIRST = [("updatedAt", -1), ("_id", -1)]


def to_object_id(question_id: str) -> ObjectId:
    try:
        return ObjectId(question_id)
    except (InvalidId, TypeError):
        raise InvalidQuestionIdError(question_id)


def serialize_question(doc: dict) -> dict:
    question = dict(doc)
    question["id"] = str(question.pop("_id"))
    return question


def validate_question(data: dict) -> dict:
    """Run the entity constraints and return the document to store (without id)."""
    try:
        question = Question.model_validate(data)
    except ValidationError as e:
        raise QuestionValidationError(pydantic_error_details(e))
    return question.model_dump(exclude={"id", "updatedAt"}, exclude_none=True)


class QuestionRepository:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.collection = db.questions

    async def create(self, data: dict) -> dict:
        doc = validate_question(data)
        doc["updatedAt"] = datetime.now(timezone.utc)
        result = await self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        logger.info(f"Created question {result.inserted_id} ({doc['type']})")
        return serialize_question(doc)

    async def list(self, filters: QuestionFilters, page: int = 1, limit: int = 10) -> Tuple[List[dict], int]:
        page = max(page, 1)
        limit = max(limit, 1)
        query = build_question_filter(filters)
        cursor = (
            self.collection.find(query)
            .sort(NEWEST_FIRST)
            .skip((page - 1) * limit)
            .limit(limit)
        )
        questions, total = await asyncio.gather(
            cursor.to_list(length=limit),
            self.collection.count_documents(query),
        )
        return [serialize_question(q) for q in questions], total

    async def get_by_id(self, question_id: str) -> Optional[dict]:
        doc = await self.collection.find_one({"_id": to_object_id(question_id)})
        return serialize_question(doc) if doc else None

    async def update(self, question_id: str, changes: dict) -> Optional[dict]:
        oid = to_object_id(question_id)
        existing = await self.collection.find_one({"_id": oid})
        if not existing:
            return None

        merged = {k: v for k, v in existing.items() if k != "_id"}
        merged.update(changes)
        doc = validate_question(merged)
        doc["updatedAt"] = datetime.now(timezone.utc)

        result = await self.collection.replace_one({"_id": oid}, doc)
        if result.matched_count == 0:
            # deleted between the read and the write
            return None
        logger.info(f"Updated question {question_id}: {sorted(changes)}")
        return serialize_question(dict(doc, _id=oid))

    async def delete(self, question_id: str) -> bool:
        result = await self.collection.delete_one({"_id": to_object_id(question_id)})
        if result.deleted_count:
            logger.info(f"Deleted question {question_id}")
        return result.deleted_count > 0

    async def stats(self) -> dict:
        total, published, draft = await asyncio.gather(
            self.collection.count_documents({}),
            self.collection.count_documents({"isPublished": True}),
            self.collection.count_documents({"isPublished": {"$ne": True}}),
        )
        return {"total": total, "published": published, "draft": draft}

    async def distinct_categories(self) -> List[str]:
        return await self._distinct("category")

    async def distinct_tags(self) -> List[str]:
        return await self._distinct("tags")

    async def _distinct(self, field: str) -> List[str]:
        values = await self.collection.distinct(field)
        return [v for v in values if v is not None and v != ""]

    async def list_by_author(self, email: str) -> List[dict]:
        questions = await self.collection.find({"authorEmail": email}).sort(NEWEST_FIRST).to_list(length=None)
        return [serialize_question(q) for q in questions]

    async def publish(self, question_id: str) -> Optional[dict]:
        return await self._set_published(question_id, True)

    async def unpublish(self, question_id: str) -> Optional[dict]:
        return await self._set_published(question_id, False)

    async def _set_published(self, question_id: str, published: bool) -> Optional[dict]:
        doc = await self.collection.find_one_and_update(
            {"_id": to_object_id(question_id)},
            {"$set": {"isPublished": published, "updatedAt": datetime.now(timezone.utc)}},
            return_document=ReturnDocument.AFTER,
        )
        return serialize_question(doc) if doc else None
