# routes/questions.py
import logging
import math
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from motor.motor_asyncio import AsyncIOMotorDatabase

from database import get_database
from errors import StepValidationError
from models.question import Question, QuestionUpdate
from repositories.filters import QuestionFilters, parse_tags
from repositories.question_repository import QuestionRepository
from routes.responses import internal_error, success
from validation.steps import STEPS, validate_complete_question

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/questions", tags=["questions"])

QUESTION_EXAMPLE = Question.model_config["json_schema_extra"]["example"]
MAX_LIMIT = 100


def get_question_repository(db: AsyncIOMotorDatabase = Depends(get_database)) -> QuestionRepository:
    return QuestionRepository(db)


def not_found():
    return HTTPException(status_code=404, detail="Question not found")


@router.post("", status_code=201)
async def create_question(
    payload: Dict[str, Any] = Body(..., examples=[QUESTION_EXAMPLE]),
    repo: QuestionRepository = Depends(get_question_repository),
):
    result = validate_complete_question(payload)
    if not result.valid:
        logger.info(f"Rejected question: {result.error}")
        raise StepValidationError(result.error)

    with internal_error("Failed to create question"):
        question = await repo.create(payload)
    return success("Question created successfully", question)


@router.get("")
async def get_questions(
    page: int = 1,
    limit: int = 10,
    category: Optional[str] = None,
    difficulty: Optional[str] = None,
    visibility: Optional[str] = None,
    question_type: Optional[str] = Query(None, alias="type"),
    tags: Optional[str] = Query(None, description="Comma separated, matches any"),
    isPublished: Optional[bool] = None,
    myQuestionsOnly: bool = False,
    authorEmail: Optional[str] = None,
    repo: QuestionRepository = Depends(get_question_repository),
):
    if page < 1:
        raise HTTPException(status_code=400, detail="Page must be greater than 0")
    if limit < 1 or limit > MAX_LIMIT:
        raise HTTPException(status_code=400, detail=f"Limit must be between 1 and {MAX_LIMIT}")

    filters = QuestionFilters(
        category=category,
        difficulty=difficulty,
        visibility=visibility,
        type=question_type,
        tags=parse_tags(tags),
        isPublished=isPublished,
        myQuestionsOnly=myQuestionsOnly,
        authorEmail=authorEmail,
    )
    with internal_error("Failed to fetch questions"):
        questions, total = await repo.list(filters, page, limit)

    return success(
        "Questions retrieved successfully",
        questions,
        pagination={
            "page": page,
            "limit": limit,
            "total": total,
            "totalPages": math.ceil(total / limit),
        },
    )


@router.get("/stats")
async def get_question_stats(repo: QuestionRepository = Depends(get_question_repository)):
    with internal_error("Failed to fetch statistics"):
        stats = await repo.stats()
    return success("Statistics retrieved successfully", stats)


@router.get("/categories")
async def get_categories(repo: QuestionRepository = Depends(get_question_repository)):
    with internal_error("Failed to fetch categories"):
        categories = await repo.distinct_categories()
    return success("Categories retrieved successfully", categories)


@router.get("/tags")
async def get_tags(repo: QuestionRepository = Depends(get_question_repository)):
    with internal_error("Failed to fetch tags"):
        tags = await repo.distinct_tags()
    return success("Tags retrieved successfully", tags)


@router.get("/author/{email}")
async def get_questions_by_author(email: str, repo: QuestionRepository = Depends(get_question_repository)):
    with internal_error("Failed to fetch questions"):
        questions = await repo.list_by_author(email)
    return success("Questions retrieved successfully", questions)


@router.post("/validate/step/{step}")
async def validate_question_step(step: int, payload: Dict[str, Any] = Body(...)):
    """Check one page of the authoring form without saving anything."""
    validator = STEPS.get(step)
    if validator is None:
        raise HTTPException(status_code=400, detail=f"Step must be between 1 and {len(STEPS)}")
    result = validator(payload)
    if not result.valid:
        raise StepValidationError(result.error)
    return success(f"Step {step} is valid")


@router.get("/{id}")
async def get_question_by_id(id: str, repo: QuestionRepository = Depends(get_question_repository)):
    with internal_error("Failed to fetch question"):
        question = await repo.get_by_id(id)
    if not question:
        raise not_found()
    return success("Question retrieved successfully", question)


@router.put("/{id}")
async def update_question(
    id: str,
    update: QuestionUpdate,
    repo: QuestionRepository = Depends(get_question_repository),
):
    changes = update.model_dump(exclude_unset=True)
    if not changes:
        raise HTTPException(status_code=400, detail="No fields to update")

    with internal_error("Failed to update question"):
        question = await repo.update(id, changes)
    if not question:
        raise not_found()
    return success("Question updated successfully", question)


@router.patch("/{id}/publish")
async def publish_question(id: str, repo: QuestionRepository = Depends(get_question_repository)):
    with internal_error("Failed to publish question"):
        question = await repo.publish(id)
    if not question:
        raise not_found()
    return success("Question published successfully", question)


@router.patch("/{id}/unpublish")
async def unpublish_question(id: str, repo: QuestionRepository = Depends(get_question_repository)):
    with internal_error("Failed to unpublish question"):
        question = await repo.unpublish(id)
    if not question:
        raise not_found()
    return success("Question unpublished successfully", question)


@router.delete("/{id}")
async def delete_question(id: str, repo: QuestionRepository = Depends(get_question_repository)):
    with internal_error("Failed to delete question"):
        deleted = await repo.delete(id)
    if not deleted:
        raise not_found()
    return success("Question deleted successfully")
