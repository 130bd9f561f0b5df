# repositories/filters.py
import logging
from typing import List, Optional

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class QuestionFilters(BaseModel):
    category: Optional[str] = None
    difficulty: Optional[str] = None
    visibility: Optional[str] = None
    type: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    isPublished: Optional[bool] = None
    myQuestionsOnly: bool = False
    authorEmail: Optional[str] = None


def parse_tags(raw: Optional[str]) -> List[str]:
    """Split a comma separated ``tags`` query value, dropping blanks."""
    if not raw:
        return []
    return [tag.strip() for tag in raw.split(",") if tag.strip()]


def build_question_filter(filters: QuestionFilters) -> dict:
    """Translate the optional list filters into a MongoDB query document.

    Every clause is an exact match except ``tags``, which matches questions
    sharing at least one tag. All clauses are AND-ed.
    """
    query = {}
    if filters.category:
        query["category"] = filters.category
    if filters.difficulty:
        query["difficulty"] = filters.difficulty
    if filters.visibility:
        query["visibility"] = filters.visibility
    if filters.type:
        query["type"] = filters.type
    if filters.tags:
        query["tags"] = {"$in": list(filters.tags)}
    if filters.isPublished is not None:
        query["isPublished"] = filters.isPublished

    if filters.myQuestionsOnly:
        if filters.authorEmail:
            query["authorEmail"] = filters.authorEmail
        else:
            logger.warning("myQuestionsOnly requested without authorEmail, ignoring")

    return query
