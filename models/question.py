# models/question.py
from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import datetime
from enum import Enum
from typing import Annotated, Dict, List, Optional, Union

EMAIL_PATTERN = r"^\S+@\S+\.\S+$"

# ints stay ints on the way through, so 5 is stored as 5 and not 5.0
NonNegativeNumber = Annotated[Union[int, float], Field(ge=0)]

LIST_FIELDS = ("tags", "options", "matchPairs")


class QuestionType(str, Enum):
    SINGLE_CHOICE_MCQ = "Single Choice MCQ"
    MULTIPLE_CHOICE = "Multiple Choice"
    TRUE_FALSE = "True/False"
    DESCRIPTIVE = "Descriptive"
    MATCH_FOLLOWING = "Match Following"


class Difficulty(str, Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


class Visibility(str, Enum):
    PUBLIC = "Public"
    PRIVATE = "Private"
    SHARED = "Shared"
    DRAFT = "Draft"


QUESTION_TYPES = [t.value for t in QuestionType]
DIFFICULTIES = [d.value for d in Difficulty]
VISIBILITIES = [v.value for v in Visibility]


class MatchPair(BaseModel):
    columnA: str
    columnB: str


class Question(BaseModel):
    """Canonical question document, validated before every write."""

    model_config = ConfigDict(
        use_enum_values=True,
        extra="ignore",
        json_schema_extra={
            "example": {
                "title": "Basic Algebra Problem",
                "type": "Single Choice MCQ",
                "difficulty": "Easy",
                "category": "Mathematics",
                "visibility": "Public",
                "author": "Jane Doe",
                "authorEmail": "jane@example.com",
                "tags": ["algebra", "equations"],
                "content": "Solve for x: 2x + 3 = 7",
                "options": ["x = 1", "x = 2", "x = 3", "x = 4"],
                "correctAnswer": "x = 2",
                "points": 5,
                "estimatedTime": 2,
                "negativeMarks": 1,
                "explanation": "Subtract 3 from both sides, then divide by 2.",
            }
        },
    )

    id: Optional[str] = None  # ObjectId as string
    title: str = Field(..., min_length=5)
    type: QuestionType
    difficulty: Difficulty
    category: str = Field(..., min_length=1)
    visibility: Visibility = Visibility.DRAFT
    author: str = Field(..., min_length=1)
    authorEmail: str = Field(..., pattern=EMAIL_PATTERN)
    tags: List[str] = Field(default_factory=list)
    content: str = Field(..., min_length=10)
    options: List[str] = Field(default_factory=list)
    matchPairs: List[MatchPair] = Field(default_factory=list)
    correctAnswer: Optional[Union[str, List[str]]] = None
    correctMatches: Optional[Dict[str, str]] = None
    points: NonNegativeNumber
    estimatedTime: NonNegativeNumber  # minutes
    negativeMarks: Optional[NonNegativeNumber] = None
    explanation: Optional[str] = None
    authorNotes: Optional[str] = None
    isPublished: bool = False
    updatedAt: Optional[datetime] = None

    @field_validator(*LIST_FIELDS, mode="before")
    @classmethod
    def null_list_is_empty(cls, value):
        return [] if value is None else value


class QuestionUpdate(BaseModel):
    """Partial update body. Only the fields the client sent are merged."""

    model_config = ConfigDict(use_enum_values=True, extra="ignore")

    title: Optional[str] = Field(None, min_length=5)
    type: Optional[QuestionType] = None
    difficulty: Optional[Difficulty] = None
    category: Optional[str] = Field(None, min_length=1)
    visibility: Optional[Visibility] = None
    author: Optional[str] = Field(None, min_length=1)
    authorEmail: Optional[str] = Field(None, pattern=EMAIL_PATTERN)
    tags: Optional[List[str]] = None
    content: Optional[str] = Field(None, min_length=10)
    options: Optional[List[str]] = None
    matchPairs: Optional[List[MatchPair]] = None
    correctAnswer: Optional[Union[str, List[str]]] = None
    correctMatches: Optional[Dict[str, str]] = None
    points: Optional[NonNegativeNumber] = None
    estimatedTime: Optional[NonNegativeNumber] = None
    negativeMarks: Optional[NonNegativeNumber] = None
    explanation: Optional[str] = None
    authorNotes: Optional[str] = None
    isPublished: Optional[bool] = None

    @field_validator(*LIST_FIELDS, mode="before")
    @classmethod
    def null_list_is_empty(cls, value):
        """A null list clears it."""
        return [] if value is None else value
