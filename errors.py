# errors.py
from typing import List, Optional


class QuestionBankError(Exception):
    """Base class for errors raised by the question repository."""


class QuestionValidationError(QuestionBankError):
    """A question document violates the entity constraints."""

    def __init__(self, details: List[dict], message: str = "Validation failed"):
        super().__init__(message)
        self.message = message
        self.details = details


class InvalidQuestionIdError(QuestionBankError):
    """The supplied id is not a well-formed ObjectId."""

    def __init__(self, question_id: Optional[str] = None):
        super().__init__(f"Invalid question ID format: {question_id}")
        self.question_id = question_id


class StepValidationError(QuestionBankError):
    """A step validator rejected the request body."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def pydantic_error_details(exc) -> List[dict]:
    """Flatten a pydantic ValidationError into [{field, message}] entries."""
    details = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        details.append({"field": ".".join(loc), "message": err.get("msg", "")})
    return details
