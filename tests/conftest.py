import pytest
from unittest.mock import AsyncMock, MagicMock

from fastapi.testclient import TestClient

from main import app
from middleware import limiter
from repositories.question_repository import QuestionRepository
from routes.questions import get_question_repository


@pytest.fixture
def valid_question():
    """A complete Single Choice MCQ payload that passes every step."""
    return {
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
    }


@pytest.fixture
def cursor():
    """Chainable Motor cursor: find().sort().skip().limit().to_list()."""
    cursor = MagicMock()
    cursor.sort.return_value = cursor
    cursor.skip.return_value = cursor
    cursor.limit.return_value = cursor
    cursor.to_list = AsyncMock(return_value=[])
    return cursor


@pytest.fixture
def mock_db(cursor):
    """Provides a mocked Motor database with an async questions collection."""
    db = MagicMock()
    collection = db.questions
    collection.find.return_value = cursor
    for method in (
        "insert_one",
        "find_one",
        "replace_one",
        "delete_one",
        "count_documents",
        "distinct",
        "find_one_and_update",
    ):
        setattr(collection, method, AsyncMock())
    return db


@pytest.fixture
def mock_repo():
    return AsyncMock(spec=QuestionRepository)


@pytest.fixture
def client(mock_repo):
    """A test client whose routes talk to the mocked repository."""
    limiter.reset()
    app.dependency_overrides[get_question_repository] = lambda: mock_repo
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def db_client(mock_db):
    """A test client backed by a real repository over the mocked collection."""
    limiter.reset()
    app.dependency_overrides[get_question_repository] = lambda: QuestionRepository(mock_db)
    yield TestClient(app)
    app.dependency_overrides.clear()
