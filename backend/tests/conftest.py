import pytest
from fastapi.testclient import TestClient
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import sessionmaker

import questionnaire.models  # noqa: F401 — register models with Base.metadata
from questionnaire.core.database import Base, get_db
from questionnaire.main import app as fastapi_app
from questionnaire.models import Question, Questionnaire, QuestionnaireResponse, User

# In-memory SQLite for tests — no PostgreSQL dependency needed
TEST_DATABASE_URL = "sqlite://"

engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(autouse=True)
def setup_db():
    """Create all tables before each test, drop after."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    """Provide a test database session."""
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def survey(db) -> Questionnaire:
    """A questionnaire with one date, one numeric and one text question."""
    questionnaire = Questionnaire(name="Course feedback")
    questionnaire.questions = [
        Question(type="date", name="start", content="When did you start?", position=1),
        Question(type="numeric", name="hours", content="Hours per week?", position=2),
        Question(type="text", name="comments", content="Any comments?", position=3),
    ]
    db.add(questionnaire)
    db.commit()
    db.refresh(questionnaire)
    return questionnaire


@pytest.fixture
def date_question(survey) -> Question:
    return survey.questions[0]


@pytest.fixture
def numeric_question(survey) -> Question:
    return survey.questions[1]


@pytest.fixture
def text_question(survey) -> Question:
    return survey.questions[2]


@pytest.fixture
def users(db) -> list[User]:
    people = [
        User(username="asha", firstname="Asha", lastname="Rai"),
        User(username="bikash", firstname="Bikash", lastname="Thapa"),
    ]
    db.add_all(people)
    db.commit()
    for person in people:
        db.refresh(person)
    return people


@pytest.fixture
def make_response(db, survey):
    """Factory for response rows belonging to the survey."""

    def _make(userid=None, submitted=1_700_000_000, complete="y", questionnaire=None):
        record = QuestionnaireResponse(
            questionnaireid=(questionnaire or survey).id,
            userid=userid,
            submitted=submitted,
            complete=complete,
            grade=0,
        )
        db.add(record)
        db.commit()
        db.refresh(record)
        return record

    return _make


@pytest.fixture
def client(db):
    """TestClient with overridden DB dependency."""

    def _override_get_db():
        try:
            yield db
        finally:
            pass

    fastapi_app.dependency_overrides[get_db] = _override_get_db
    yield TestClient(fastapi_app)
    fastapi_app.dependency_overrides.clear()
