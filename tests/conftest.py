import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from examgate.app import app
from examgate.database import Base, get_db
from examgate.dependencies import get_mail_service
from examgate.models.db import ContentDocument  # noqa: F401
from examgate.models.questions import (
    EssayQuestion,
    MultipleAnswerQuestion,
    MultipleChoiceQuestion,
    TestDefinition,
    TestSettings,
)
from examgate.services.content_store import ContentStore

STUDENT_CODE = "TEST2026"
EDITOR_CODE = "EDIT2026"
TINY_PNG = (
    "data:image/png;base64,"
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)


class FakeMailService:
    def __init__(self):
        self.messages = []

    def deliver(self, subject, body):
        self.messages.append((subject, body))


@pytest.fixture(autouse=True)
def access_codes(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ACCESS_CODE", STUDENT_CODE)
    monkeypatch.setenv("EDITOR_CODE", EDITOR_CODE)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def store(db_session) -> ContentStore:
    return ContentStore(db_session)


@pytest.fixture
def mail() -> FakeMailService:
    return FakeMailService()


@pytest.fixture
def api_client(session_factory, mail):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_mail_service] = lambda: mail
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def sample_definition() -> TestDefinition:
    return TestDefinition(
        settings=TestSettings(randomizeQuestions=True),
        questions=[
            MultipleChoiceQuestion(
                id=1,
                prompt="Pick B",
                imageUrl=TINY_PNG,
                options=["A", "B", "C"],
                correctIndex=1,
                randomizeOptions=True,
            ),
            MultipleAnswerQuestion(
                id=2,
                prompt="Pick X and Z",
                options=["X", "Y", "Z"],
                correctIndices=[0, 2],
            ),
            EssayQuestion(id=4, prompt="Explain yourself"),
        ],
    )
