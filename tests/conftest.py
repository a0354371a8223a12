import os
import tempfile

# must be set before anything imports configs.config
os.environ["DB_URL"] = "sqlite://"
os.environ["UPLOAD_FOLDER"] = tempfile.mkdtemp(prefix="resume-uploads-")
os.environ["PUBLIC_BASE_URL"] = "http://testserver"
os.environ.pop("GEMINI_API_KEY", None)

import httpx
import pytest
from fastapi.testclient import TestClient

from database import Base, SessionLocal, engine, get_db
from main import app
from models.job_category import JobCategory
from models.resume import Resume  # noqa: F401
from routes.process import get_http_client, get_text_model


class FakeTextModel:
    """Scripted stand-in for the Gemini client; an Exception reply is raised."""

    def __init__(self, replies):
        self.replies = list(replies)
        self.calls = []

    async def generate(self, system_prompt, user_prompt, max_tokens, temperature):
        self.calls.append(
            {
                "system_prompt": system_prompt,
                "user_prompt": user_prompt,
                "max_tokens": max_tokens,
                "temperature": temperature,
            }
        )
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


class FileServer:
    """httpx MockTransport handler serving fixed bytes, recording each request."""

    def __init__(self, content=b"", status_code=200):
        self.content = content
        self.status_code = status_code
        self.requests = []

    def __call__(self, request):
        self.requests.append(request)
        return httpx.Response(self.status_code, content=self.content)


@pytest.fixture
def db_session():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def categories(db_session):
    rows = [
        JobCategory(name="Software Engineer", skills_keywords=["Python", "React", "JavaScript"]),
        JobCategory(name="DevOps Engineer", skills_keywords=["AWS", "Docker", "Kubernetes"]),
        JobCategory(name="Data Scientist", skills_keywords=["Machine Learning", "Statistics"]),
    ]
    db_session.add_all(rows)
    db_session.commit()
    return {row.name: row for row in rows}


@pytest.fixture
def make_client(db_session):
    """Build a TestClient wired to a fake model and a mock file server."""

    def _make(model, server):
        async def _http_client():
            async with httpx.AsyncClient(transport=httpx.MockTransport(server)) as client:
                yield client

        app.dependency_overrides[get_db] = lambda: db_session
        app.dependency_overrides[get_text_model] = lambda: model
        app.dependency_overrides[get_http_client] = _http_client
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()
