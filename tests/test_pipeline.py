import asyncio
import json

import httpx
from sqlalchemy.exc import SQLAlchemyError

from conftest import FakeTextModel, FileServer
from configs.config import Settings
from models.resume import Resume
from models.schemas import UploadRequest
from services.errors import FileDownloadError, ModelServiceError
from services.pipeline import ResumePipeline

BODY = {"fileUrl": "https://storage.example.com/resumes/jane.txt", "fileName": "jane.txt", "uploadedBy": "user-1"}

EXTRACTED = json.dumps(
    {
        "candidate_name": "Jane Doe",
        "candidate_email": "jane@example.com",
        "phone_number": None,
        "parsed_skills": ["React", "AWS"],
        "experience_years": 4,
        "education_level": "Bachelor's",
        "summary": "Full stack engineer",
    }
)

CORS_ORIGIN = "access-control-allow-origin"


def test_end_to_end_devops_candidate(make_client, db_session, categories):
    model = FakeTextModel(["```json\n" + EXTRACTED + "\n```", "DevOps Engineer"])
    server = FileServer(content=b"Jane Doe\nReact, AWS")
    client = make_client(model, server)

    response = client.post("/api/v1/process-resume", json=BODY)

    assert response.status_code == 200
    assert response.headers[CORS_ORIGIN] == "*"
    data = response.json()
    assert data["success"] is True
    assert data["analysis"] == {
        "candidate_name": "Jane Doe",
        "predicted_category": "DevOps Engineer",
        "confidence_score": 90,
        "skills_count": 2,
    }

    row = db_session.query(Resume).one()
    assert row.id == data["resume_id"]
    assert row.predicted_category == categories["DevOps Engineer"].id
    assert row.confidence_score == 90
    assert row.parsed_skills == ["React", "AWS"]
    assert row.uploaded_by == "user-1"
    assert row.file_url == BODY["fileUrl"]
    assert row.raw_text == "Processed txt file - 19 bytes"
    assert row.status == "processed"

    assert [str(r.url) for r in server.requests] == [BODY["fileUrl"]]
    assert "The file content is: Jane Doe" in model.calls[0]["user_prompt"]
    assert model.calls[1]["user_prompt"].endswith("React, AWS")


def test_unknown_category_is_stored_without_match(make_client, db_session, categories):
    model = FakeTextModel([EXTRACTED, "Software Engineers"])
    client = make_client(model, FileServer(content=b"x"))

    data = client.post("/api/v1/process-resume", json=BODY).json()

    assert data["analysis"]["predicted_category"] == "Software Engineers"
    assert data["analysis"]["confidence_score"] == 70
    row = db_session.query(Resume).one()
    assert row.predicted_category is None


def test_malformed_extraction_uses_filename_fallback(make_client, db_session, categories):
    model = FakeTextModel(["I could not read that file", "General"])
    client = make_client(model, FileServer(content=b"%PDF-1.4"))

    body = dict(BODY, fileName="jane_doe_resume.pdf")
    data = client.post("/api/v1/process-resume", json=body).json()

    assert data["success"] is True
    assert data["analysis"]["candidate_name"] == "jane doe resume"
    assert data["analysis"]["skills_count"] == 1
    row = db_session.query(Resume).one()
    assert row.raw_text == "Processed pdf file - 8 bytes"
    assert "base64 encoded" in model.calls[0]["user_prompt"]


def test_download_failure_writes_nothing(make_client, db_session, categories):
    model = FakeTextModel([EXTRACTED, "DevOps Engineer"])
    client = make_client(model, FileServer(status_code=404))

    response = client.post("/api/v1/process-resume", json=BODY)

    assert response.status_code == 502
    assert response.headers[CORS_ORIGIN] == "*"
    data = response.json()
    assert data["success"] is False
    assert data["error"].startswith("Failed to download resume file: 404")
    assert db_session.query(Resume).count() == 0
    assert model.calls == []


def test_model_error_is_fatal(make_client, db_session, categories):
    model = FakeTextModel([ModelServiceError("Model API error: quota exceeded")])
    client = make_client(model, FileServer(content=b"x"))

    response = client.post("/api/v1/process-resume", json=BODY)

    assert response.status_code == 502
    assert response.json() == {"success": False, "error": "Model API error: quota exceeded"}
    assert db_session.query(Resume).count() == 0


def test_classifier_error_is_fatal(make_client, db_session, categories):
    model = FakeTextModel([EXTRACTED, ModelServiceError("Model API error: unavailable")])
    client = make_client(model, FileServer(content=b"x"))

    response = client.post("/api/v1/process-resume", json=BODY)

    assert response.status_code == 502
    assert db_session.query(Resume).count() == 0


def test_insert_failure_reports_store_error(make_client, db_session, categories, monkeypatch):
    def broken_commit():
        raise SQLAlchemyError("disk full")

    monkeypatch.setattr(db_session, "commit", broken_commit)
    model = FakeTextModel([EXTRACTED, "DevOps Engineer"])
    client = make_client(model, FileServer(content=b"x"))

    response = client.post("/api/v1/process-resume", json=BODY)

    assert response.status_code == 500
    assert response.json()["success"] is False
    assert response.json()["error"] == "Failed to save resume: disk full"
    monkeypatch.undo()
    assert db_session.query(Resume).count() == 0


def test_missing_api_key_fails_uniformly(db_session, categories):
    from fastapi.testclient import TestClient
    from database import get_db
    from main import app
    from routes.process import get_http_client

    async def _http_client():
        async with httpx.AsyncClient(transport=httpx.MockTransport(FileServer(content=b"x"))) as client:
            yield client

    app.dependency_overrides[get_db] = lambda: db_session
    app.dependency_overrides[get_http_client] = _http_client
    try:
        response = TestClient(app).post("/api/v1/process-resume", json=BODY)
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "GEMINI_API_KEY is not set"}


def test_invalid_body_uses_failure_shape(make_client):
    client = make_client(FakeTextModel([]), FileServer())

    response = client.post("/api/v1/process-resume", json={"fileName": "jane.txt"})

    assert response.status_code == 422
    assert response.headers[CORS_ORIGIN] == "*"
    assert response.json()["success"] is False
    assert "fileUrl" in response.json()["error"]


def test_preflight_returns_empty_response(make_client):
    client = make_client(FakeTextModel([]), FileServer())

    response = client.options("/api/v1/process-resume")

    assert response.status_code == 200
    assert response.content == b""
    assert response.headers[CORS_ORIGIN] == "*"
    assert "content-type" in response.headers["access-control-allow-headers"]


def test_pipeline_runs_stages_in_order(db_session, categories):
    model = FakeTextModel([EXTRACTED, "data scientist"])
    server = FileServer(content=b"resume")

    async def run():
        async with httpx.AsyncClient(transport=httpx.MockTransport(server)) as client:
            pipeline = ResumePipeline(Settings(), db_session, model=model, http_client=client)
            return await pipeline.run(UploadRequest.model_validate(BODY))

    result = asyncio.run(run())

    assert result.analysis.predicted_category == "data scientist"
    assert result.analysis.confidence_score == 60
    assert len(model.calls) == 2
    row = db_session.query(Resume).one()
    assert row.predicted_category == categories["Data Scientist"].id


def test_pipeline_download_error_raises(db_session, categories):
    def unreachable(request):
        raise httpx.ConnectError("connection refused", request=request)

    model = FakeTextModel([])

    async def run():
        async with httpx.AsyncClient(transport=httpx.MockTransport(unreachable)) as client:
            pipeline = ResumePipeline(Settings(), db_session, model=model, http_client=client)
            await pipeline.run(UploadRequest.model_validate(BODY))

    try:
        asyncio.run(run())
    except FileDownloadError as e:
        assert "connection refused" in str(e)
    else:
        raise AssertionError("expected FileDownloadError")
    assert db_session.query(Resume).count() == 0


def test_non_finite_experience_is_stored_as_empty(make_client, db_session, categories):
    reply = '{"candidate_name": "Jane Doe", "parsed_skills": ["AWS"], "experience_years": Infinity}'
    model = FakeTextModel([reply, "DevOps Engineer"])
    client = make_client(model, FileServer(content=b"x"))

    response = client.post("/api/v1/process-resume", json=BODY)

    assert response.status_code == 200
    assert response.json()["analysis"]["confidence_score"] == 90
    row = db_session.query(Resume).one()
    assert row.experience_years is None
