"""Resume intake and classification pipeline.

One run downloads the uploaded file, has the model extract candidate fields,
classifies the candidate against the job category catalog, scores the match
and stores a single resume row. Stages run strictly one after another; any
transport, model or store failure aborts the run before anything is written.
"""
import time
import uuid
from typing import List, Optional

import httpx
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from configs.config import Settings
from database import get_job_categories
from models.schemas import AnalysisSummary, JobCategoryOut, ProcessResult, UploadRequest
from services.classifier import CategoryClassifier
from services.errors import FileDownloadError, PersistenceError
from services.extraction import FieldExtractor
from services.intake import file_extension
from services.llm_client import GeminiTextModel, TextModel
from services.normalizer import normalize_profile
from services.persistence import build_resume_record, save_resume
from services.scoring import score_classification


async def download_file(client: httpx.AsyncClient, url: str) -> bytes:
    try:
        response = await client.get(url)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        logger.error(f"File download failed: {e.response.status_code} {e.response.reason_phrase}")
        raise FileDownloadError(
            f"Failed to download resume file: {e.response.status_code} {e.response.reason_phrase}"
        ) from e
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.error(f"File download failed: {str(e)}")
        raise FileDownloadError(f"Failed to download resume file: {str(e)}") from e
    return response.content


class ResumePipeline:
    def __init__(
        self,
        settings: Settings,
        db: Session,
        model: Optional[TextModel] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.settings = settings
        self.db = db
        self.model = model if model is not None else GeminiTextModel(settings)
        self.http_client = http_client
        self.extractor = FieldExtractor(self.model)
        self.classifier = CategoryClassifier(self.model)

    def _client_kwargs(self) -> dict:
        kwargs = {"follow_redirects": True}
        if self.settings.http_timeout_seconds is not None:
            kwargs["timeout"] = self.settings.http_timeout_seconds
        return kwargs

    async def _fetch(self, url: str) -> bytes:
        if self.http_client is not None:
            return await download_file(self.http_client, url)
        async with httpx.AsyncClient(**self._client_kwargs()) as client:
            return await download_file(client, url)

    def _load_categories(self) -> List[JobCategoryOut]:
        try:
            rows = get_job_categories(self.db)
        except SQLAlchemyError as e:
            logger.error(f"Failed to load job categories: {str(e)}")
            raise PersistenceError(f"Failed to load job categories: {str(e)}") from e
        return [JobCategoryOut.model_validate(row) for row in rows]

    async def run(self, request: UploadRequest) -> ProcessResult:
        request_id = str(uuid.uuid4())
        start_time = time.time()
        logger.info({"request_id": request_id, "file_name": request.file_name, "event": "request_start"})

        content = await self._fetch(request.file_url)
        ext = file_extension(request.file_name)
        logger.info(
            {
                "request_id": request_id,
                "event": "download_completed",
                "bytes": len(content),
                "extension": ext,
                "latency": time.time() - start_time,
            }
        )

        reply = await self.extractor.extract(content, request.file_name)
        profile = normalize_profile(reply, request.file_name)
        logger.info(
            {
                "request_id": request_id,
                "event": "extraction_completed",
                "skills_count": len(profile.parsed_skills),
                "latency": time.time() - start_time,
            }
        )

        categories = self._load_categories()
        category_name = await self.classifier.classify(profile.parsed_skills, categories)
        classification = score_classification(category_name, profile.parsed_skills, categories)
        logger.info(
            {
                "request_id": request_id,
                "event": "classification_completed",
                "predicted_category": category_name,
                "matched": classification.matched_category is not None,
                "confidence_score": classification.confidence_score,
                "latency": time.time() - start_time,
            }
        )

        record = build_resume_record(request, profile, classification, ext, len(content))
        resume = save_resume(self.db, record)

        logger.info(
            {
                "request_id": request_id,
                "event": "request_completed",
                "resume_id": resume.id,
                "latency": time.time() - start_time,
            }
        )
        return ProcessResult(
            resume_id=resume.id,
            analysis=AnalysisSummary(
                candidate_name=profile.candidate_name,
                predicted_category=category_name,
                confidence_score=classification.confidence_score,
                skills_count=len(profile.parsed_skills),
            ),
        )
