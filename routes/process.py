from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, Response
import httpx
from loguru import logger
from sqlalchemy.orm import Session

from configs.config import Settings, get_settings
from database import get_db
from models.schemas import UploadRequest
from services.errors import PipelineError
from services.llm_client import GeminiTextModel, TextModel
from services.pipeline import ResumePipeline

router = APIRouter()

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}


def get_text_model(settings: Settings = Depends(get_settings)) -> TextModel:
    return GeminiTextModel(settings)


async def get_http_client(settings: Settings = Depends(get_settings)):
    kwargs = {"follow_redirects": True}
    if settings.http_timeout_seconds is not None:
        kwargs["timeout"] = settings.http_timeout_seconds
    async with httpx.AsyncClient(**kwargs) as client:
        yield client


def failure_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": message},
        headers=CORS_HEADERS,
    )


@router.options("/process-resume", include_in_schema=False)
async def process_resume_preflight():
    return Response(status_code=200, headers=CORS_HEADERS)


@router.post("/process-resume", summary="Extract, classify and store an uploaded resume")
async def process_resume(
    request: UploadRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    model: TextModel = Depends(get_text_model),
    http_client: httpx.AsyncClient = Depends(get_http_client),
):
    logger.info(f"Processing resume: {request.file_name}")
    try:
        pipeline = ResumePipeline(settings, db, model=model, http_client=http_client)
        result = await pipeline.run(request)
    except PipelineError as e:
        logger.error(f"Error in process-resume: {str(e)}")
        return failure_response(e.status_code, str(e))
    except Exception as e:
        logger.error(f"Unexpected error in process-resume: {str(e)}", exc_info=True)
        return failure_response(500, str(e) or "Unknown error occurred")

    logger.info(f"Resume processed successfully: {result.resume_id}")
    return JSONResponse(content=result.model_dump(), headers=CORS_HEADERS)
