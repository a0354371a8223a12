import os
import sys
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from loguru import logger
import uvicorn

from configs.config import LOG_LEVEL, UPLOAD_FOLDER
from routes.process import router as process_router, failure_response
from routes.resumes import router as resumes_router, categories_router
from routes.upload import router as upload_router
from database import engine, SessionLocal, seed_job_categories
from models.resume import Base
from models.job_category import JobCategory  # noqa: F401  registers the table

logger.remove()
logger.add(sys.stderr, level=LOG_LEVEL)

app = FastAPI(
    title="AI Resume Screener",
    description="Upload resumes, extract candidate fields with an LLM, classify them into job categories",
    version="1.0.0"
)

# CORS setup
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

os.makedirs(UPLOAD_FOLDER, exist_ok=True)
app.mount("/files", StaticFiles(directory=UPLOAD_FOLDER), name="files")


@app.on_event("startup")
async def startup_event():
    logger.info("Initializing database...")
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        seed_job_categories(db)
    finally:
        db.close()


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.error(f"Invalid request to {request.url.path}: {exc.errors()}")
    fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in exc.errors())
    return failure_response(422, f"Invalid request: {fields}")

# Routers
app.include_router(process_router, prefix="/api/v1", tags=["Pipeline"])
app.include_router(upload_router, prefix="/api/v1/upload", tags=["Upload"])
app.include_router(resumes_router, prefix="/api/v1/resumes", tags=["Resumes"])
app.include_router(categories_router, prefix="/api/v1/categories", tags=["Categories"])

@app.get("/")
async def root():
    return {"message": "Welcome to AI Resume Screener! Use /docs for API details."}

if __name__ == "__main__":
    port = int(os.environ.get("PORT", 10000))
    uvicorn.run(app, host="0.0.0.0", port=port, workers=1, log_level="error")
