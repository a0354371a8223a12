from fastapi import APIRouter, UploadFile, File, HTTPException, Depends
from typing import List
import os
from loguru import logger

from configs.config import Settings, get_settings
from models.schemas import FileVerdict
from services.intake import MAX_FILE_SIZE, validate_file, storage_name

router = APIRouter()


def reject(file: UploadFile, error: str) -> FileVerdict:
    logger.error(f"File validation error: {file.filename}: {error}")
    return FileVerdict(file_name=file.filename, accepted=False, error=error)


async def store_upload(file: UploadFile, settings: Settings) -> FileVerdict:
    # check the declared size before buffering anything
    if file.size is not None:
        error = validate_file(file.filename, file.size)
        if error:
            return reject(file, error)

    # never hold more than one byte past the limit in memory
    content = await file.read(MAX_FILE_SIZE + 1)
    error = validate_file(file.filename, len(content))
    if error:
        return reject(file, error)

    os.makedirs(settings.upload_folder, exist_ok=True)
    stored_name = storage_name(file.filename)
    with open(os.path.join(settings.upload_folder, stored_name), "wb") as buffer:
        buffer.write(content)

    file_url = f"{settings.public_base_url.rstrip('/')}/files/{stored_name}"
    logger.info(f"Stored upload {file.filename} as {stored_name} ({len(content)} bytes)")
    return FileVerdict(file_name=file.filename, accepted=True, file_url=file_url)


@router.post("", summary="Upload one or more resumes (PDF, DOCX or TXT, max 10MB each)", response_model=List[FileVerdict])
async def upload_resumes(files: List[UploadFile] = File(...), settings: Settings = Depends(get_settings)):
    if not files:
        raise HTTPException(status_code=400, detail="No file provided")
    verdicts = []
    for file in files:
        if not file.filename:
            verdicts.append(FileVerdict(file_name="", accepted=False, error="No file provided"))
            continue
        verdicts.append(await store_upload(file, settings))
    accepted = sum(1 for v in verdicts if v.accepted)
    logger.info(f"Upload finished: {accepted}/{len(verdicts)} files accepted")
    return verdicts
