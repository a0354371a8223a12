from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models.resume import Resume
from models.schemas import ClassificationResult, ExtractedProfile, UploadRequest
from services.errors import PersistenceError


def provenance(file_ext: str, byte_count: int) -> str:
    return f"Processed {file_ext} file - {byte_count} bytes"


def build_resume_record(
    request: UploadRequest,
    profile: ExtractedProfile,
    classification: ClassificationResult,
    file_ext: str,
    byte_count: int,
) -> Resume:
    matched = classification.matched_category
    return Resume(
        file_name=request.file_name,
        file_url=request.file_url,
        uploaded_by=request.uploaded_by,
        raw_text=provenance(file_ext, byte_count),
        candidate_name=profile.candidate_name,
        candidate_email=profile.candidate_email,
        phone_number=profile.phone_number,
        parsed_skills=list(profile.parsed_skills),
        experience_years=profile.experience_years,
        education_level=profile.education_level,
        predicted_category=matched.id if matched else None,
        confidence_score=classification.confidence_score,
        status="processed",
    )


def save_resume(db: Session, record: Resume) -> Resume:
    """Insert one processed resume; nothing is left behind on failure."""
    try:
        db.add(record)
        db.commit()
        db.refresh(record)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Database insert error: {str(e)}")
        raise PersistenceError(f"Failed to save resume: {str(e)}") from e
    logger.info(f"Saved resume {record.id} for {record.file_name}")
    return record
