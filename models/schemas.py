import math
from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class UploadRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    file_url: str = Field(..., alias="fileUrl", min_length=1)
    file_name: str = Field(..., alias="fileName", min_length=1)
    uploaded_by: Optional[str] = Field(None, alias="uploadedBy")


class JobCategoryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    skills_keywords: List[str] = []

    @field_validator("skills_keywords", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return value or []


class ExtractedProfile(BaseModel):
    """Structured fields pulled out of a resume by the model.

    Types are coerced loosely: the model's output is never rejected for a
    badly typed field, the field just becomes empty.
    """

    candidate_name: Optional[str] = None
    candidate_email: Optional[str] = None
    phone_number: Optional[str] = None
    parsed_skills: List[str] = []
    experience_years: Optional[int] = None
    education_level: Optional[str] = None
    summary: Optional[str] = None

    @field_validator("candidate_name", "candidate_email", "phone_number", "education_level", "summary", mode="before")
    @classmethod
    def _to_optional_str(cls, value: Any):
        if value is None or isinstance(value, (dict, list)):
            return None
        return str(value)

    @field_validator("parsed_skills", mode="before")
    @classmethod
    def _to_skill_list(cls, value: Any):
        if not isinstance(value, list):
            return []
        return [skill for skill in value if isinstance(skill, str)]

    @field_validator("experience_years", mode="before")
    @classmethod
    def _to_optional_int(cls, value: Any):
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            try:
                value = float(value.strip())
            except ValueError:
                return None
        if isinstance(value, float):
            # NaN and infinities have no integer value
            return int(value) if math.isfinite(value) else None
        return None


class ClassificationResult(BaseModel):
    predicted_category_name: str
    matched_category: Optional[JobCategoryOut] = None
    confidence_score: int = Field(..., ge=0, le=100)


class AnalysisSummary(BaseModel):
    candidate_name: Optional[str] = None
    predicted_category: str
    confidence_score: int
    skills_count: int


class ProcessResult(BaseModel):
    success: bool = True
    resume_id: int
    analysis: AnalysisSummary


class FileVerdict(BaseModel):
    file_name: str
    accepted: bool
    file_url: Optional[str] = None
    error: Optional[str] = None


class ResumeOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    file_name: str
    file_url: str
    uploaded_by: Optional[str] = None
    candidate_name: Optional[str] = None
    candidate_email: Optional[str] = None
    phone_number: Optional[str] = None
    parsed_skills: List[str] = []
    experience_years: Optional[int] = None
    education_level: Optional[str] = None
    predicted_category: Optional[int] = None
    confidence_score: int
    status: str
    uploaded_at: Optional[datetime] = None


class ResumeStats(BaseModel):
    total: int
    high_match: int
    average_score: int
