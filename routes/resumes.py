# routes/resumes.py
from fastapi import APIRouter, HTTPException, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional
from loguru import logger

from database import get_db, get_job_categories, get_resume
from models.resume import Resume
from models.schemas import JobCategoryOut, ResumeOut, ResumeStats

router = APIRouter()
categories_router = APIRouter()

EXPERIENCE_BANDS = ("junior", "mid", "senior")


def experience_band(years: Optional[int]) -> Optional[str]:
    """Junior 0-2 years, mid 3-5, senior above 5; unknown stays None."""
    if years is None:
        return None
    if years <= 2:
        return "junior"
    if years <= 5:
        return "mid"
    return "senior"


def matches_search(resume: Resume, term: str) -> bool:
    term = term.lower()
    if resume.candidate_name and term in resume.candidate_name.lower():
        return True
    return any(term in skill.lower() for skill in (resume.parsed_skills or []))


def filter_resumes(
    resumes: List[Resume],
    search: Optional[str] = None,
    category_id: Optional[int] = None,
    experience: Optional[str] = None,
) -> List[Resume]:
    result = []
    for resume in resumes:
        if search and not matches_search(resume, search):
            continue
        if category_id is not None and resume.predicted_category != category_id:
            continue
        if experience and experience_band(resume.experience_years) != experience:
            continue
        result.append(resume)
    return result


@router.get("", summary="List processed resumes", response_model=List[ResumeOut])
async def list_resumes(
    search: Optional[str] = Query(None, max_length=200),
    category_id: Optional[int] = None,
    experience: Optional[str] = Query(None, pattern="^(junior|mid|senior)$"),
    db: Session = Depends(get_db),
):
    resumes = db.query(Resume).order_by(Resume.uploaded_at.desc(), Resume.id.desc()).all()
    filtered = filter_resumes(resumes, search=search, category_id=category_id, experience=experience)
    logger.info(f"Listed {len(filtered)} of {len(resumes)} resumes")
    return filtered


@router.get("/stats", summary="Summary numbers for the dashboard", response_model=ResumeStats)
async def resume_stats(db: Session = Depends(get_db)):
    scores = [row.confidence_score for row in db.query(Resume.confidence_score).all()]
    if not scores:
        return ResumeStats(total=0, high_match=0, average_score=0)
    return ResumeStats(
        total=len(scores),
        high_match=sum(1 for s in scores if s >= 90),
        average_score=round(sum(scores) / len(scores)),
    )


@router.get("/{resume_id}", summary="Fetch one processed resume", response_model=ResumeOut)
async def read_resume(resume_id: int, db: Session = Depends(get_db)):
    resume = get_resume(db, resume_id)
    if not resume:
        raise HTTPException(status_code=404, detail="Resume not found")
    return resume


@categories_router.get("", summary="List job categories", response_model=List[JobCategoryOut])
async def list_categories(db: Session = Depends(get_db)):
    return get_job_categories(db)
