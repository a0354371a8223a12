from typing import List, Optional

from models.schemas import ClassificationResult, JobCategoryOut

BASE_CONFIDENCE = 0.7
SKILL_MATCH_CONFIDENCE = 0.9
NO_SKILL_MATCH_CONFIDENCE = 0.6


def match_category(name: str, categories: List[JobCategoryOut]) -> Optional[JobCategoryOut]:
    """Case-insensitive exact name match; anything else is no match."""
    wanted = name.lower()
    for category in categories:
        if category.name.lower() == wanted:
            return category
    return None


def _skill_overlaps(skills: List[str], keywords: List[str]) -> bool:
    for skill in skills:
        s = skill.lower()
        for keyword in keywords:
            k = keyword.lower()
            if k in s or s in k:
                return True
    return False


def compute_confidence(skills: List[str], matched: Optional[JobCategoryOut]) -> int:
    """Two-tier heuristic, returned as an integer percentage."""
    confidence = BASE_CONFIDENCE
    if matched is not None:
        if _skill_overlaps(skills, matched.skills_keywords):
            confidence = SKILL_MATCH_CONFIDENCE
        else:
            confidence = NO_SKILL_MATCH_CONFIDENCE
    return round(confidence * 100)


def score_classification(name: str, skills: List[str], categories: List[JobCategoryOut]) -> ClassificationResult:
    matched = match_category(name, categories)
    return ClassificationResult(
        predicted_category_name=name,
        matched_category=matched,
        confidence_score=compute_confidence(skills, matched),
    )
