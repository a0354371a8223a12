import json
import re
from pathlib import Path
from typing import Optional

from loguru import logger
from pydantic import ValidationError

from models.schemas import ExtractedProfile

FALLBACK_SKILL = "General"


def strip_code_fences(text: str) -> str:
    """Remove a surrounding ``` / ```json fence from a model reply."""
    raw = (text or "").strip()
    if raw.startswith("```"):
        raw = re.sub(r"^```[a-zA-Z]*\s*", "", raw)
        raw = re.sub(r"\s*```$", "", raw)
    return raw.strip()


def _parse_json_object(text: str) -> Optional[dict]:
    try:
        parsed = json.loads(strip_code_fences(text))
    except json.JSONDecodeError:
        return None
    return parsed if isinstance(parsed, dict) else None


def name_from_filename(file_name: str) -> str:
    stem = Path(file_name).stem
    return re.sub(r"\s+", " ", re.sub(r"[_\-.]+", " ", stem)).strip()


def fallback_profile(file_name: str) -> ExtractedProfile:
    return ExtractedProfile(
        candidate_name=name_from_filename(file_name) or None,
        parsed_skills=[FALLBACK_SKILL],
    )


def normalize_profile(reply: str, file_name: str) -> ExtractedProfile:
    """Turn a model reply into a profile, degrading to a filename-based record."""
    parsed = _parse_json_object(reply)
    if parsed is None:
        logger.warning(f"Model reply for {file_name} is not a JSON object, using fallback profile")
        return fallback_profile(file_name)
    try:
        return ExtractedProfile.model_validate(parsed)
    except ValidationError as e:
        logger.warning(f"Model reply for {file_name} has unusable fields, using fallback profile: {e}")
        return fallback_profile(file_name)
