from typing import List

from loguru import logger

from models.schemas import JobCategoryOut
from services.llm_client import TextModel
from services.prompts import (
    CLASSIFICATION_MAX_TOKENS,
    CLASSIFICATION_SYSTEM_PROMPT,
    CLASSIFICATION_TEMPERATURE,
    CLASSIFICATION_USER_TEMPLATE,
)


def describe_categories(categories: List[JobCategoryOut]) -> str:
    # the whole catalog goes into one prompt, unbounded
    return "; ".join(
        f"{cat.name}: {', '.join(cat.skills_keywords) if cat.skills_keywords else 'General'}"
        for cat in categories
    )


def describe_skills(skills: List[str]) -> str:
    return ", ".join(skills) if skills else "No skills listed"


class CategoryClassifier:
    def __init__(self, model: TextModel):
        self.model = model

    async def classify(self, skills: List[str], categories: List[JobCategoryOut]) -> str:
        """Ask the model for the single best category name, trimmed."""
        system_prompt = CLASSIFICATION_SYSTEM_PROMPT.format(categories=describe_categories(categories))
        user_prompt = CLASSIFICATION_USER_TEMPLATE.format(skills=describe_skills(skills))
        reply = await self.model.generate(
            system_prompt,
            user_prompt,
            max_tokens=CLASSIFICATION_MAX_TOKENS,
            temperature=CLASSIFICATION_TEMPERATURE,
        )
        name = reply.strip()
        logger.info(f"Classifier picked '{name}' from {len(categories)} categories")
        return name
