import base64
from pathlib import Path

from loguru import logger

from services.intake import file_extension
from services.llm_client import TextModel
from services.prompts import (
    EXTRACTION_MAX_TOKENS,
    EXTRACTION_SYSTEM_PROMPT,
    EXTRACTION_TEMPERATURE,
    EXTRACTION_USER_TEMPLATE_BASE64,
    EXTRACTION_USER_TEMPLATE_TEXT,
    EXTRACTION_USER_TEMPLATE_UNREADABLE,
    MAX_ENCODED_CHARS,
)


def build_extraction_prompt(content: bytes, file_name: str) -> str:
    """Hand the file to the model: plain text as-is, anything else base64 encoded."""
    ext = file_extension(file_name)
    if not content:
        return EXTRACTION_USER_TEMPLATE_UNREADABLE.format(file_extension=ext, file_name=Path(file_name).name)
    if ext == "txt":
        text = content.decode("utf-8", errors="replace")
        return EXTRACTION_USER_TEMPLATE_TEXT.format(file_extension=ext, content=text[:MAX_ENCODED_CHARS])
    encoded = base64.b64encode(content).decode("ascii")
    return EXTRACTION_USER_TEMPLATE_BASE64.format(file_extension=ext, content=encoded[:MAX_ENCODED_CHARS])


class FieldExtractor:
    def __init__(self, model: TextModel):
        self.model = model

    async def extract(self, content: bytes, file_name: str) -> str:
        """Return the model's raw reply; parsing is left to the normalizer."""
        prompt = build_extraction_prompt(content, file_name)
        logger.info(f"Extracting fields from {file_name} ({len(content)} bytes)")
        return await self.model.generate(
            EXTRACTION_SYSTEM_PROMPT,
            prompt,
            max_tokens=EXTRACTION_MAX_TOKENS,
            temperature=EXTRACTION_TEMPERATURE,
        )
