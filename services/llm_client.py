from typing import Protocol

import google.generativeai as genai
from google.api_core.exceptions import GoogleAPIError
from google.auth.exceptions import GoogleAuthError
from google.generativeai.types import BlockedPromptException, StopCandidateException
from loguru import logger

from configs.config import Settings
from services.errors import ConfigurationError, ModelServiceError


class TextModel(Protocol):
    """Anything that turns a system + user prompt into a text reply."""

    async def generate(self, system_prompt: str, user_prompt: str, max_tokens: int, temperature: float) -> str:
        ...


class GeminiTextModel:
    """Gemini-backed TextModel. One call per generate(), never retried."""

    def __init__(self, settings: Settings):
        self.api_key = settings.gemini_api_key
        self.model_name = settings.gemini_model
        if self.api_key:
            genai.configure(api_key=self.api_key)

    async def generate(self, system_prompt: str, user_prompt: str, max_tokens: int, temperature: float) -> str:
        if not self.api_key:
            raise ConfigurationError("GEMINI_API_KEY is not set")
        model = genai.GenerativeModel(self.model_name, system_instruction=system_prompt)
        try:
            response = await model.generate_content_async(
                user_prompt,
                generation_config={"max_output_tokens": max_tokens, "temperature": temperature},
            )
        except (GoogleAPIError, GoogleAuthError) as e:
            logger.error(f"Gemini API error: {str(e)}")
            raise ModelServiceError(f"Model API error: {str(e)}") from e
        except (BlockedPromptException, StopCandidateException) as e:
            logger.error(f"Gemini refused the prompt: {str(e)}")
            raise ModelServiceError(f"Model API refused the request: {str(e)}") from e

        try:
            text = response.text
        except ValueError as e:
            # raised when the reply was blocked or carries no candidates
            logger.error(f"Gemini returned no usable text: {str(e)}")
            raise ModelServiceError("Model API returned no response") from e
        if not text or not text.strip():
            logger.warning("Gemini returned empty response")
            raise ModelServiceError("Model API returned no response")
        return text
