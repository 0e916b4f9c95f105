"""Google Gemini structured-completion provider."""

import logging

import httpx
from google import genai
from google.genai import errors, types

from app.core.config import settings
from app.core.errors import CompletionUnavailable, MalformedCompletion
from app.services.llm.base import BaseLLMProvider, LLMResponse, Message

logger = logging.getLogger(__name__)


class GeminiProvider(BaseLLMProvider):
    def __init__(self):
        self.client = genai.Client(api_key=settings.gemini_api_key)
        self.model = settings.gemini_model

    async def generate_json(
        self, messages: list[Message], system_instruction: str, response_schema: dict
    ) -> LLMResponse:
        contents = [{"role": m.role, "parts": [{"text": m.content}]} for m in messages]
        config = types.GenerateContentConfig(
            system_instruction=system_instruction,
            response_mime_type="application/json",
            response_schema=response_schema,
        )

        logger.info(f"=== Completion request: model={self.model}, messages={len(contents)} ===")
        try:
            response = await self.client.aio.models.generate_content(
                model=self.model,
                contents=contents,
                config=config,
            )
        except (errors.APIError, httpx.HTTPError) as e:
            logger.error(f"Gemini request failed: {e}")
            raise CompletionUnavailable() from e
        except Exception as e:
            logger.exception(f"Unexpected Gemini client error: {e}")
            raise CompletionUnavailable() from e

        usage = response.usage_metadata
        if usage:
            logger.info(
                f"=== Completion response ===\n"
                f"  Prompt tokens: {usage.prompt_token_count}\n"
                f"  Response tokens: {usage.candidates_token_count}\n"
                f"  Total tokens: {usage.total_token_count}"
            )

        if not response.candidates or not response.candidates[0].content:
            raise MalformedCompletion("Completion returned no candidates")
        parts = response.candidates[0].content.parts or []
        if not parts or parts[0].text is None:
            raise MalformedCompletion("Completion returned no text")
        return LLMResponse(content=parts[0].text)
