"""Completion requestor: turns chat history plus category settings into one
structured completion request, and parses the structured reply.

The model is asked for a JSON object with a required `message` string and,
for redirect-eligible categories only, an optional `redirectToOtherCategory`
string naming one of the catalog's categories.
"""

import json
import logging
from dataclasses import dataclass
from typing import Iterable

from app.core.errors import AppError, CompletionUnavailable, MalformedCompletion
from app.services.llm import get_llm_provider
from app.services.llm.base import BaseLLMProvider, Message

logger = logging.getLogger(__name__)

MESSAGE_FIELD = "message"
REDIRECT_FIELD = "redirectToOtherCategory"

REDIRECT_INSTRUCTION = (
    "\n\nRedirect to other category options. If the conversation would be better served "
    "by a different topic, propose it in the `redirectToOtherCategory` field. "
    "The topic should be from one of the following topics:\n\nTopics: {topics}"
)


@dataclass
class CompletionResult:
    message: str
    redirect_to_other_category: str | None = None


def build_contents(prev_messages: Iterable, user_message: str) -> list[Message]:
    """Prior messages in stored order, then the new user message.

    Accepts anything with `role` and `content` attributes (stored ChatMessage
    rows or plain Message objects).
    """
    contents = [Message(role=m.role, content=m.content) for m in prev_messages]
    contents.append(Message(role="user", content=user_message))
    return contents


def build_system_instruction(system_prompt: str, redirectable: bool, topics: list[str]) -> str:
    if not redirectable:
        return system_prompt
    return system_prompt + REDIRECT_INSTRUCTION.format(topics=", ".join(topics))


def build_response_schema(redirectable: bool, topics: list[str] | None = None) -> dict:
    schema: dict = {
        "type": "OBJECT",
        "properties": {
            MESSAGE_FIELD: {"type": "STRING"},
        },
        "required": [MESSAGE_FIELD],
    }
    if redirectable:
        schema["properties"][REDIRECT_FIELD] = {
            "type": "STRING",
            "description": "Name of the topic to redirect to: " + ", ".join(topics or []),
        }
    return schema


def parse_completion(raw: str, redirectable: bool, topics: list[str]) -> CompletionResult:
    """Parse the model's raw JSON text. Raises MalformedCompletion on any schema violation."""
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, TypeError) as e:
        logger.error(f"Completion is not valid JSON: {raw[:200]!r}")
        raise MalformedCompletion() from e

    if not isinstance(data, dict) or not isinstance(data.get(MESSAGE_FIELD), str):
        logger.error(f"Completion is missing a string '{MESSAGE_FIELD}' field: {raw[:200]!r}")
        raise MalformedCompletion()

    redirect = data.get(REDIRECT_FIELD) if redirectable else None
    if redirect is not None and not isinstance(redirect, str):
        raise MalformedCompletion(f"'{REDIRECT_FIELD}' must be a string")
    if redirect and redirect not in topics:
        logger.warning(f"Dropping redirect to unknown category {redirect!r}")
        redirect = None

    return CompletionResult(message=data[MESSAGE_FIELD], redirect_to_other_category=redirect or None)


class CompletionRequestor:
    """Issues one structured completion per call. No retries."""

    def __init__(self, provider: BaseLLMProvider | None = None):
        self._provider_instance = provider

    def _provider(self) -> BaseLLMProvider:
        if self._provider_instance is None:
            try:
                self._provider_instance = get_llm_provider()
            except ValueError as e:
                logger.error(f"Completion provider is not configured: {e}")
                raise CompletionUnavailable("Completion service is not configured") from e
        return self._provider_instance

    async def request(
        self,
        prev_messages: Iterable,
        user_message: str,
        system_prompt: str,
        redirectable: bool = False,
        topics: list[str] | None = None,
    ) -> CompletionResult:
        topics = topics or []
        provider = self._provider()
        try:
            response = await provider.generate_json(
                build_contents(prev_messages, user_message),
                build_system_instruction(system_prompt, redirectable, topics),
                build_response_schema(redirectable, topics),
            )
        except AppError:
            raise
        except Exception as e:
            logger.exception(f"Completion provider failed unexpectedly: {e}")
            raise CompletionUnavailable() from e
        return parse_completion(response.content, redirectable, topics)
