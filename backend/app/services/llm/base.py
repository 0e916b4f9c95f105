"""Abstract structured-completion provider interface. All providers must implement this."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class Message:
    role: str  # "user" | "model"
    content: str


@dataclass
class LLMResponse:
    content: str  # Raw text of the first candidate, expected to be JSON


class BaseLLMProvider(ABC):
    @abstractmethod
    async def generate_json(
        self, messages: list[Message], system_instruction: str, response_schema: dict
    ) -> LLMResponse:
        """Send the conversation and get a reply constrained to `response_schema`.

        Raises CompletionUnavailable when the provider cannot be reached or
        rejects the request.
        """
        ...
