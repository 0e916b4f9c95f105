"""Request bodies. Field names are snake_case in Python and camelCase on the wire."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

EMAIL_REGEX = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RegisterRequest(CamelModel):
    email: str = Field(..., pattern=EMAIL_REGEX)
    password: str = Field(..., min_length=1)
    name: str = ""


class LoginRequest(CamelModel):
    email: str
    password: str


class CategoryCreate(CamelModel):
    name: str
    description: str
    prompt: str
    icon: str = ""
    image_url: str = ""
    gradient: str = ""
    text_color: str = ""
    redirectable_to_other_category: bool = False


class CategoryUpdate(CamelModel):
    name: str | None = None
    description: str | None = None
    prompt: str | None = None
    icon: str | None = None
    image_url: str | None = None
    gradient: str | None = None
    text_color: str | None = None
    redirectable_to_other_category: bool | None = None


class SessionCreate(CamelModel):
    conversation_category_id: int | None = None
    summary: str = ""
    n_minus_ten_summary: str = ""


class SessionUpdate(CamelModel):
    conversation_category_id: int | None = None
    summary: str | None = None
    n_minus_ten_summary: str | None = None


class ChatMessageRequest(CamelModel):
    session_id: int | None = None
    user_message: str | None = None


class ChangeCategoryRequest(CamelModel):
    session_id: int | None = None
    conversation_category_id: int | None = None


class PriorMessage(CamelModel):
    role: Literal["user", "model"]
    content: str


class CompletionSessionSettings(CamelModel):
    system_instruction: str = ""
    redirect_to_other_category: bool = False
    topics: list[str] = []


class CompletionRequestBody(CamelModel):
    prev_messages: list[PriorMessage] | None = None
    user_message: str | None = None
    session: CompletionSessionSettings | None = None
