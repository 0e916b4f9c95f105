"""Conversation categories: named topics with their own system prompt and display styling."""

from datetime import datetime, timezone
from typing import Optional

from sqlmodel import Field, SQLModel


class ConversationCategory(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True, unique=True)
    description: str
    prompt: str  # System instruction for every turn in this category
    redirectable_to_other_category: bool = Field(default=False)

    # Display metadata, opaque to the backend
    icon: str = Field(default="")  # e.g. "MessageCircle", "Brain"
    image_url: str = Field(default="")
    gradient: str = Field(default="")
    text_color: str = Field(default="")

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
