"""Chat log and message models for per-session message history."""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, Relationship, SQLModel


class ChatLog(SQLModel, table=True):
    __table_args__ = (UniqueConstraint("user_id", "session_id"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True)
    session_id: int = Field(foreign_key="chatsession.id", index=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    messages: list["ChatMessage"] = Relationship(back_populates="chat_log")


class ChatMessage(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    chat_log_id: int = Field(foreign_key="chatlog.id", index=True)
    role: str  # "user" | "model"
    content: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    chat_log: Optional[ChatLog] = Relationship(back_populates="messages")
