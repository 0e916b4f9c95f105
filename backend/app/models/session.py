"""Chat sessions: one user's ongoing conversation thread, bound to one category at a time."""

from datetime import datetime, timezone
from typing import Optional

from sqlmodel import Field, SQLModel


class ChatSession(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True)
    # Plain column, not a foreign key: deleting a category leaves sessions pointing at it.
    category_id: int = Field(index=True)
    summary: str = Field(default="")
    n_minus_ten_summary: str = Field(default="")
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
