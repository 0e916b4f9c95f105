"""Append-only, ordered message history per (user, session) pair."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from app.core.errors import NotFound
from app.models.chat_log import ChatLog, ChatMessage

logger = logging.getLogger(__name__)

USER_ROLE = "user"
MODEL_ROLE = "model"


def _find(db: Session, user_id: int, session_id: int) -> ChatLog | None:
    return db.exec(
        select(ChatLog).where(ChatLog.user_id == user_id, ChatLog.session_id == session_id)
    ).first()


def find_or_create(db: Session, user_id: int, session_id: int) -> ChatLog:
    """Return the single chat log for (user, session), creating an empty one if needed."""
    chat_log = _find(db, user_id, session_id)
    if chat_log:
        return chat_log

    chat_log = ChatLog(user_id=user_id, session_id=session_id)
    db.add(chat_log)
    try:
        db.commit()
    except IntegrityError:
        # Another request created it between our read and write
        db.rollback()
        existing = _find(db, user_id, session_id)
        if existing is None:
            raise
        return existing

    db.refresh(chat_log)
    logger.debug(f"Created chat log {chat_log.id} for session {session_id}")
    return chat_log


def messages(db: Session, chat_log_id: int) -> list[ChatMessage]:
    """Messages in insertion order."""
    return list(
        db.exec(
            select(ChatMessage)
            .where(ChatMessage.chat_log_id == chat_log_id)
            .order_by(ChatMessage.id)  # type: ignore
        ).all()
    )


def append_message(db: Session, chat_log: ChatLog, role: str, content: str) -> list[ChatMessage]:
    """Persist one message and return the updated ordered sequence.

    The commit happens before returning, so the message is durable before the
    caller moves on.
    """
    msg = ChatMessage(chat_log_id=chat_log.id, role=role, content=content)  # type: ignore
    db.add(msg)
    db.commit()
    return messages(db, chat_log.id)  # type: ignore


def get_for_session(db: Session, user_id: int, session_id: int) -> ChatLog:
    chat_log = _find(db, user_id, session_id)
    if not chat_log:
        raise NotFound("Chat log not found")
    return chat_log


def list_for_user(db: Session, user_id: int) -> list[ChatLog]:
    return list(
        db.exec(
            select(ChatLog)
            .where(ChatLog.user_id == user_id)
            .order_by(ChatLog.created_at)  # type: ignore
        ).all()
    )
