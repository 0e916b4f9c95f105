"""Session store. Every read and write is scoped by the caller's user id.

A session that exists but belongs to someone else is reported exactly like a
missing one (SessionNotFound), so callers cannot probe for other users' ids.
Reads return the session together with its category, fetched explicitly.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from sqlmodel import Session, select

from app.core.errors import InvalidCategory, SessionNotFound
from app.models.category import ConversationCategory
from app.models.chat_log import ChatLog, ChatMessage
from app.models.session import ChatSession
from app.services import catalog

logger = logging.getLogger(__name__)


@dataclass
class ResolvedSession:
    session: ChatSession
    category: ConversationCategory | None  # None when the category was deleted


def _resolve(db: Session, chat_session: ChatSession) -> ResolvedSession:
    category = catalog.get(db, chat_session.category_id)
    if category is None:
        logger.warning(
            f"Session {chat_session.id} references missing category {chat_session.category_id}"
        )
    return ResolvedSession(session=chat_session, category=category)


def _require_category(db: Session, category_id: int | None) -> ConversationCategory:
    category = catalog.get(db, category_id) if category_id is not None else None
    if category is None:
        raise InvalidCategory()
    return category


def _get_owned(db: Session, user_id: int, session_id: int) -> ChatSession:
    chat_session = db.exec(
        select(ChatSession).where(ChatSession.id == session_id, ChatSession.user_id == user_id)
    ).first()
    if not chat_session:
        logger.debug(f"Session {session_id} not found for user {user_id}")
        raise SessionNotFound()
    return chat_session


def list_for_user(db: Session, user_id: int) -> list[ResolvedSession]:
    sessions = db.exec(
        select(ChatSession)
        .where(ChatSession.user_id == user_id)
        .order_by(ChatSession.created_at)  # type: ignore
    ).all()
    return [_resolve(db, s) for s in sessions]


def get_for_user(db: Session, user_id: int, session_id: int) -> ResolvedSession:
    return _resolve(db, _get_owned(db, user_id, session_id))


def create(
    db: Session,
    user_id: int,
    category_id: int | None,
    summary: str = "",
    n_minus_ten_summary: str = "",
) -> ResolvedSession:
    category = _require_category(db, category_id)
    chat_session = ChatSession(
        user_id=user_id,
        category_id=category.id,  # type: ignore
        summary=summary,
        n_minus_ten_summary=n_minus_ten_summary,
    )
    db.add(chat_session)
    db.commit()
    db.refresh(chat_session)
    logger.info(f"User {user_id} started session {chat_session.id} in category {category.name!r}")
    return ResolvedSession(session=chat_session, category=category)


def update(
    db: Session,
    user_id: int,
    session_id: int,
    category_id: int | None = None,
    summary: str | None = None,
    n_minus_ten_summary: str | None = None,
) -> ResolvedSession:
    chat_session = _get_owned(db, user_id, session_id)

    if category_id is not None:
        chat_session.category_id = _require_category(db, category_id).id  # type: ignore
    if summary is not None:
        chat_session.summary = summary
    if n_minus_ten_summary is not None:
        chat_session.n_minus_ten_summary = n_minus_ten_summary

    chat_session.updated_at = datetime.now(timezone.utc)
    db.add(chat_session)
    db.commit()
    db.refresh(chat_session)
    return _resolve(db, chat_session)


def delete(db: Session, user_id: int, session_id: int) -> None:
    chat_session = _get_owned(db, user_id, session_id)

    # Delete the session's chat log and messages first
    chat_log = db.exec(
        select(ChatLog).where(ChatLog.session_id == session_id, ChatLog.user_id == user_id)
    ).first()
    if chat_log:
        messages = db.exec(select(ChatMessage).where(ChatMessage.chat_log_id == chat_log.id)).all()
        for msg in messages:
            db.delete(msg)
        db.delete(chat_log)

    db.delete(chat_session)
    db.commit()
    logger.debug(f"Deleted session {session_id} for user {user_id}")
