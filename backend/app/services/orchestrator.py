"""Chat turn orchestration: one user message in, one model message out.

A turn moves through these states, strictly in sequence:

    IDLE -> USER_MESSAGE_APPENDED -> COMPLETION_REQUESTED
         -> COMPLETION_SUCCEEDED -> MODEL_MESSAGE_APPENDED -> DONE
         -> COMPLETION_FAILED (terminal, error re-raised)

The user message is committed before the completion call and is kept when
the call fails. A redirect proposed by the model is only reported back; the
session's category changes through `change_category` alone.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from sqlmodel import Session

from app.core.config import settings
from app.core.errors import AppError, InvalidRequest
from app.models.chat_log import ChatLog, ChatMessage
from app.services import catalog, chat_log_store, session_store
from app.services.completion import CompletionRequestor
from app.services.llm.base import Message
from app.services.session_store import ResolvedSession

logger = logging.getLogger(__name__)


class TurnState(str, Enum):
    IDLE = "idle"
    USER_MESSAGE_APPENDED = "user_message_appended"
    COMPLETION_REQUESTED = "completion_requested"
    COMPLETION_SUCCEEDED = "completion_succeeded"
    COMPLETION_FAILED = "completion_failed"
    MODEL_MESSAGE_APPENDED = "model_message_appended"
    DONE = "done"


@dataclass
class TurnResult:
    chat_log: ChatLog
    messages: list[ChatMessage]
    session: ResolvedSession
    redirect_to_other_category: str | None = None


class TurnOrchestrator:
    def __init__(self, db: Session, requestor: CompletionRequestor):
        self.db = db
        self.requestor = requestor
        self.state = TurnState.IDLE

    def _transition(self, state: TurnState, session_id: int) -> None:
        logger.debug(f"Turn on session {session_id}: {self.state.value} -> {state.value}")
        self.state = state

    async def run_turn(self, user_id: int | None, session_id: int | None, user_message: str | None) -> TurnResult:
        if not user_id or not session_id or not user_message:
            raise InvalidRequest("Missing sessionId or userMessage")

        # Ownership is checked before the chat log is touched so a foreign
        # session id never gets a log created for it.
        resolved = session_store.get_for_user(self.db, user_id, session_id)
        chat_log = chat_log_store.find_or_create(self.db, user_id, session_id)

        # Snapshot the history before the commit below expires the loaded rows
        prior = [
            Message(role=m.role, content=m.content)
            for m in chat_log_store.messages(self.db, chat_log.id)  # type: ignore
        ]
        chat_log_store.append_message(self.db, chat_log, chat_log_store.USER_ROLE, user_message)
        self._transition(TurnState.USER_MESSAGE_APPENDED, session_id)

        category = resolved.category
        if category is not None:
            system_prompt = category.prompt
            redirectable = category.redirectable_to_other_category
        else:
            system_prompt = settings.default_system_instruction
            redirectable = False
        topics = catalog.list_names(self.db) if redirectable else []

        self._transition(TurnState.COMPLETION_REQUESTED, session_id)
        try:
            result = await self.requestor.request(
                prior, user_message, system_prompt, redirectable=redirectable, topics=topics
            )
        except AppError as e:
            self._transition(TurnState.COMPLETION_FAILED, session_id)
            logger.error(f"Turn on session {session_id} failed: {e.message}")
            raise
        self._transition(TurnState.COMPLETION_SUCCEEDED, session_id)

        messages = chat_log_store.append_message(
            self.db, chat_log, chat_log_store.MODEL_ROLE, result.message
        )
        self._transition(TurnState.MODEL_MESSAGE_APPENDED, session_id)

        if result.redirect_to_other_category:
            logger.info(
                f"Model proposed redirecting session {session_id} "
                f"to {result.redirect_to_other_category!r}"
            )

        self._transition(TurnState.DONE, session_id)
        return TurnResult(
            chat_log=chat_log,
            messages=messages,
            session=resolved,
            redirect_to_other_category=result.redirect_to_other_category,
        )

    def change_category(self, user_id: int, session_id: int | None, category_id: int | None) -> ResolvedSession:
        """Swap a session's category. Chat history is left untouched."""
        if not session_id or not category_id:
            raise InvalidRequest("Missing sessionId or conversationCategoryId")
        resolved = session_store.update(self.db, user_id, session_id, category_id=category_id)
        logger.info(f"Session {session_id} moved to category {category_id}")
        return resolved
