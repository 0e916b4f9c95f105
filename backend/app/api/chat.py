"""Chat turns, chat log reads and category changes."""

import logging

from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.api import serializers
from app.api.deps import get_current_user_id
from app.api.schemas import ChangeCategoryRequest, ChatMessageRequest
from app.core.database import get_session
from app.core.errors import NotFound
from app.services import chat_log_store, session_store
from app.services.completion import CompletionRequestor
from app.services.orchestrator import TurnOrchestrator

router = APIRouter()
logger = logging.getLogger(__name__)


def get_completion_requestor() -> CompletionRequestor:
    return CompletionRequestor()


@router.post("/message")
async def send_message(
    body: ChatMessageRequest,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_session),
    requestor: CompletionRequestor = Depends(get_completion_requestor),
):
    """Run one chat turn. A proposed redirect is returned, never applied."""
    orchestrator = TurnOrchestrator(db, requestor)
    result = await orchestrator.run_turn(user_id, body.session_id, body.user_message)

    response = {
        "chatLog": serializers.chat_log(result.chat_log, result.messages),
        "session": serializers.session(result.session),
    }
    if result.redirect_to_other_category:
        response["redirectToOtherCategory"] = result.redirect_to_other_category
    return response


@router.get("/session/{session_id}")
async def get_session_chat_log(
    session_id: int, user_id: int = Depends(get_current_user_id), db: Session = Depends(get_session)
):
    session_store.get_for_user(db, user_id, session_id)
    chat_log = chat_log_store.get_for_session(db, user_id, session_id)
    return serializers.chat_log(chat_log, chat_log_store.messages(db, chat_log.id))  # type: ignore


@router.get("/user/{target_user_id}")
async def get_user_chat_logs(
    target_user_id: int, user_id: int = Depends(get_current_user_id), db: Session = Depends(get_session)
):
    if target_user_id != user_id:
        logger.debug(f"User {user_id} asked for chat logs of user {target_user_id}")
        raise NotFound("Chat logs not found")

    sessions = {s.session.id: s for s in session_store.list_for_user(db, user_id)}
    result = []
    for chat_log in chat_log_store.list_for_user(db, user_id):
        data = serializers.chat_log(chat_log, chat_log_store.messages(db, chat_log.id))  # type: ignore
        resolved = sessions.get(chat_log.session_id)
        data["session"] = serializers.session(resolved) if resolved else None
        result.append(data)
    return result


@router.post("/change-category")
async def change_category(
    body: ChangeCategoryRequest,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_session),
    requestor: CompletionRequestor = Depends(get_completion_requestor),
):
    orchestrator = TurnOrchestrator(db, requestor)
    resolved = orchestrator.change_category(user_id, body.session_id, body.conversation_category_id)
    return serializers.session(resolved)
