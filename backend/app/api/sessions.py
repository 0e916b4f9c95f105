"""REST API for chat sessions, always scoped to the caller."""

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from app.api import serializers
from app.api.deps import get_current_user_id
from app.api.schemas import SessionCreate, SessionUpdate
from app.core.database import get_session
from app.services import session_store

router = APIRouter()


@router.get("/")
async def list_sessions(user_id: int = Depends(get_current_user_id), db: Session = Depends(get_session)):
    return [serializers.session(s) for s in session_store.list_for_user(db, user_id)]


@router.get("/{session_id}")
async def get_chat_session(
    session_id: int, user_id: int = Depends(get_current_user_id), db: Session = Depends(get_session)
):
    return serializers.session(session_store.get_for_user(db, user_id, session_id))


@router.post("/", status_code=status.HTTP_201_CREATED)
async def create_chat_session(
    body: SessionCreate, user_id: int = Depends(get_current_user_id), db: Session = Depends(get_session)
):
    resolved = session_store.create(
        db,
        user_id,
        body.conversation_category_id,
        summary=body.summary,
        n_minus_ten_summary=body.n_minus_ten_summary,
    )
    return serializers.session(resolved)


@router.put("/{session_id}")
async def update_chat_session(
    session_id: int,
    body: SessionUpdate,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_session),
):
    resolved = session_store.update(
        db,
        user_id,
        session_id,
        category_id=body.conversation_category_id,
        summary=body.summary,
        n_minus_ten_summary=body.n_minus_ten_summary,
    )
    return serializers.session(resolved)


@router.delete("/{session_id}")
async def delete_chat_session(
    session_id: int, user_id: int = Depends(get_current_user_id), db: Session = Depends(get_session)
):
    session_store.delete(db, user_id, session_id)
    return {"message": "Session deleted successfully"}
