"""JSON shapes returned by the API (camelCase keys, ISO-8601 timestamps)."""

from app.models.category import ConversationCategory
from app.models.chat_log import ChatLog, ChatMessage
from app.models.user import User
from app.services.session_store import ResolvedSession


def user_summary(user: User) -> dict:
    return {"id": user.id, "email": user.email, "name": user.name}


def user_detail(user: User) -> dict:
    return {
        **user_summary(user),
        "isAdmin": user.is_admin,
        "createdAt": user.created_at.isoformat(),
    }


def category_public(c: ConversationCategory) -> dict:
    """Display-safe fields only: no prompt, no redirect flag."""
    return {
        "id": c.id,
        "name": c.name,
        "description": c.description,
        "icon": c.icon,
        "imageUrl": c.image_url,
        "gradient": c.gradient,
        "textColor": c.text_color,
    }


def category_full(c: ConversationCategory) -> dict:
    return {
        **category_public(c),
        "prompt": c.prompt,
        "redirectableToOtherCategory": c.redirectable_to_other_category,
        "createdAt": c.created_at.isoformat(),
        "updatedAt": c.updated_at.isoformat(),
    }


def session(resolved: ResolvedSession) -> dict:
    s = resolved.session
    return {
        "id": s.id,
        "userId": s.user_id,
        "conversationCategoryId": s.category_id,
        "category": category_full(resolved.category) if resolved.category else None,
        "summary": s.summary,
        "nMinusTenSummary": s.n_minus_ten_summary,
        "createdAt": s.created_at.isoformat(),
        "updatedAt": s.updated_at.isoformat(),
    }


def message(m: ChatMessage) -> dict:
    return {"role": m.role, "content": m.content, "timestamp": m.created_at.isoformat()}


def chat_log(log: ChatLog, messages: list[ChatMessage]) -> dict:
    return {
        "id": log.id,
        "userId": log.user_id,
        "sessionId": log.session_id,
        "messages": [message(m) for m in messages],
        "createdAt": log.created_at.isoformat(),
    }
