from app.models.category import ConversationCategory
from app.models.chat_log import ChatLog, ChatMessage
from app.models.session import ChatSession
from app.models.user import User

__all__ = ["ChatLog", "ChatMessage", "ChatSession", "ConversationCategory", "User"]
