from app.models.coaching_prompt import CoachingPrompt
from app.models.chat_message import ChatMessage

__all__ = [
    "CoachingPrompt",
    "ChatMessage",
]
