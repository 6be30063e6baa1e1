from sqlalchemy import Column, String, Text

from app.db.base import Base


class CoachingPrompt(Base):
    """Per-coaching provider settings.

    ``api_provider`` is one of ``gemini``, ``openai`` or ``deepseek``; any other
    value (or ``NULL``) is served by the Gemini adapter.
    """

    __tablename__ = "coaching_prompts"

    coaching_id = Column(String(64), primary_key=True)
    context_prompt = Column(Text, nullable=True)
    api_key = Column(String(255), nullable=False)
    model = Column(String(128), nullable=False)
    api_provider = Column(String(32), nullable=True)
