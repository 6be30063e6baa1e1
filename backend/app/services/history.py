import logging

from sqlalchemy.orm import Session

from app.coach.adapter import ROLE_MODEL, ROLE_USER, ConversationTurn
from app.db.guard import store_operation
from app.models.chat_message import ChatMessage

logger = logging.getLogger(__name__)


def save_message(
    db: Session,
    *,
    user_id: str,
    coaching_id: str,
    role: str,
    message: str,
) -> ChatMessage:
    with store_operation(db, "save chat message"):
        row = ChatMessage(
            user_id=user_id,
            coaching_id=coaching_id,
            role=role,
            message_content=message,
        )
        db.add(row)
        db.commit()
        db.refresh(row)
        return row


def get_chat_history(
    db: Session,
    user_id: str,
    coaching_id: str | None = None,
) -> list[ConversationTurn]:
    """Return the user's turns oldest first, optionally for one coaching."""
    with store_operation(db, "load chat history"):
        query = db.query(ChatMessage).filter(ChatMessage.user_id == user_id)
        if coaching_id:
            query = query.filter(ChatMessage.coaching_id == coaching_id)
        rows = query.order_by(ChatMessage.timestamp.asc(), ChatMessage.chat_id.asc()).all()
    return [ConversationTurn(role=row.role, message=row.message_content) for row in rows]


def _latest_chat_id(db: Session, user_id: str, coaching_id: str, role: str) -> int | None:
    row = (
        db.query(ChatMessage.chat_id)
        .filter(
            ChatMessage.user_id == user_id,
            ChatMessage.coaching_id == coaching_id,
            ChatMessage.role == role,
        )
        .order_by(ChatMessage.timestamp.desc(), ChatMessage.chat_id.desc())
        .first()
    )
    return row[0] if row else None


def delete_last_messages(db: Session, user_id: str, coaching_id: str) -> int:
    """Delete the newest model turn and the newest user turn.

    The two rows are looked up independently, so they are not necessarily
    adjacent. Returns how many rows were removed (0, 1 or 2).
    """
    with store_operation(db, "delete last messages"):
        model_chat_id = _latest_chat_id(db, user_id, coaching_id, ROLE_MODEL)
        user_chat_id = _latest_chat_id(db, user_id, coaching_id, ROLE_USER)

        deleted = 0
        for role, chat_id in ((ROLE_MODEL, model_chat_id), (ROLE_USER, user_chat_id)):
            if chat_id is None:
                logger.warning(
                    "Undo: no %s message found for user=%s coaching=%s",
                    role,
                    user_id,
                    coaching_id,
                )
                continue
            deleted += db.query(ChatMessage).filter(ChatMessage.chat_id == chat_id).delete()
        db.commit()
    return deleted
