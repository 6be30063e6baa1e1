"""Prompt turn handling.

A prompt is processed as independent store operations with no transaction
spanning them: the user turn is committed before the provider is called and
is left in place when the call fails. A reply with no text is replaced by the
configured fallback message, which is stored like any other model turn.
"""

import logging

from sqlalchemy.orm import Session

from app.coach.adapter import ROLE_MODEL, ROLE_USER
from app.coach.factory import get_provider_adapter
from app.core.config import get_settings
from app.core.errors import EmptyReplyError, ProviderError, ValidationError
from app.services import coaching as coaching_service
from app.services import history as history_service

logger = logging.getLogger(__name__)


def send_prompt(
    db: Session,
    *,
    prompt: str,
    user_id: str,
    coaching_id: str,
    base_url: str | None = None,
) -> str:
    if not prompt or not user_id or not coaching_id:
        raise ValidationError("Missing parameters.")

    config = coaching_service.get_coaching_config(db, coaching_id)

    history_service.save_message(
        db, user_id=user_id, coaching_id=coaching_id, role=ROLE_USER, message=prompt
    )
    history = history_service.get_chat_history(db, user_id, coaching_id)

    adapter = get_provider_adapter(config.provider_id)
    try:
        reply = adapter.complete(config, history, prompt, base_url=base_url)
    except ProviderError:
        logger.exception(
            "AI request failed: provider=%s coaching_id=%s",
            adapter.provider.value,
            coaching_id,
        )
        raise

    if not reply:
        logger.warning(
            "AI returned no text: provider=%s coaching_id=%s",
            adapter.provider.value,
            coaching_id,
        )
        history_service.save_message(
            db,
            user_id=user_id,
            coaching_id=coaching_id,
            role=ROLE_MODEL,
            message=get_settings().fallback_reply,
        )
        raise EmptyReplyError(adapter.provider.value)

    history_service.save_message(
        db, user_id=user_id, coaching_id=coaching_id, role=ROLE_MODEL, message=reply
    )
    return reply


def undo_last_turn(db: Session, *, user_id: str, coaching_id: str) -> int:
    if not user_id or not coaching_id:
        raise ValidationError("Missing parameters (user id or coaching id).")
    return history_service.delete_last_messages(db, user_id, coaching_id)
