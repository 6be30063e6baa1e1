import logging

from sqlalchemy.orm import Session

from app.coach.adapter import CoachingConfig
from app.core.errors import ConfigNotFoundError
from app.db.guard import store_operation
from app.models.coaching_prompt import CoachingPrompt

logger = logging.getLogger(__name__)


def _to_config(row: CoachingPrompt) -> CoachingConfig:
    return CoachingConfig(
        coaching_id=row.coaching_id,
        system_prompt=row.context_prompt,
        credential=row.api_key,
        model_id=row.model,
        provider_id=row.api_provider,
    )


def get_coaching_config(db: Session, coaching_id: str) -> CoachingConfig:
    with store_operation(db, "load coaching settings"):
        row = db.get(CoachingPrompt, coaching_id)
    if row is None:
        raise ConfigNotFoundError(coaching_id)
    return _to_config(row)


def update_coaching_config(
    db: Session,
    coaching_id: str,
    *,
    system_prompt: str,
    credential: str,
    model_id: str,
    provider_id: str | None = None,
) -> CoachingConfig:
    with store_operation(db, "update coaching settings"):
        row = db.get(CoachingPrompt, coaching_id)
        if row is None:
            raise ConfigNotFoundError(coaching_id)
        row.context_prompt = system_prompt
        row.api_key = credential
        row.model = model_id
        if provider_id is not None:
            row.api_provider = provider_id
        db.commit()
        db.refresh(row)
    logger.info("Coaching settings updated: coaching_id=%s model=%s", coaching_id, model_id)
    return _to_config(row)
