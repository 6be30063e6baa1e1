import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import StoreError

logger = logging.getLogger(__name__)


@contextmanager
def store_operation(db: Session, action: str) -> Iterator[Session]:
    """Roll back and re-raise database failures as ``StoreError``."""
    try:
        yield db
    except SQLAlchemyError as exc:
        logger.exception("Store operation failed: %s", action)
        db.rollback()
        raise StoreError(f"Could not {action}.") from exc
