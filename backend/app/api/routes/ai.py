from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.coach.catalog import list_models
from app.core.errors import UndoIncompleteError, ValidationError
from app.db.session import get_db
from app.schemas.ai import (
    CoachSettingsPublic,
    CoachSettingsUpdate,
    DeleteLastRequest,
    DeleteLastResponse,
    HistoryItem,
    HistoryResponse,
    MessageResponse,
    ModelListResponse,
    PromptRequest,
    PromptResponse,
)
from app.services import chat as chat_service
from app.services import coaching as coaching_service
from app.services import history as history_service

router = APIRouter()


@router.get("/models", response_model=ModelListResponse)
def get_models(
    api_key: str | None = Query(default=None, alias="apiKey"),
    provider: str | None = Query(default=None),
) -> ModelListResponse:
    return ModelListResponse(models=list_models(api_key, provider))


@router.post("/coach/settings", response_model=MessageResponse)
def update_coach_settings(
    payload: CoachSettingsUpdate,
    db: Session = Depends(get_db),
) -> MessageResponse:
    if not (payload.coaching_id and payload.context_prompt and payload.api_key and payload.model):
        raise ValidationError("All parameters are required.")
    coaching_service.update_coaching_config(
        db,
        payload.coaching_id,
        system_prompt=payload.context_prompt,
        credential=payload.api_key,
        model_id=payload.model,
        provider_id=payload.api_provider,
    )
    return MessageResponse(message="Settings updated successfully.")


@router.get("/coach/settings/{coaching_id}", response_model=CoachSettingsPublic)
def get_coach_settings(
    coaching_id: str,
    db: Session = Depends(get_db),
) -> CoachSettingsPublic:
    config = coaching_service.get_coaching_config(db, coaching_id)
    return CoachSettingsPublic(
        context_prompt=config.system_prompt,
        api_key=config.credential,
        model=config.model_id,
        api_provider=config.provider_id,
    )


@router.get("/history", response_model=HistoryResponse)
def get_history(
    user_id: str | None = Query(default=None, alias="userId"),
    coaching_id: str | None = Query(default=None, alias="coachingId"),
    db: Session = Depends(get_db),
) -> HistoryResponse:
    if not user_id:
        raise ValidationError("Missing user id.")
    turns = history_service.get_chat_history(db, user_id, coaching_id)
    return HistoryResponse(
        history=[HistoryItem(role=turn.role, message=turn.message) for turn in turns]
    )


@router.post("/history/delete_last", response_model=DeleteLastResponse)
def delete_last_turn(
    payload: DeleteLastRequest,
    db: Session = Depends(get_db),
) -> DeleteLastResponse:
    deleted = chat_service.undo_last_turn(
        db, user_id=payload.user_id, coaching_id=payload.coaching_id
    )
    if deleted < 2:
        raise UndoIncompleteError(deleted)
    return DeleteLastResponse(
        message="Last user and AI message deleted successfully.", deleted=deleted
    )


@router.post("/prompt", response_model=PromptResponse, response_model_by_alias=True)
def send_prompt(
    payload: PromptRequest,
    db: Session = Depends(get_db),
) -> PromptResponse:
    reply = chat_service.send_prompt(
        db,
        prompt=payload.prompt,
        user_id=payload.user_id,
        coaching_id=payload.coaching_id,
        base_url=payload.base_url,
    )
    return PromptResponse(ai_response=reply)
