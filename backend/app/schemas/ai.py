from typing import Literal

from pydantic import BaseModel, Field


class _CamelModel(BaseModel):
    class Config:
        populate_by_name = True


class ModelListResponse(BaseModel):
    models: list[str]


class CoachSettingsUpdate(_CamelModel):
    # Optional at the schema level so a missing field is reported as a 400
    coaching_id: str | None = Field(default=None, alias="coachingId")
    context_prompt: str | None = Field(default=None, alias="contextPrompt")
    api_key: str | None = Field(default=None, alias="apiKey")
    model: str | None = None
    api_provider: Literal["gemini", "openai", "deepseek"] | None = Field(
        default=None, alias="apiProvider"
    )


class CoachSettingsPublic(BaseModel):
    context_prompt: str | None
    api_key: str
    model: str
    api_provider: str | None = None


class MessageResponse(BaseModel):
    message: str


class HistoryItem(BaseModel):
    role: str
    message: str


class HistoryResponse(BaseModel):
    history: list[HistoryItem]


class DeleteLastRequest(_CamelModel):
    user_id: str | None = Field(default=None, alias="userId")
    coaching_id: str | None = Field(default=None, alias="coachingId")


class DeleteLastResponse(MessageResponse):
    deleted: int


class PromptRequest(_CamelModel):
    prompt: str | None = None
    user_id: str | None = Field(default=None, alias="userId")
    coaching_id: str | None = Field(default=None, alias="coachingId")
    base_url: str | None = Field(default=None, alias="baseUrl")


class PromptResponse(_CamelModel):
    ai_response: str = Field(alias="aiResponse")
