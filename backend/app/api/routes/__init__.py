from fastapi import APIRouter

from app.api.routes import ai


api_router = APIRouter()
api_router.include_router(ai.router, prefix="/ai", tags=["ai"])


@api_router.get("/health", tags=["health"])
def health() -> dict[str, str]:
    return {"status": "ok"}
