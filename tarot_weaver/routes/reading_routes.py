"""FastAPI route that turns a drawn spread into a narrative reading."""

from typing import Optional

from fastapi import APIRouter, Depends, Request
from openai import AsyncOpenAI

from ..ai import build_client, generate_reading
from ..config import Settings
from ..models import ErrorResponse, Reading

router = APIRouter(prefix="/api", tags=["reading"])


def get_reading_client() -> Optional[AsyncOpenAI]:
    """Shared OpenAI client for the configured key, or None when no key is set."""
    settings = Settings.from_env()
    if not settings.openai_configured:
        return None
    return build_client(settings)


@router.post(
    "/reading",
    response_model=Reading,
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
)
async def create_reading(request: Request, client: Optional[AsyncOpenAI] = Depends(get_reading_client)) -> Reading:
    # raw body: configuration is checked before the payload is parsed
    body = await request.body()
    return await generate_reading(body, client=client)
