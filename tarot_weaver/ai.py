"""Reading orchestrator: spread synopsis -> OpenAI chat completion -> validated Reading."""

from __future__ import annotations

import json
import logging
import time
from typing import Any, Dict, List, Optional

from openai import AsyncOpenAI, OpenAIError
from pydantic import ValidationError

from .catalog import find_category
from .config import Settings
from .errors import (
    EmptyGeneration,
    GenerationFailed,
    InvalidGenerationFormat,
    MalformedRequest,
    SchemaMismatch,
    ServiceUnavailable,
    UnknownCategory,
)
from .models import Reading, ReadingRequest, SpreadCategory
from .synopsis import summarize

log = logging.getLogger("tarot_weaver.ai")

MAX_FIELD_WORDS = 120

SYSTEM_PROMPT = " ".join([
    "You are the Keeper of the KKRT Tarot, a lyrical mystic and practical guide.",
    "Give modern, empowering tarot readings that tie each symbol to mindful action.",
    "Use evocative yet accessible language with a touch of sensory imagery.",
    "Respond with a single JSON object of exactly this shape:",
    '{ "headline": string, "overview": string, '
    '"cardInsights": [{ "card": string, "position": string, "insight": string }], '
    '"integration": string, "affirmation": string }.',
    "Write one cardInsights entry per card, in the order the cards are listed.",
    f"Keep each field under {MAX_FIELD_WORDS} words. Do not wrap the JSON in markdown code fences.",
])


def build_messages(category: SpreadCategory, synopsis: str) -> List[Dict[str, str]]:
    user_prompt = "\n".join([
        f"Spread category: {category.label}.",
        f"Category intention: {category.description}",
        f"Reading angle: {category.prompt}",
        "Spread summary:",
        synopsis,
    ])
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": user_prompt},
    ]


_CLIENTS: Dict[str, AsyncOpenAI] = {}


def build_client(settings: Settings) -> AsyncOpenAI:
    """Shared client for the configured key; built once and reused across readings."""
    client = _CLIENTS.get(settings.openai_api_key)
    if client is None:
        # single attempt per reading, no SDK retries
        client = AsyncOpenAI(api_key=settings.openai_api_key, max_retries=0)
        _CLIENTS[settings.openai_api_key] = client
    return client


async def close_clients() -> None:
    while _CLIENTS:
        _, client = _CLIENTS.popitem()
        await client.close()


def _parse_request(payload: Any) -> ReadingRequest:
    if isinstance(payload, ReadingRequest):
        return payload
    try:
        if isinstance(payload, (bytes, str)):
            return ReadingRequest.model_validate_json(payload)
        return ReadingRequest.model_validate(payload)
    except ValidationError as e:
        raise MalformedRequest() from e


def _extract_text(response: Any) -> str:
    """Text of the first completion choice, or an empty string."""
    choices = getattr(response, "choices", None) or []
    if not choices:
        return ""
    message = getattr(choices[0], "message", None)
    content = getattr(message, "content", None)
    return (content or "").strip()


def _decode_reading(text: str, expected_cards: int) -> Reading:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise InvalidGenerationFormat() from e

    try:
        reading = Reading.model_validate(data)
    except ValidationError as e:
        raise SchemaMismatch() from e

    if len(reading.card_insights) != expected_cards:
        raise SchemaMismatch(
            f"Reading covered {len(reading.card_insights)} cards but the spread has {expected_cards}."
        )
    return reading


async def generate_reading(
    payload: Any,
    client: Optional[AsyncOpenAI] = None,
    settings: Optional[Settings] = None,
) -> Reading:
    """
    Turn a drawn spread into a structured reading.

    `payload` is the inbound request body (raw JSON, dict or ReadingRequest). The
    category is resolved from `categoryId` only; the per-card fields are used
    verbatim for the synopsis. Exactly one call is made to the generative
    service and any failure raises a ReadingError subclass.
    """
    settings = settings or Settings.from_env()
    if not settings.openai_configured:
        log.warning("reading refused: OPENAI_API_KEY not configured")
        raise ServiceUnavailable()

    req = _parse_request(payload)
    category = find_category(req.category_id)
    if category is None:
        log.warning("reading refused: unknown category %r", req.category_id)
        raise UnknownCategory()

    log.info("reading start category=%s cards=%d", category.id, len(req.spread))
    messages = build_messages(category, summarize(req.spread))

    if client is None:
        client = build_client(settings)

    started = time.perf_counter()
    try:
        response = await client.chat.completions.create(
            model=settings.model,
            temperature=settings.temperature,
            messages=messages,
        )
    except OpenAIError as e:
        log.exception("reading generation failed category=%s", category.id)
        raise GenerationFailed() from e

    text = _extract_text(response)
    if not text:
        log.warning("reading generation empty category=%s", category.id)
        raise EmptyGeneration()

    try:
        reading = _decode_reading(text, len(req.spread))
    except (InvalidGenerationFormat, SchemaMismatch) as e:
        log.warning("reading output rejected category=%s kind=%s", category.id, type(e).__name__)
        raise

    log.info(
        "reading done category=%s model=%s insights=%d elapsed=%.2fs",
        category.id, settings.model, len(reading.card_insights), time.perf_counter() - started,
    )
    return reading
