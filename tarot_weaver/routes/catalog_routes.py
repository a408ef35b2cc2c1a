"""FastAPI routes for the KKRT deck and spread templates.

Endpoints:
- GET /deck
- GET /spreads
- GET /spreads/{category_id}
- POST /spreads/{category_id}/draw
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, HTTPException

from ..catalog import find_category, get_cards, get_categories
from ..models import DrawRequest, DrawResponse, SpreadCategory
from ..spread import draw_spread, spread_payload
from ..utils.rng import seeded_random

log = logging.getLogger("tarot_weaver.routes.catalog")
router = APIRouter(tags=["catalog"])


def _category_or_404(category_id: str) -> SpreadCategory:
    category = find_category(category_id)
    if category is None:
        raise HTTPException(status_code=404, detail=f"Unknown category_id: {category_id}")
    return category


@router.get("/deck")
def deck() -> Dict[str, Any]:
    cards = get_cards()
    return {"card_count": len(cards), "cards": [c.model_dump() for c in cards]}


@router.get("/spreads")
def spreads() -> Dict[str, Any]:
    return {"categories": [c.model_dump() for c in get_categories()]}


@router.get("/spreads/{category_id}")
def spread(category_id: str) -> Dict[str, Any]:
    return {"category": _category_or_404(category_id).model_dump()}


@router.post("/spreads/{category_id}/draw", response_model=DrawResponse)
def draw(category_id: str, req: Optional[DrawRequest] = None) -> DrawResponse:
    """Draw a fresh spread; a seed makes the draw reproducible."""
    category = _category_or_404(category_id)
    seed = req.seed if req else None
    rng = seeded_random(seed, salt=category.id) if seed else None

    drawn = draw_spread(category, get_cards(), rng=rng)
    log.info("draw category=%s cards=%d seeded=%s", category.id, len(drawn), bool(seed))
    return DrawResponse(category_id=category.id, seed=seed, spread=spread_payload(drawn))
