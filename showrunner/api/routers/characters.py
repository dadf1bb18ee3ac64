"""Characters router for the Showrunner API."""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Request
from pydantic import BaseModel, Field

from showrunner.api.limits import RATE_LIMIT, limiter
from showrunner.api.settings import get_app_config
from showrunner.core.logging_config import get_logger
from showrunner.characters import (
    CharacterRegistryBuilder,
    extract_mentions,
    partition,
    registry_summary,
)
from showrunner.screenplay import ScreenplayAssembler

logger = get_logger("api.characters")

router = APIRouter()


class RegistryRequest(BaseModel):
    script: Optional[str] = Field(default=None, description="Raw screenplay text to extract mentions from")
    story_bible: List[Dict[str, Any]] = Field(default_factory=list)
    breakdown: List[Dict[str, Any]] = Field(default_factory=list)
    batch_size: Optional[int] = Field(default=None, ge=1)


@router.post("/registry")
@limiter.limit(RATE_LIMIT)
async def build_character_registry(request: Request, payload: RegistryRequest):
    """Build the ordered character registry and its batch plan."""
    config = get_app_config()
    mentions = []
    if payload.script:
        document = ScreenplayAssembler(config.screenplay, logger=logger).assemble(payload.script)
        mentions = extract_mentions(document)

    builder = CharacterRegistryBuilder(config.resolution, logger=logger)
    registry = builder.build(payload.story_bible, mentions, payload.breakdown)
    batches = partition(registry, payload.batch_size or config.casting.batch_size)

    return {
        "characters": [identity.to_dict() for identity in registry],
        "summary": registry_summary(registry),
        "batches": [[identity.name for identity in batch] for batch in batches],
    }
