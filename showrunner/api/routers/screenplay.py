"""Screenplay router for the Showrunner API."""

from typing import Optional

from fastapi import APIRouter, Request
from pydantic import BaseModel, Field

from showrunner.api.limits import RATE_LIMIT, limiter
from showrunner.api.settings import get_app_config
from showrunner.core.logging_config import get_logger
from showrunner.screenplay import ScreenplayAssembler, split_scenes

logger = get_logger("api.screenplay")

router = APIRouter()


class ScreenplayRequest(BaseModel):
    text: str = Field(..., description="Raw generated screenplay text")
    title: Optional[str] = None
    episode_number: Optional[int] = None


def _assemble(payload: ScreenplayRequest):
    assembler = ScreenplayAssembler(get_app_config().screenplay, logger=logger)
    return assembler.assemble(payload.text, title=payload.title, episode_number=payload.episode_number)


@router.post("/parse")
@limiter.limit(RATE_LIMIT)
async def parse_screenplay(request: Request, payload: ScreenplayRequest):
    """Assemble screenplay text into a paginated document."""
    return _assemble(payload).to_dict()


@router.post("/scenes")
@limiter.limit(RATE_LIMIT)
async def list_scenes(request: Request, payload: ScreenplayRequest):
    """Split screenplay text into scenes."""
    document = _assemble(payload)
    spans = split_scenes(document, logger=logger)
    return {
        "scene_count": len(spans),
        "scenes": [span.to_dict() for span in spans],
    }
