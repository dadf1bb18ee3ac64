"""Casting router for the Showrunner API."""

from typing import Optional

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, Field

from showrunner.api.limits import RATE_LIMIT, limiter
from showrunner.api.settings import get_app_config
from showrunner.core.exceptions import NoRecoverableRecordsError
from showrunner.core.logging_config import get_logger
from showrunner.llm import ResilientResponseDecoder

logger = get_logger("api.casting")

router = APIRouter()


class DecodeRequest(BaseModel):
    text: str = Field(..., description="Raw generation response")
    id_field: Optional[str] = None
    array_key: Optional[str] = None


@router.post("/decode")
@limiter.limit(RATE_LIMIT)
async def decode_response(request: Request, payload: DecodeRequest):
    """Decode a batched casting response, reporting the recovery tier used."""
    casting = get_app_config().casting
    decoder = ResilientResponseDecoder(
        payload.id_field or casting.identity_field,
        payload.array_key or casting.array_key,
        logger=logger
    )
    try:
        result = decoder.decode_with_report(payload.text)
    except NoRecoverableRecordsError as e:
        raise HTTPException(status_code=422, detail={"message": e.message, **e.details})

    return {"count": len(result.records), **result.to_dict()}
