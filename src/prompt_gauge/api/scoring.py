"""
Scoring API routes

POST /scoring/compare  - A/B comparison of two improvements
GET  /scoring/config   - current server-wide config override
POST /scoring/config   - update the server-wide config override
"""

import logging
import math
from typing import Optional

from fastapi import APIRouter, Body, Depends, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from prompt_gauge.domain.constants import WEIGHT_SUM_TOLERANCE
from prompt_gauge.domain.errors import ScoringError, ScoringErrorCode
from prompt_gauge.infrastructure.stores.base import ConfigStore, StoreError
from prompt_gauge.scoring_config import ScoringConfig
from prompt_gauge.use_cases.analysis import ScoringService
from prompt_gauge.use_cases.comparison import compare_improvements

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/scoring", tags=["Scoring"])

# ScoringError codes reported as client errors
_CLIENT_ERROR_CODES = {ScoringErrorCode.INVALID_PROMPT, ScoringErrorCode.CONFIG_ERROR}


class ScoringCompareRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    original_prompt: Optional[str] = Field(default=None, alias="originalPrompt")
    improved_prompt_a: Optional[str] = Field(default=None, alias="improvedPromptA")
    improved_prompt_b: Optional[str] = Field(default=None, alias="improvedPromptB")
    scoring_config: Optional[dict] = Field(default=None, alias="scoringConfig")


def error_response(status_code: int, message: str, code: str, details=None) -> JSONResponse:
    """Build the shared error envelope"""
    error = {"error": message, "code": code}
    if details is not None:
        error["details"] = details
    return JSONResponse(status_code=status_code, content={"success": False, "error": error})


def get_config_store(request: Request) -> ConfigStore:
    return request.app.state.config_store


def get_scoring_service(request: Request) -> ScoringService:
    return ScoringService(config=request.app.state.scoring_config)


@router.post("/compare")
def compare(
    data: ScoringCompareRequest,
    service: ScoringService = Depends(get_scoring_service),
    config_store: ConfigStore = Depends(get_config_store),
):
    """Score two improvements of the same prompt and report the better one."""
    if not data.original_prompt or not data.improved_prompt_a or not data.improved_prompt_b:
        return error_response(
            status.HTTP_400_BAD_REQUEST, "필수 필드가 누락되었습니다.", "INVALID_REQUEST",
        )

    try:
        config_override = data.scoring_config
        if config_override is None:
            config_override = config_store.get()
        result = compare_improvements(
            service,
            data.original_prompt,
            data.improved_prompt_a,
            data.improved_prompt_b,
            config_override,
        )
    except ScoringError as e:
        status_code = (
            status.HTTP_400_BAD_REQUEST if e.code in _CLIENT_ERROR_CODES
            else status.HTTP_500_INTERNAL_SERVER_ERROR
        )
        return error_response(status_code, e.message, e.code.value, e.details)
    except Exception as e:
        logger.exception("Scoring comparison failed")
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, str(e) or "알 수 없는 오류", "INTERNAL_ERROR",
        )

    return {"success": True, "data": result.to_dict()}


@router.get("/config")
def get_config(config_store: ConfigStore = Depends(get_config_store)):
    """Return the stored config override (null when unset)."""
    try:
        override = config_store.get()
    except StoreError as e:
        logger.warning("Failed to read config override: %s", e)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e), "INTERNAL_ERROR")
    return {"success": True, "data": override}


@router.post("/config")
def update_config(
    body: dict = Body(...),
    config_store: ConfigStore = Depends(get_config_store),
):
    """Validate and store a partial config override."""
    weights = body.get("weights")
    if weights is not None:
        if not isinstance(weights, dict):
            return error_response(
                status.HTTP_400_BAD_REQUEST, "weights는 객체여야 합니다.", "INVALID_REQUEST",
            )
        try:
            values = [float(w) for w in weights.values()]
        except (TypeError, ValueError):
            values = [math.nan]
        if not all(math.isfinite(v) for v in values):
            return error_response(
                status.HTTP_400_BAD_REQUEST, "가중치는 숫자여야 합니다.", "INVALID_REQUEST",
            )
        weight_sum = sum(values)
        if abs(weight_sum - 1.0) > WEIGHT_SUM_TOLERANCE + 1e-9:
            return error_response(
                status.HTTP_400_BAD_REQUEST,
                f"가중치 합은 1.0이어야 합니다. 현재: {weight_sum}",
                "INVALID_REQUEST",
            )

    try:
        ScoringConfig().merged(body)
    except (ScoringError, TypeError, ValueError) as e:
        return error_response(status.HTTP_400_BAD_REQUEST, str(e), "INVALID_REQUEST")

    try:
        config_store.set(body)
    except StoreError as e:
        logger.warning("Failed to store config override: %s", e)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e), "INTERNAL_ERROR")

    logger.info("Scoring config override updated: %s", sorted(body.keys()))
    return {"success": True, "data": body}
