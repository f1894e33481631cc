from __future__ import annotations

from fastapi import APIRouter, Depends

from ...core.config import Settings
from ...schemas.playlist import HealthResponse
from ..deps import get_settings_dep

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def get_health(settings: Settings = Depends(get_settings_dep)) -> HealthResponse:
    configured = bool(settings.spotify_client_id and settings.spotify_client_secret)
    return HealthResponse(ok=True, credentials_configured=configured)
