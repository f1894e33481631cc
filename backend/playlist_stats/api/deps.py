from __future__ import annotations

from typing import Dict

import numpy as np
from fastapi import Request

from ..core.config import Settings, get_settings
from ..spotify.client import SpotifyClient


async def get_settings_dep() -> Settings:
    return get_settings()


async def get_spotify_client(request: Request) -> SpotifyClient:
    return request.app.state.spotify_client


async def get_seed_rng() -> np.random.Generator:
    return np.random.default_rng()


async def first_query_values(request: Request) -> Dict[str, str]:
    # a repeated key resolves to its first occurrence
    values: Dict[str, str] = {}
    for key, value in request.query_params.multi_items():
        values.setdefault(key, value)
    return values
