from __future__ import annotations

from typing import Dict, List

import numpy as np
from fastapi import APIRouter, Depends, Query, Response
from fastapi.responses import JSONResponse

from ...core.config import Settings
from ...schemas.playlist import PlaylistInfo
from ...services.playlists import PipelineError, describe_playlist, recommend_for_playlist
from ...spotify.client import SpotifyClient
from ...spotify.parsing import parse_playlist_id
from ..deps import first_query_values, get_seed_rng, get_settings_dep, get_spotify_client

router = APIRouter(tags=["playlists"])


def _info_response(info: PlaylistInfo) -> JSONResponse:
    return JSONResponse(
        content=info.model_dump(by_alias=True),
        headers={"Access-Control-Allow-Origin": "*"},
    )


def _first(values: List[str]) -> str:
    return values[0] if values else ""


def _error_response(exc: PipelineError) -> Response:
    # Clients read failures from the body; status stays 200 and no content type is sent.
    return Response(content=str(exc), status_code=200)


@router.get("/playlist", response_model=PlaylistInfo)
async def get_playlist(
    playlist_ids: List[str] = Query([], alias="id"),
    *,
    spotify_client: SpotifyClient = Depends(get_spotify_client),
) -> Response:
    try:
        info = await describe_playlist(spotify_client, parse_playlist_id(_first(playlist_ids)))
    except PipelineError as exc:
        return _error_response(exc)
    return _info_response(info)


@router.get("/recs", response_model=PlaylistInfo)
async def get_recommendations(
    playlist_ids: List[str] = Query([], alias="id"),
    *,
    spotify_client: SpotifyClient = Depends(get_spotify_client),
    settings: Settings = Depends(get_settings_dep),
    rng: np.random.Generator = Depends(get_seed_rng),
    query_params: Dict[str, str] = Depends(first_query_values),
) -> Response:
    try:
        info = await recommend_for_playlist(
            spotify_client,
            parse_playlist_id(_first(playlist_ids)),
            query_params=query_params,
            limit=settings.recommendation_limit,
            rng=rng,
        )
    except PipelineError as exc:
        return _error_response(exc)
    return _info_response(info)
