from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence

import numpy as np

from ..schemas.playlist import PlaylistInfo, Track
from ..spotify.client import SpotifyClientError
from ..spotify.parsing import parse_audio_features, parse_track
from .aggregate import EmptyFeatureSetError, summarize
from .seeds import select_seeds
from .targets import parse_target_attributes

logger = logging.getLogger("playlists")


class MusicPlatform(Protocol):
    async def get_playlist_items(self, playlist_id: str) -> List[Dict[str, Any]]: ...

    async def get_audio_features(self, track_ids: Sequence[str]) -> List[Optional[Dict[str, Any]]]: ...

    async def get_recommendations(
        self,
        *,
        seed_tracks: Sequence[str],
        tunable_params: Dict[str, Any] | None = None,
        limit: int = 20,
    ) -> Dict[str, Any]: ...

    async def get_tracks(self, track_ids: Sequence[str]) -> List[Dict[str, Any]]: ...


class PipelineError(Exception):
    """Stops a request. ``str(exc)`` is the body returned to the caller."""


def _tracks_from_items(items: Sequence[Dict[str, Any]]) -> List[Track]:
    tracks: List[Track] = []
    for item in items:
        payload = item.get("track")
        if not payload or not payload.get("id"):
            logger.debug("skipped track cause missing information", extra={"item": item})
            continue
        tracks.append(parse_track(payload))
    return tracks


async def _fetch_playlist_tracks(client: MusicPlatform, playlist_id: str) -> List[Track]:
    try:
        items = await client.get_playlist_items(playlist_id)
    except SpotifyClientError as exc:
        logger.debug("failed to get playlist", extra={"playlist_id": playlist_id, "error": str(exc)})
        raise PipelineError("failed to get playlist") from exc
    return _tracks_from_items(items)


async def _aggregate(client: MusicPlatform, tracks: List[Track]) -> PlaylistInfo:
    if not tracks:
        raise PipelineError("no audio features available")
    try:
        raw_features = await client.get_audio_features([track.id for track in tracks])
    except SpotifyClientError as exc:
        logger.debug("failed to get audio features", extra={"error": str(exc)})
        raise PipelineError("failed to get audio features") from exc

    try:
        return summarize(tracks, [parse_audio_features(raw) for raw in raw_features])
    except EmptyFeatureSetError as exc:
        logger.debug("no track had audio features", extra={"track_count": len(tracks)})
        raise PipelineError("no audio features available") from exc


async def describe_playlist(client: MusicPlatform, playlist_id: str) -> PlaylistInfo:
    logger.debug("got request for playlist", extra={"playlist_id": playlist_id})
    tracks = await _fetch_playlist_tracks(client, playlist_id)
    return await _aggregate(client, tracks)


async def recommend_for_playlist(
    client: MusicPlatform,
    playlist_id: str,
    *,
    query_params: Mapping[str, str],
    limit: int = 20,
    rng: np.random.Generator | None = None,
) -> PlaylistInfo:
    """Recommend tracks seeded from a playlist and aggregate their features.

    ``query_params`` carries the optional ``seeds`` list and the target
    attribute values.
    """
    logger.debug("got request for playlist recommendations", extra={"playlist_id": playlist_id})
    playlist_tracks = await _fetch_playlist_tracks(client, playlist_id)

    seeds = select_seeds([track.id for track in playlist_tracks], query_params.get("seeds"), rng=rng)
    if not seeds:
        logger.debug("no seed tracks available", extra={"playlist_id": playlist_id})
        raise PipelineError("no seed tracks available")
    logger.debug("made recommendations using songs as seeds", extra={"seeds": seeds})

    targets = parse_target_attributes(query_params)
    try:
        recs = await client.get_recommendations(
            seed_tracks=seeds,
            tunable_params=targets.to_query_params(),
            limit=limit,
        )
    except SpotifyClientError as exc:
        logger.debug("failed to get recommendations", extra={"error": str(exc)})
        raise PipelineError("failed to get recommendations") from exc

    rec_ids = [rec["id"] for rec in recs.get("tracks", []) or [] if rec and rec.get("id")]
    if not rec_ids:
        raise PipelineError("no recommendations available")

    try:
        payloads = await client.get_tracks(rec_ids)
    except SpotifyClientError as exc:
        logger.debug("failed to get tracks", extra={"error": str(exc)})
        raise PipelineError("failed to get tracks") from exc

    tracks = [parse_track(payload) for payload in payloads if payload and payload.get("id")]
    return await _aggregate(client, tracks)
