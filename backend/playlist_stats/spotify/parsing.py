from __future__ import annotations

import re
from typing import Any, Dict, Iterable, Optional

from pydantic import ValidationError

from ..schemas.playlist import AudioFeatures, Track

SPOTIFY_PLAYLIST_URL_RE = re.compile(
    r"https?://(?:open|play)\.spotify\.com/(?:[a-z-]+/)?playlist/(?P<id>[A-Za-z0-9]{22})",
    re.IGNORECASE,
)
SPOTIFY_PLAYLIST_URI_RE = re.compile(r"spotify:(?:user:[^:]+:)?playlist:(?P<id>[A-Za-z0-9]{22})", re.IGNORECASE)


def parse_playlist_id(value: str) -> str:
    """Return the bare playlist ID from an ID, open.spotify.com URL or spotify: URI.

    Values that are neither a URL nor a URI are returned stripped but otherwise
    untouched; the platform decides whether they exist.
    """
    value = value.strip()
    m = SPOTIFY_PLAYLIST_URI_RE.match(value)
    if not m:
        m = SPOTIFY_PLAYLIST_URL_RE.search(value)
    if not m:
        return value
    return m.group("id")


def first_image(images: Iterable[Dict[str, Any]] | None) -> str:
    if not images:
        return ""
    return next((img.get("url") for img in images if img and img.get("url")), "")


def parse_track(payload: Dict[str, Any]) -> Track:
    album = payload.get("album") or {}
    artists = [artist.get("name") or "" for artist in payload.get("artists") or [] if artist]
    return Track(
        id=payload["id"],
        name=payload.get("name") or "",
        artists=artists,
        popularity=int(payload.get("popularity") or 0),
        image_url=first_image(album.get("images")),
    )


def parse_audio_features(payload: Dict[str, Any] | None) -> Optional[AudioFeatures]:
    # the platform sends null in place of tracks it has no analysis for
    if not payload:
        return None
    try:
        return AudioFeatures.model_validate(payload)
    except ValidationError:
        return None
