from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence

import httpx

from ..core.config import Settings

API_BASE = "https://api.spotify.com/v1"
TOKEN_ENDPOINT = "https://accounts.spotify.com/api/token"

AUDIO_FEATURES_BATCH = 100
TRACKS_BATCH = 50
PLAYLIST_PAGE_SIZE = 100

logger = logging.getLogger("spotify.client")


class SpotifyClientError(Exception):
    pass


class SpotifyAuthError(SpotifyClientError):
    pass


@dataclass(slots=True)
class SpotifyClient:
    """Spotify Web API client authenticated with the client-credentials grant.

    The app token is fetched on first use, cached until shortly before it
    expires and fetched again after that (or after a 401). Calls are not
    retried; every failure surfaces as :class:`SpotifyClientError`.
    """

    client_id: str
    client_secret: str
    timeout: float = 15.0
    transport: httpx.AsyncBaseTransport | None = None
    _client: httpx.AsyncClient | None = field(init=False, repr=False, default=None)
    _app_token: tuple[str, float] | None = field(init=False, repr=False, default=None)

    def __post_init__(self) -> None:
        self._client = httpx.AsyncClient(base_url=API_BASE, timeout=self.timeout, transport=self.transport)

    @classmethod
    def from_settings(cls, settings: Settings, *, transport: httpx.AsyncBaseTransport | None = None) -> SpotifyClient:
        return cls(
            client_id=settings.spotify_client_id,
            client_secret=settings.spotify_client_secret,
            timeout=settings.http_timeout_seconds,
            transport=transport,
        )

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def _http(self) -> httpx.AsyncClient:
        if self._client is None:
            raise SpotifyClientError("spotify client not initialized")
        return self._client

    async def _ensure_app_token(self) -> str:
        if not self.client_id or not self.client_secret:
            raise SpotifyAuthError("missing spotify client credentials")

        if self._app_token and self._app_token[1] > time.time():
            return self._app_token[0]

        try:
            resp = await self._http().post(
                TOKEN_ENDPOINT,
                data={"grant_type": "client_credentials"},
                auth=(self.client_id, self.client_secret),
            )
        except (httpx.RequestError, httpx.InvalidURL) as exc:
            raise SpotifyClientError(f"network error while fetching token: {exc}") from exc

        try:
            data = resp.json()
        except ValueError:
            data = {}
        if resp.status_code != 200 or "access_token" not in data:
            raise SpotifyAuthError(f"failed to obtain client credentials token: {resp.status_code} {data}")
        expires = time.time() + float(data.get("expires_in", 3600)) - 30
        token = data["access_token"]
        self._app_token = (token, expires)
        logger.debug("obtained spotify app token", extra={"expires_in": data.get("expires_in")})
        return token

    async def _request(
        self,
        method: str,
        url: str,
        *,
        params: Dict[str, Any] | None = None,
    ) -> Dict[str, Any]:
        client = self._http()
        token = await self._ensure_app_token()

        # Strip leading slash to avoid double slashes with base_url
        clean_url = url.lstrip("/")

        try:
            response = await client.request(
                method,
                clean_url,
                params=params,
                headers={"Authorization": f"Bearer {token}"},
            )
        except httpx.InvalidURL as exc:
            raise SpotifyClientError(f"invalid request url {url!r}: {exc}") from exc
        except httpx.RequestError as exc:
            raise SpotifyClientError(f"network error: {exc}") from exc

        if response.status_code == 401:
            self._app_token = None
            raise SpotifyAuthError("spotify token unauthorized")

        if response.status_code >= 400:
            detail = response.text
            logger.error("Spotify API %s %s -> %s %s", method, url, response.status_code, detail)
            raise SpotifyClientError(f"spotify api error {response.status_code}: {detail}")

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as exc:
            raise SpotifyClientError(f"invalid json from spotify for {method} {url}") from exc

    async def get_playlist_items(self, playlist_id: str) -> List[Dict[str, Any]]:
        """Return every item of the playlist, following ``next`` links.

        Items are returned as sent; an item's ``track`` may be null (local files,
        removed tracks) and callers decide what to do with those.
        """
        url = f"/playlists/{playlist_id}/tracks"
        params: Dict[str, Any] | None = {
            "limit": PLAYLIST_PAGE_SIZE,
            "additional_types": "track",
            "fields": "items(track(id,name,popularity,album(images),artists(name))),next",
        }
        items: List[Dict[str, Any]] = []
        while True:
            data = await self._request("GET", url, params=params)
            items.extend(item for item in data.get("items", []) or [] if item)
            next_url = data.get("next")
            if not next_url:
                break
            url = next_url
            params = None
        return items

    async def get_audio_features(self, track_ids: Iterable[str]) -> List[Optional[Dict[str, Any]]]:
        ids = list(track_ids)
        features: List[Optional[Dict[str, Any]]] = []
        for start in range(0, len(ids), AUDIO_FEATURES_BATCH):
            chunk = ids[start: start + AUDIO_FEATURES_BATCH]
            data = await self._request("GET", "/audio-features", params={"ids": ",".join(chunk)})
            features.extend(data.get("audio_features", []) or [])
        return features

    async def get_tracks(self, track_ids: Iterable[str]) -> List[Dict[str, Any]]:
        ids = list(track_ids)
        out: List[Dict[str, Any]] = []
        for chunk_start in range(0, len(ids), TRACKS_BATCH):
            chunk = ids[chunk_start: chunk_start + TRACKS_BATCH]
            payload = await self._request("GET", "/tracks", params={"ids": ",".join(chunk)})
            out.extend(track for track in payload.get("tracks", []) or [] if track)
        return out

    async def get_recommendations(
        self,
        *,
        seed_tracks: Sequence[str],
        tunable_params: Dict[str, Any] | None = None,
        limit: int = 20,
    ) -> Dict[str, Any]:
        params: Dict[str, Any] = {"limit": max(1, min(limit, 100))}

        clean_tracks = list(dict.fromkeys(track for track in seed_tracks if track))[:5]
        if not clean_tracks:
            raise SpotifyClientError("at least one seed required for recommendations")
        params["seed_tracks"] = ",".join(clean_tracks)

        if tunable_params:
            params.update({key: value for key, value in tunable_params.items() if value is not None})

        logger.debug("requesting recommendations", extra={"params": params})
        result = await self._request("GET", "/recommendations", params=params)
        logger.debug("recommendations returned", extra={"count": len(result.get("tracks", []) or [])})
        return result
