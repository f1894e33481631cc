from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class AudioFeatures(BaseModel):
    """Audio features of a single track, or the centroid of many.

    Only the seven bounded dimensions take part in aggregation. ``loudness`` is
    kept when the platform sends it but never serialized or averaged.
    """

    model_config = ConfigDict(frozen=True)

    id: Optional[str] = Field(default=None, exclude=True)
    acousticness: float
    danceability: float
    energy: float
    instrumentalness: float
    liveness: float
    speechiness: float
    valence: float
    loudness: Optional[float] = Field(default=None, exclude=True)


class Track(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., alias="ID")
    name: str = Field("", alias="Name")
    artists: List[str] = Field(default_factory=list, alias="Artists")
    popularity: int = Field(0, alias="Popularity")
    image_url: str = Field("", alias="ImageURL")


class PlaylistInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    tracks: List[Track] = Field(default_factory=list, alias="Tracks")
    centroid: AudioFeatures = Field(..., alias="Centroid")
    mse: float = Field(..., ge=0.0, alias="MSE")


class HealthResponse(BaseModel):
    ok: bool = True
    credentials_configured: bool = False
