from __future__ import annotations

import logging
from typing import Dict, List, Sequence

import numpy as np

from ..schemas.playlist import AudioFeatures, PlaylistInfo, Track

# loudness is on a different scale (dB) and stays out of the aggregate
FEATURE_DIMENSIONS = (
    "acousticness",
    "danceability",
    "energy",
    "instrumentalness",
    "liveness",
    "speechiness",
    "valence",
)

logger = logging.getLogger("aggregate")


class EmptyFeatureSetError(ValueError):
    pass


def _feature_matrix(vectors: Sequence[AudioFeatures]) -> np.ndarray:
    if not vectors:
        raise EmptyFeatureSetError("cannot aggregate an empty set of audio features")
    return np.array(
        [[getattr(vector, dim) for dim in FEATURE_DIMENSIONS] for vector in vectors],
        dtype=np.float64,
    )


def compute_centroid(vectors: Sequence[AudioFeatures]) -> AudioFeatures:
    """Per-dimension arithmetic mean of ``vectors``, each weighted 1/n.

    Summation runs in input order, so two orderings of the same vectors can
    differ in the last bits. Raises :class:`EmptyFeatureSetError` on empty input.
    """
    matrix = _feature_matrix(vectors)
    mean = matrix.sum(axis=0) / matrix.shape[0]
    return AudioFeatures(**{dim: float(value) for dim, value in zip(FEATURE_DIMENSIONS, mean)})


def compute_dispersion(vectors: Sequence[AudioFeatures], centroid: AudioFeatures) -> float:
    """Mean over ``vectors`` of the squared euclidean distance to ``centroid``."""
    matrix = _feature_matrix(vectors)
    center = np.array([getattr(centroid, dim) for dim in FEATURE_DIMENSIONS], dtype=np.float64)
    squared = np.square(center - matrix)
    return float(squared.sum() / matrix.shape[0])


def summarize(tracks: Sequence[Track], features: Sequence[AudioFeatures | None]) -> PlaylistInfo:
    """Pair tracks with their audio features by ID and aggregate the pairs.

    Tracks without a feature vector are dropped from the result entirely so the
    track list always matches what went into the centroid.
    """
    by_id: Dict[str, AudioFeatures] = {}
    for feature in features:
        if feature is not None and feature.id:
            by_id.setdefault(feature.id, feature)

    kept_tracks: List[Track] = []
    kept_features: List[AudioFeatures] = []
    for track in tracks:
        feature = by_id.get(track.id)
        if feature is None:
            logger.debug("dropped track without audio features", extra={"track_id": track.id})
            continue
        kept_tracks.append(track)
        kept_features.append(feature)

    centroid = compute_centroid(kept_features)
    return PlaylistInfo(
        tracks=kept_tracks,
        centroid=centroid,
        mse=compute_dispersion(kept_features, centroid),
    )
