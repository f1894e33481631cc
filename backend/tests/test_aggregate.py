from __future__ import annotations

import itertools

import numpy as np
import pytest

from playlist_stats.schemas.playlist import AudioFeatures, Track
from playlist_stats.services.aggregate import (
    FEATURE_DIMENSIONS,
    EmptyFeatureSetError,
    compute_centroid,
    compute_dispersion,
    summarize,
)


def _features(track_id: str | None = None, **values: float) -> AudioFeatures:
    base = {dim: 0.0 for dim in FEATURE_DIMENSIONS}
    base.update(values)
    return AudioFeatures(id=track_id, **base)


def test_centroid_and_dispersion_of_two_vectors():
    vectors = [_features(acousticness=0.2), _features(acousticness=0.8)]

    centroid = compute_centroid(vectors)

    assert centroid.acousticness == pytest.approx(0.5)
    assert centroid.energy == 0.0
    assert compute_dispersion(vectors, centroid) == pytest.approx(0.09)


def test_centroid_is_per_dimension_mean():
    rng = np.random.default_rng(7)
    vectors = [_features(**dict(zip(FEATURE_DIMENSIONS, row))) for row in rng.random((6, len(FEATURE_DIMENSIONS)))]

    centroid = compute_centroid(vectors)

    for dim in FEATURE_DIMENSIONS:
        expected = sum(getattr(vector, dim) for vector in vectors) / len(vectors)
        assert getattr(centroid, dim) == pytest.approx(expected)


def test_loudness_is_ignored():
    quiet = [_features(energy=0.4, loudness=-30.0), _features(energy=0.6, loudness=-2.0)]
    loud = [_features(energy=0.4, loudness=-1.0), _features(energy=0.6, loudness=-1.0)]

    centroid = compute_centroid(quiet)

    assert centroid == compute_centroid(loud)
    assert centroid.loudness is None
    assert compute_dispersion(quiet, centroid) == compute_dispersion(loud, centroid)
    assert set(centroid.model_dump()) == set(FEATURE_DIMENSIONS)


def test_dispersion_is_zero_for_identical_vectors():
    vectors = [_features(acousticness=0.1, energy=0.7, valence=0.3)] * 3

    centroid = compute_centroid(vectors)

    assert compute_dispersion(vectors, centroid) == pytest.approx(0.0, abs=1e-12)


def test_dispersion_of_single_vector_is_zero():
    vectors = [_features(danceability=0.9, liveness=0.25)]
    assert compute_dispersion(vectors, compute_centroid(vectors)) == 0.0


def test_dispersion_is_permutation_invariant():
    vectors = [
        _features(acousticness=0.1, energy=0.9),
        _features(acousticness=0.5, speechiness=0.2),
        _features(danceability=0.7, valence=0.4),
    ]
    centroid = compute_centroid(vectors)
    expected = compute_dispersion(vectors, centroid)

    for perm in itertools.permutations(vectors):
        assert compute_dispersion(list(perm), centroid) == pytest.approx(expected)


def test_empty_input_fails_fast():
    with pytest.raises(EmptyFeatureSetError):
        compute_centroid([])
    with pytest.raises(EmptyFeatureSetError):
        compute_dispersion([], _features())


def test_summarize_drops_tracks_without_features():
    tracks = [Track(id="a"), Track(id="b"), Track(id="c")]
    features = [_features("c", energy=0.8), None, _features("a", energy=0.2)]

    info = summarize(tracks, features)

    assert [track.id for track in info.tracks] == ["a", "c"]
    assert info.centroid.energy == pytest.approx(0.5)
    assert info.mse == pytest.approx(0.09)


def test_summarize_without_any_features_raises():
    with pytest.raises(EmptyFeatureSetError):
        summarize([Track(id="a")], [None])
