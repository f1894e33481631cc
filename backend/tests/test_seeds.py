import numpy as np
import pytest

from playlist_stats.services.seeds import MAX_SEEDS, select_seeds

PLAYLIST = [f"track-{i}" for i in range(12)]


@pytest.mark.parametrize(
    "explicit, expected",
    [
        ("A", ["A"]),
        ("A,B,C", ["A", "B", "C"]),
        ("A,B,C,D,E", ["A", "B", "C", "D", "E"]),
        ("A,B,C,D,E,F,G", ["A", "B", "C", "D", "E"]),
        ("not-in-playlist,track-3", ["not-in-playlist", "track-3"]),
    ],
)
def test_explicit_seeds_keep_order_and_cap(explicit, expected):
    assert select_seeds(PLAYLIST, explicit) == expected


def test_explicit_seeds_bypass_sampling():
    class _ExplodingRng:
        def permutation(self, n):  # pragma: no cover - must not be reached
            raise AssertionError("random path used")

    assert select_seeds(["A", "B", "C"], "A,B,C", rng=_ExplodingRng()) == ["A", "B", "C"]


@pytest.mark.parametrize("explicit", [None, ""])
def test_random_seeds_are_distinct_playlist_members(explicit):
    for _ in range(50):
        seeds = select_seeds(PLAYLIST, explicit)
        assert len(seeds) == MAX_SEEDS
        assert len(set(seeds)) == MAX_SEEDS
        assert set(seeds) <= set(PLAYLIST)


def test_random_seeds_for_short_playlist_use_every_track():
    seeds = select_seeds(["a", "b", "c"])
    assert sorted(seeds) == ["a", "b", "c"]


def test_random_seeds_follow_injected_rng():
    first = select_seeds(PLAYLIST, rng=np.random.default_rng(1234))
    second = select_seeds(PLAYLIST, rng=np.random.default_rng(1234))
    assert first == second


def test_empty_playlist_without_explicit_seeds():
    assert select_seeds([], None) == []
