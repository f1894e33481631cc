from __future__ import annotations

from typing import List, Optional, Sequence

import numpy as np

MAX_SEEDS = 5


def select_seeds(
    playlist_track_ids: Sequence[str],
    explicit_seeds: Optional[str] = None,
    *,
    rng: np.random.Generator | None = None,
) -> List[str]:
    """Pick up to five seed track IDs for a recommendation request.

    An explicit comma separated list wins and is truncated to the first five
    entries, order kept, IDs unchecked. Otherwise the seeds are the first five
    positions of a uniformly random permutation of the playlist.
    """
    if explicit_seeds:
        return explicit_seeds.split(",")[:MAX_SEEDS]

    if rng is None:
        rng = np.random.default_rng()
    idxs = rng.permutation(len(playlist_track_ids))[:MAX_SEEDS]
    return [playlist_track_ids[int(idx)] for idx in idxs]
