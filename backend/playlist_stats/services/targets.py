from __future__ import annotations

import math
import re
from typing import Dict, Mapping, Optional

from pydantic import BaseModel

from .aggregate import FEATURE_DIMENSIONS


class TargetAttributes(BaseModel):
    acousticness: Optional[float] = None
    danceability: Optional[float] = None
    energy: Optional[float] = None
    instrumentalness: Optional[float] = None
    liveness: Optional[float] = None
    speechiness: Optional[float] = None
    valence: Optional[float] = None

    def to_query_params(self) -> Dict[str, float]:
        return {f"target_{name}": value for name, value in self.model_dump(exclude_none=True).items()}


# query parameter -> TargetAttributes field
TARGET_PARAMS: Dict[str, str] = {name: name for name in FEATURE_DIMENSIONS}

# plain decimal or exponent notation; no whitespace or digit separators
NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


def _parse_float(raw: Optional[str]) -> Optional[float]:
    if raw is None or not NUMBER_RE.fullmatch(raw):
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def parse_target_attributes(query_params: Mapping[str, str]) -> TargetAttributes:
    """Build recommendation targets from query parameters, best effort.

    Each recognised parameter is parsed on its own; missing or unparseable
    values leave that target unset and never affect the others.
    """
    values: Dict[str, float] = {}
    for param, attribute in TARGET_PARAMS.items():
        value = _parse_float(query_params.get(param))
        if value is not None:
            values[attribute] = value
    return TargetAttributes(**values)
