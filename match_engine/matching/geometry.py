"""Vector and geospatial helpers."""

import math
from collections.abc import Sequence

from match_engine.errors import InvalidInputError
from match_engine.matching.types import GeoPoint

EARTH_RADIUS_KM = 6371.0


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine of the angle between two vectors.

    Returns 0.0 when either vector has zero magnitude. Vectors of different
    length are a precondition violation and raise InvalidInputError.
    """
    if len(a) != len(b):
        raise InvalidInputError(f"Vectors must have the same length ({len(a)} != {len(b)})")
    dot = sum(x * y for x, y in zip(a, b))
    norm_a = math.sqrt(sum(x * x for x in a))
    norm_b = math.sqrt(sum(x * x for x in b))
    if norm_a == 0 or norm_b == 0:
        return 0.0
    return dot / (norm_a * norm_b)


def haversine_km(origin: GeoPoint, destination: GeoPoint, radius_km: float = EARTH_RADIUS_KM) -> float:
    """Great-circle distance between two points, in kilometres."""
    d_lat = math.radians(destination.latitude - origin.latitude)
    d_lng = math.radians(destination.longitude - origin.longitude)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(origin.latitude))
        * math.cos(math.radians(destination.latitude))
        * math.sin(d_lng / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return radius_km * c
