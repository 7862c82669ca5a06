# hazardscan/scan_report/normalizer.py
"""
Turns backend GeoJSON features into NormalizedFeature records.

Server-computed centroid and distance values are trusted when present; the
engine only fills in what is missing. A feature whose geometry cannot be
reduced to a point is kept, pinned to the scan center and flagged as degraded,
so one bad feature never aborts a batch.
"""
import logging
import math
from typing import Any, Iterable, Optional, Tuple, Union

from .data_models import Coordinate, NormalizedFeature, RawFeature
from .exceptions import UnsupportedGeometry
from .filter_engine import category_of
from .utils.constants import HazardConstants
from .utils.geometry import GeometryCalculations

def normalize(raw: Union[RawFeature, NormalizedFeature], center: Coordinate, index: int = 0) -> NormalizedFeature:
    """Normalizes one feature against the scan center. Pure and idempotent."""
    if isinstance(raw, NormalizedFeature):
        return raw
    if not isinstance(raw, dict):
        raw = {}

    geometry = raw.get('geometry') or {}
    properties = raw.get('properties')
    properties = dict(properties) if isinstance(properties, dict) else {}
    custom_type = str(properties.get('custom_type') or HazardConstants.OTHER)

    backend_centroid = _backend_centroid(properties)
    backend_distance = _backend_distance(properties)
    degraded = False

    centroid = backend_centroid
    if centroid is None:
        try:
            centroid = GeometryCalculations.centroid(geometry)
        except UnsupportedGeometry as e:
            logging.warning(f"Feature #{index} degraded to scan center: {e}")
            centroid = center
            degraded = True

    if backend_distance is not None:
        distance = backend_distance
    elif degraded:
        distance = 0.0
    else:
        distance = GeometryCalculations.distance_km(centroid, center)

    if not degraded:
        properties['centroid_lat'] = centroid.lat
        properties['centroid_lon'] = centroid.lon
        properties['distance_km'] = distance

    name = properties.get('name')
    return NormalizedFeature(
        index=index,
        geometry=geometry,
        properties=properties,
        custom_type=custom_type,
        category=category_of(custom_type),
        area_sq_m=_coerce_area(properties.get('area_sq_m')),
        risk_score=_coerce_risk(properties.get('risk_score')),
        centroid=centroid,
        distance_km=distance,
        name=str(name) if name is not None else None,
        degraded=degraded,
    )

def normalize_batch(raws: Iterable[RawFeature], center: Coordinate) -> Tuple[Tuple[NormalizedFeature, ...], int]:
    """Normalizes a whole backend batch in order. Returns (features, skipped_count)."""
    features = tuple(normalize(raw, center, index=i) for i, raw in enumerate(raws))
    skipped = sum(1 for f in features if f.degraded)
    if skipped:
        logging.warning(f"{skipped} of {len(features)} features had unsupported geometry.")
    return features, skipped

def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)

def _backend_centroid(properties: dict) -> Optional[Coordinate]:
    lat, lon = properties.get('centroid_lat'), properties.get('centroid_lon')
    if not (_is_number(lat) and _is_number(lon)):
        return None
    point = Coordinate(lat=float(lat), lon=float(lon))
    return point if point.is_valid() else None

def _backend_distance(properties: dict) -> Optional[float]:
    value = properties.get('distance_km')
    if _is_number(value) and value >= 0:
        return float(value)
    return None

def _coerce_area(value: Any) -> float:
    if _is_number(value) and value >= 0:
        return float(value)
    return HazardConstants.DEFAULT_AREA_SQ_M

def _coerce_risk(value: Any) -> int:
    if isinstance(value, str):
        try:
            value = float(value)
        except ValueError:
            return HazardConstants.DEFAULT_RISK_SCORE
    if _is_number(value):
        return int(value)
    return HazardConstants.DEFAULT_RISK_SCORE
