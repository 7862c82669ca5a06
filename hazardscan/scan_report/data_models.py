# hazardscan/scan_report/data_models.py
"""
Defines the core data structures used throughout the hazard scan module.
Backend features arrive as GeoJSON dicts and are normalized once into
NormalizedFeature records; everything shown to the operator (map layers,
dashboard stats, ranked list) is derived from those records.
"""
import math
from dataclasses import dataclass, field
from typing import List, Dict, Optional, Any, Tuple

from .exceptions import ValidationError
from .utils.constants import HazardConstants

# A backend feature is kept as the GeoJSON dict it arrived as.
RawFeature = Dict[str, Any]

# --- Core Operational Data Structures ---

@dataclass(frozen=True)
class Coordinate:
    """A latitude/longitude pair in decimal degrees."""
    lat: float
    lon: float

    def is_valid(self) -> bool:
        return (
            math.isfinite(self.lat) and math.isfinite(self.lon)
            and -90.0 <= self.lat <= 90.0 and -180.0 <= self.lon <= 180.0
        )

@dataclass(frozen=True)
class AirportInfo:
    """The analysis center (ARP or custom point) reported by the backend."""
    name: str
    lat: float
    lon: float

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(self.lat, self.lon)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AirportInfo":
        return cls(name=str(data.get('name', '')), lat=float(data['lat']), lon=float(data['lon']))

@dataclass(frozen=True)
class NormalizedFeature:
    """
    A backend feature with guaranteed centroid and distance fields. Built once
    at ingestion and never mutated afterwards.
    """
    index: int
    geometry: Dict[str, Any]
    properties: Dict[str, Any]
    custom_type: str
    category: str
    area_sq_m: float
    risk_score: int
    centroid: Coordinate
    distance_km: float
    name: Optional[str] = None
    degraded: bool = False

    @property
    def label(self) -> str:
        return HazardConstants.CATEGORY_LABELS[self.category]

    def to_geojson(self) -> RawFeature:
        """
        Re-emits the feature as GeoJSON. The properties already carry the
        centroid and distance unless the feature was degraded, in which case
        they are left as the backend sent them. The ingestion index is not part
        of GeoJSON; pass it back as `index` when normalizing the output again.
        """
        return {"type": "Feature", "geometry": self.geometry, "properties": dict(self.properties)}

@dataclass
class ScanRequest:
    """The operator's scan request, either by ICAO code or by raw coordinates."""
    mode: str = HazardConstants.MODE_ICAO
    icao: Optional[str] = None
    lat: Optional[float] = None
    lon: Optional[float] = None
    radius_km: float = HazardConstants.DEFAULT_RADIUS_KM
    min_area_sq_m: float = HazardConstants.DEFAULT_MIN_AREA_SQ_M

    @classmethod
    def from_form(cls, mode: str, icao: str = "", lat: str = "", lon: str = "",
                  radius: str = "", min_area: str = "") -> "ScanRequest":
        """Builds a request from free-text form inputs; blank numbers fall back to defaults."""
        return cls(
            mode=mode,
            icao=(icao or "").strip().upper() or None,
            lat=_parse_float(lat),
            lon=_parse_float(lon),
            radius_km=_parse_float(radius) or HazardConstants.DEFAULT_RADIUS_KM,
            min_area_sq_m=_parse_float(min_area) or HazardConstants.DEFAULT_MIN_AREA_SQ_M,
        )

    def validate(self) -> None:
        if self.mode not in HazardConstants.MODES:
            raise ValidationError('mode', f"Unknown request mode '{self.mode}'")
        if self.mode == HazardConstants.MODE_ICAO:
            if not self.icao or len(self.icao) != HazardConstants.ICAO_LENGTH:
                raise ValidationError('icao', f"ICAO must be {HazardConstants.ICAO_LENGTH} chars")
        else:
            for name in ('lat', 'lon'):
                value = getattr(self, name)
                if not _is_number(value):
                    raise ValidationError(name, "Coordinate must be numeric")
            if not Coordinate(float(self.lat), float(self.lon)).is_valid():
                raise ValidationError('lat/lon', "Coordinate out of range")
        if not _is_positive(self.radius_km):
            raise ValidationError('radius_km', "Radius must be greater than zero")
        if not _is_number(self.min_area_sq_m) or self.min_area_sq_m < 0:
            raise ValidationError('min_area_sq_m', "Minimum area must not be negative")

    def to_payload(self) -> Dict[str, Any]:
        payload = {
            'mode': self.mode,
            'radius_km': self.radius_km,
            'min_area_sq_m': self.min_area_sq_m,
        }
        if self.mode == HazardConstants.MODE_ICAO:
            payload['icao'] = self.icao.upper()
        else:
            payload['lat'] = self.lat
            payload['lon'] = self.lon
        return payload

    def location_token(self) -> str:
        if self.mode == HazardConstants.MODE_ICAO:
            return self.icao.upper()
        return f"Custom_{self.lat}_{self.lon}"

@dataclass(frozen=True)
class ScanResult:
    """One accepted backend response. Replaced wholesale by the next scan."""
    features: Tuple[NormalizedFeature, ...]
    center: AirportInfo
    radius_km: float
    kml_export: str
    csv_export: str
    feature_count: int
    skipped_count: int = 0
    request: Optional[ScanRequest] = None

@dataclass
class AggregateStats:
    """Dashboard numbers for the active subset."""
    total_count: int
    total_area_sq_m: float
    by_category: Dict[str, int]
    by_risk_bucket: Dict[str, int]

    @classmethod
    def empty(cls) -> "AggregateStats":
        return cls(
            total_count=0,
            total_area_sq_m=0.0,
            by_category={key: 0 for key in HazardConstants.CATEGORIES},
            by_risk_bucket={key: 0 for key in HazardConstants.RISK_BUCKETS},
        )

# --- Map layer descriptors ---

@dataclass(frozen=True)
class MarkerLayer:
    lat: float
    lon: float
    icon_html: str = HazardConstants.ARP_ICON_HTML
    popup: str = HazardConstants.ARP_POPUP

@dataclass(frozen=True)
class CircleLayer:
    lat: float
    lon: float
    radius_m: float
    color: str = HazardConstants.RADIUS_COLOR
    weight: int = HazardConstants.RADIUS_WEIGHT
    fill: bool = False

@dataclass(frozen=True)
class ShapeLayer:
    feature_index: int
    category: str
    geometry: Dict[str, Any]
    color: str
    weight: int
    popup: str
    fill_opacity: float = HazardConstants.FILL_OPACITY

@dataclass
class MapLayerSet:
    center_marker: MarkerLayer
    radius_circle: CircleLayer
    shapes: List[ShapeLayer] = field(default_factory=list)

@dataclass
class ViewBundle:
    """The three coupled views derived from (ScanResult, FilterState)."""
    layers: Optional[MapLayerSet]
    stats: AggregateStats
    ranked: List[NormalizedFeature] = field(default_factory=list)

    @classmethod
    def empty(cls) -> "ViewBundle":
        return cls(layers=None, stats=AggregateStats.empty(), ranked=[])

@dataclass(frozen=True)
class ExportArtifact:
    filename: str
    content: str
    mime_type: str

def _parse_float(text: Any) -> Optional[float]:
    """Lenient float parse for form input; returns None for blank or non-numeric text."""
    if isinstance(text, (int, float)):
        return float(text) if math.isfinite(text) else None
    try:
        value = float(str(text).strip())
    except (TypeError, ValueError):
        return None
    return value if math.isfinite(value) else None

def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)

def _is_positive(value: Any) -> bool:
    return _is_number(value) and value > 0
