# hazardscan/scan_report/utils/geometry.py
"""
Provides the coordinate geometry used to place backend features relative to
the scan center: great-circle distance and a representative point per geometry.
"""
from typing import Any, Dict, List, Sequence

import numpy as np

from ..data_models import Coordinate
from ..exceptions import UnsupportedGeometry
from .constants import HazardConstants

class GeometryCalculations:
    """A collection of static methods for coordinate-based calculations."""

    @staticmethod
    def distance_km(a: Coordinate, b: Coordinate) -> float:
        """Calculates the Haversine distance between two points in kilometers."""
        d_lat = np.radians(b.lat - a.lat)
        d_lon = np.radians(b.lon - a.lon)
        h = np.sin(d_lat / 2)**2 + np.cos(np.radians(a.lat)) * np.cos(np.radians(b.lat)) * np.sin(d_lon / 2)**2
        # Rounding can push h a hair outside [0, 1] for antipodal points.
        h = np.clip(h, 0.0, 1.0)
        return float(2 * HazardConstants.EARTH_RADIUS_KM * np.arcsin(np.sqrt(h)))

    @staticmethod
    def centroid(geometry: Dict[str, Any]) -> Coordinate:
        """
        Returns a representative point for a GeoJSON geometry.

        Polygons use the arithmetic mean of the exterior ring's vertices, not the
        area-weighted centroid. MultiPolygons use the first polygon only.
        """
        geom_type = geometry.get('type') if isinstance(geometry, dict) else None
        coords = geometry.get('coordinates') if isinstance(geometry, dict) else None

        if geom_type not in ('Point', 'Polygon', 'MultiPolygon'):
            raise UnsupportedGeometry(geom_type)
        try:
            if geom_type == 'Point':
                ring = [coords]
            elif geom_type == 'Polygon':
                ring = coords[0] if coords else None
            else:
                first = coords[0] if coords else None
                ring = first[0] if first else None
        except (TypeError, IndexError, KeyError):
            raise UnsupportedGeometry(f"{geom_type} (malformed coordinates)")
        return GeometryCalculations._vertex_mean(ring, geom_type)

    @staticmethod
    def _vertex_mean(ring: Sequence[List[float]], geom_type: str) -> Coordinate:
        # GeoJSON positions are [lon, lat].
        try:
            vertices = np.array([[float(p[0]), float(p[1])] for p in ring], dtype=float)
        except (TypeError, IndexError, KeyError, ValueError):
            raise UnsupportedGeometry(f"{geom_type} (malformed coordinates)")
        if vertices.size == 0 or not np.all(np.isfinite(vertices)):
            raise UnsupportedGeometry(f"{geom_type} (empty ring)")
        lon, lat = vertices.mean(axis=0)
        return Coordinate(lat=float(lat), lon=float(lon))
