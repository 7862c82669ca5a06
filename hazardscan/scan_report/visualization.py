# hazardscan/scan_report/visualization.py
"""
Renders a MapLayerSet into an interactive Folium map: the ARP marker, the scan
radius and one toggleable layer per hazard category.
"""
import logging
from typing import Dict, List, Optional

import folium
import numpy as np

from .data_models import MapLayerSet, ShapeLayer
from .utils.constants import HazardConstants

KM_PER_DEGREE_LAT = 111.32

class MapVisualizer:
    """Creates Folium maps from the layer descriptors the view synchronizer builds."""

    def __init__(self, tiles: str = "OpenStreetMap", zoom_start: int = 11):
        self.tiles = tiles
        self.zoom_start = zoom_start

    def create_hazard_map(self, layers: MapLayerSet) -> folium.Map:
        marker, circle = layers.center_marker, layers.radius_circle
        hazard_map = folium.Map(location=[marker.lat, marker.lon], zoom_start=self.zoom_start,
                                tiles=self.tiles, prefer_canvas=True)

        arp_group = folium.FeatureGroup(name="Airport Reference Point", show=True).add_to(hazard_map)
        folium.Marker(
            location=[marker.lat, marker.lon],
            popup=marker.popup,
            tooltip=marker.popup,
            icon=folium.DivIcon(html=marker.icon_html, class_name='text-xl'),
        ).add_to(arp_group)
        folium.Circle(
            location=[circle.lat, circle.lon],
            radius=circle.radius_m,
            color=circle.color,
            weight=circle.weight,
            fill=circle.fill,
        ).add_to(arp_group)

        category_groups: Dict[str, folium.FeatureGroup] = {}
        rendered = 0
        for shape in layers.shapes:
            feature = self._as_geojson_feature(shape)
            if feature is None:
                logging.warning(f"Skipping feature #{shape.feature_index}: geometry cannot be drawn.")
                continue
            group = category_groups.get(shape.category)
            if group is None:
                group = folium.FeatureGroup(name=HazardConstants.CATEGORY_LABELS[shape.category], show=True)
                group.add_to(hazard_map)
                category_groups[shape.category] = group
            folium.GeoJson(
                feature,
                style_function=lambda _, s=shape: {
                    'color': s.color, 'fillColor': s.color,
                    'weight': s.weight, 'fillOpacity': s.fill_opacity,
                },
                popup=folium.Popup(shape.popup),
            ).add_to(group)
            rendered += 1

        folium.LayerControl(collapsed=False).add_to(hazard_map)
        hazard_map.fit_bounds(self.radius_bounds(circle.lat, circle.lon, circle.radius_m))
        logging.info(f"Hazard map created with {rendered} feature shapes.")
        return hazard_map

    def save(self, layers: MapLayerSet, path: str) -> str:
        self.create_hazard_map(layers).save(path)
        logging.info(f"Hazard map written to {path}")
        return path

    @staticmethod
    def radius_bounds(lat: float, lon: float, radius_m: float) -> List[List[float]]:
        """South-west / north-east corners of the box enclosing the scan circle."""
        radius_km = radius_m / 1000
        d_lat = radius_km / KM_PER_DEGREE_LAT
        d_lon = radius_km / (KM_PER_DEGREE_LAT * max(np.cos(np.radians(lat)), 1e-6))
        return [[float(lat - d_lat), float(lon - d_lon)], [float(lat + d_lat), float(lon + d_lon)]]

    @staticmethod
    def _as_geojson_feature(shape: ShapeLayer) -> Optional[dict]:
        geometry = shape.geometry
        if not isinstance(geometry, dict) or not geometry.get('type') or geometry.get('coordinates') is None:
            return None
        return {"type": "Feature", "geometry": geometry, "properties": {"index": shape.feature_index}}
