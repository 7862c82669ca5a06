# hazardscan/scan_report/view_sync.py
"""
The single choke-point that derives the map layers, dashboard stats and ranked
list from (ScanResult, active categories). Every state change goes through
recompute(); nothing derived is ever patched in place.
"""
import logging
from typing import Callable, Iterable, List, Optional

from .aggregator import aggregate
from .data_models import (
    CircleLayer, MapLayerSet, MarkerLayer, NormalizedFeature, ScanResult, ShapeLayer, ViewBundle
)
from .filter_engine import select_active
from .utils.constants import HazardConstants

def style_for(feature: NormalizedFeature) -> dict:
    color = HazardConstants.CATEGORY_COLORS[feature.category]
    weight = (HazardConstants.HEAVY_WEIGHT
              if feature.risk_score > HazardConstants.HEAVY_WEIGHT_ABOVE_RISK
              else HazardConstants.BASE_WEIGHT)
    return {'color': color, 'weight': weight, 'fillOpacity': HazardConstants.FILL_OPACITY}

def popup_for(feature: NormalizedFeature) -> str:
    area = f"{round(feature.area_sq_m):,}"
    return f"<b>{feature.label}</b><br>Area: {area} m²"

def build_layers(result: ScanResult, active_features: Iterable[NormalizedFeature]) -> MapLayerSet:
    center = result.center
    shapes = []
    for feature in active_features:
        style = style_for(feature)
        shapes.append(ShapeLayer(
            feature_index=feature.index,
            category=feature.category,
            geometry=feature.geometry,
            color=style['color'],
            weight=style['weight'],
            popup=popup_for(feature),
        ))
    return MapLayerSet(
        center_marker=MarkerLayer(lat=center.lat, lon=center.lon),
        radius_circle=CircleLayer(lat=center.lat, lon=center.lon, radius_m=result.radius_km * 1000),
        shapes=shapes,
    )

def rank_features(active_features: Iterable[NormalizedFeature]) -> List[NormalizedFeature]:
    # sorted() is stable, so equal scores keep ingestion order.
    return sorted(active_features, key=lambda f: f.risk_score, reverse=True)

def recompute(result: ScanResult, active: Iterable[str]) -> ViewBundle:
    """Pure derivation of all three views from one scan and one filter state."""
    subset = select_active(result.features, active)
    return ViewBundle(
        layers=build_layers(result, subset),
        stats=aggregate(subset),
        ranked=rank_features(subset),
    )

Sink = Callable[[object], None]

class ViewSynchronizer:
    """Pushes each recomputed ViewBundle to the map, dashboard and list sinks."""

    def __init__(self, map_sink: Optional[Sink] = None, dashboard_sink: Optional[Sink] = None,
                 list_sink: Optional[Sink] = None):
        self.map_sink = map_sink
        self.dashboard_sink = dashboard_sink
        self.list_sink = list_sink
        self.last_bundle = ViewBundle.empty()

    def publish(self, result: ScanResult, active: Iterable[str]) -> ViewBundle:
        bundle = recompute(result, active)
        logging.info(
            f"Views refreshed: {bundle.stats.total_count}/{len(result.features)} features active."
        )
        self._push(bundle)
        return bundle

    def clear(self) -> ViewBundle:
        bundle = ViewBundle.empty()
        self._push(bundle)
        return bundle

    def _push(self, bundle: ViewBundle) -> None:
        self.last_bundle = bundle
        if self.map_sink:
            self.map_sink(bundle.layers)
        if self.dashboard_sink:
            self.dashboard_sink(bundle.stats)
        if self.list_sink:
            self.list_sink(bundle.ranked)
