# hazardscan/scan_report/aggregator.py
"""
Dashboard statistics over the active subset. Always a full recompute from the
subset handed in, so the numbers can never drift from what the map shows.
"""
from typing import Dict, List, Optional, Sequence

from .data_models import AggregateStats, NormalizedFeature
from .filter_engine import category_of
from .utils.constants import HazardConstants

def risk_bucket(score: Optional[int]) -> str:
    """Buckets a risk score; lower edges are inclusive (7 is High, 4 is Medium)."""
    if score is None:
        score = HazardConstants.DEFAULT_RISK_SCORE
    if score >= HazardConstants.RISK_HIGH_MIN:
        return HazardConstants.RISK_HIGH
    if score >= HazardConstants.RISK_MEDIUM_MIN:
        return HazardConstants.RISK_MEDIUM
    return HazardConstants.RISK_LOW

def aggregate(subset: Sequence[NormalizedFeature]) -> AggregateStats:
    stats = AggregateStats.empty()
    for feature in subset:
        stats.total_count += 1
        stats.total_area_sq_m += feature.area_sq_m or HazardConstants.DEFAULT_AREA_SQ_M
        stats.by_category[category_of(feature.custom_type)] += 1
        stats.by_risk_bucket[risk_bucket(feature.risk_score)] += 1
    return stats

def chart_series(stats: AggregateStats) -> Dict[str, List[Dict]]:
    """The label/value/color rows a chart widget would draw for the dashboard."""
    return {
        'categories': [
            {
                'key': key,
                'label': HazardConstants.CATEGORY_LABELS[key],
                'value': stats.by_category.get(key, 0),
                'color': HazardConstants.CATEGORY_COLORS[key],
            }
            for key in HazardConstants.CATEGORIES
        ],
        'risk': [
            {
                'label': bucket,
                'value': stats.by_risk_bucket.get(bucket, 0),
                'color': HazardConstants.RISK_BUCKET_COLORS[bucket],
            }
            for bucket in HazardConstants.RISK_BUCKETS
        ],
    }
