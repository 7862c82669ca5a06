#!/usr/bin/env python3
# hazardscan/scan_report/tests/test_filter_aggregate.py
import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).resolve().parent.parent.parent.parent
sys.path.append(str(project_root))

import unittest
from hazardscan.scan_report.aggregator import aggregate, chart_series, risk_bucket
from hazardscan.scan_report.data_models import AggregateStats, Coordinate
from hazardscan.scan_report.exceptions import ValidationError
from hazardscan.scan_report.filter_engine import all_categories, select_active, toggle
from hazardscan.scan_report.normalizer import normalize_batch

CENTER = Coordinate(40.6413, -73.7781)

def make_features(rows):
    """rows: list of (custom_type, area_sq_m, risk_score or None)"""
    raws = []
    for i, (custom_type, area, risk) in enumerate(rows):
        properties = {'custom_type': custom_type, 'area_sq_m': area, 'name': f"F{i}"}
        if risk is not None:
            properties['risk_score'] = risk
        raws.append({"type": "Feature",
                     "geometry": {"type": "Point", "coordinates": [-73.77 + i * 0.001, 40.64]},
                     "properties": properties})
    features, _ = normalize_batch(raws, CENTER)
    return features

MIXED = [
    ('water', 1000.0, 3), ('veg', 2000.0, 5), ('water', 500.0, 9), ('waste', 1500.0, 7),
    ('other', 100.0, None), ('veg', 800.0, 4), ('water', 250.0, 2), ('waste', 50.0, 8),
    ('industrial', 300.0, 6), ('veg', 700.0, 1),
]

class TestSelectActive(unittest.TestCase):
    def setUp(self):
        self.features = make_features(MIXED)

    def test_all_active_keeps_everything_in_order(self):
        self.assertEqual(select_active(self.features, all_categories()), list(self.features))

    def test_stable_filter(self):
        active = select_active(self.features, {'veg', 'waste'})
        self.assertEqual([f.index for f in active], [1, 3, 5, 7, 9])

    def test_unknown_type_counts_as_other(self):
        active = select_active(self.features, {'other'})
        self.assertEqual([f.custom_type for f in active], ['other', 'industrial'])

    def test_empty_filter_shows_nothing(self):
        self.assertEqual(select_active(self.features, set()), [])

    def test_filtering_twice_changes_nothing(self):
        once = select_active(self.features, {'water', 'other'})
        self.assertEqual(select_active(once, {'water', 'other'}), once)

    def test_toggling_off_water(self):
        """3 of 10 features are water; hiding water leaves 7 and the dashboard agrees"""
        active = toggle(all_categories(), 'water')
        subset = select_active(self.features, active)
        self.assertEqual(len(subset), 7)
        self.assertEqual(aggregate(subset).total_count, 7)

    def test_toggle_round_trip_and_unknown_key(self):
        self.assertEqual(toggle(toggle(all_categories(), 'veg'), 'veg'), all_categories())
        with self.assertRaises(ValidationError):
            toggle(all_categories(), 'runway')

class TestAggregate(unittest.TestCase):
    def test_counts_match_subset_size(self):
        features = make_features(MIXED)
        for active in ({'water'}, {'veg', 'waste'}, all_categories()):
            subset = select_active(features, active)
            stats = aggregate(subset)
            self.assertEqual(stats.total_count, len(subset))
            self.assertEqual(sum(stats.by_category.values()), len(subset))
            self.assertEqual(sum(stats.by_risk_bucket.values()), len(subset))

    def test_full_set_numbers(self):
        stats = aggregate(make_features(MIXED))
        self.assertAlmostEqual(stats.total_area_sq_m, 7200.0)
        self.assertEqual(stats.by_category, {'water': 3, 'veg': 3, 'waste': 2, 'other': 2})
        self.assertEqual(stats.by_risk_bucket, {'High': 3, 'Medium': 3, 'Low': 4})

    def test_empty_subset(self):
        stats = aggregate([])
        self.assertEqual(stats, AggregateStats.empty())
        self.assertEqual(stats.total_count, 0)
        self.assertEqual(stats.total_area_sq_m, 0.0)
        self.assertTrue(all(v == 0 for v in stats.by_risk_bucket.values()))

    def test_high_risk_waste_scenario(self):
        stats = aggregate(make_features([('waste', 1000.0, 7)]))
        self.assertEqual(stats.by_risk_bucket['High'], 1)
        self.assertEqual(stats.by_category['waste'], 1)
        self.assertEqual(stats.total_area_sq_m, 1000.0)

    def test_missing_risk_is_low(self):
        stats = aggregate(make_features([('veg', 10.0, None)]))
        self.assertEqual(stats.by_risk_bucket, {'High': 0, 'Medium': 0, 'Low': 1})

    def test_bucket_edges(self):
        self.assertEqual(risk_bucket(7), 'High')
        self.assertEqual(risk_bucket(10), 'High')
        self.assertEqual(risk_bucket(6), 'Medium')
        self.assertEqual(risk_bucket(4), 'Medium')
        self.assertEqual(risk_bucket(3), 'Low')
        self.assertEqual(risk_bucket(None), 'Low')

    def test_recompute_has_no_memory(self):
        features = make_features(MIXED)
        first = aggregate(features[:3])
        aggregate(features)
        self.assertEqual(aggregate(features[:3]), first)

    def test_chart_series(self):
        series = chart_series(aggregate(make_features(MIXED)))
        self.assertEqual([row['key'] for row in series['categories']], ['water', 'veg', 'waste', 'other'])
        self.assertEqual(series['categories'][0]['label'], 'Water Body')
        self.assertEqual([row['value'] for row in series['risk']], [3, 3, 4])

if __name__ == '__main__':
    unittest.main()
