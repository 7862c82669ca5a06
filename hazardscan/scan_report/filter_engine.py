# hazardscan/scan_report/filter_engine.py
"""
Category filtering over a normalized feature set. Filtering only decides what
is visible; it never touches the features themselves.
"""
from typing import FrozenSet, Iterable, List, Sequence

from .exceptions import ValidationError
from .utils.constants import HazardConstants

def category_of(custom_type: str) -> str:
    """Folds any backend type outside the four known keys into 'other'."""
    return custom_type if custom_type in HazardConstants.CATEGORIES else HazardConstants.OTHER

def all_categories() -> FrozenSet[str]:
    return frozenset(HazardConstants.CATEGORIES)

def select_active(features: Sequence, active: Iterable[str]) -> List:
    """Stable filter: keeps features whose category is active, in ingestion order."""
    active = frozenset(active)
    if not active:
        return []
    return [f for f in features if category_of(f.custom_type) in active]

def toggle(active: Iterable[str], key: str) -> FrozenSet[str]:
    """Returns a new filter set with `key` switched on or off."""
    if key not in HazardConstants.CATEGORIES:
        raise ValidationError('category', f"Unknown category '{key}'")
    active = frozenset(active)
    return active - {key} if key in active else active | {key}

def validate_categories(keys: Iterable[str]) -> FrozenSet[str]:
    keys = frozenset(keys)
    unknown = keys - all_categories()
    if unknown:
        raise ValidationError('category', f"Unknown categories {sorted(unknown)}")
    return keys
