"""
HazardScan - Scan Report Module
Ingests a backend hazard scan around an airport and keeps the map layers,
dashboard statistics and ranked hazard list consistent with the active
category filter.
"""

from .core import ReportSession, SessionState
from .data_models import ScanRequest, ScanResult, NormalizedFeature, AggregateStats, ViewBundle
from .exceptions import HazardScanError, ValidationError, NetworkError, UnsupportedGeometry, InvalidStateError

__all__ = [
    "ReportSession",
    "SessionState",
    "ScanRequest",
    "ScanResult",
    "NormalizedFeature",
    "AggregateStats",
    "ViewBundle",
    "HazardScanError",
    "ValidationError",
    "NetworkError",
    "UnsupportedGeometry",
    "InvalidStateError"
]
