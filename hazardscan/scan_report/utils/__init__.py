# Geometry helpers depend on data_models, so only the constants are exposed here.

from .constants import HazardConstants

__all__ = [
    "HazardConstants"
]
