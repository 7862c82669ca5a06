# hazardscan/scan_report/config.py
import os
from dataclasses import dataclass

from ..constants.backend import BackendConstants
from .utils.constants import HazardConstants

@dataclass
class ScanConfig:
    """Configuration parameters for a hazard scan session."""
    api_endpoint: str = BackendConstants.API_ENDPOINT
    request_timeout_s: float = BackendConstants.REQUEST_TIMEOUT_S
    default_radius_km: float = HazardConstants.DEFAULT_RADIUS_KM
    default_min_area_sq_m: float = HazardConstants.DEFAULT_MIN_AREA_SQ_M
    map_tiles: str = "OpenStreetMap"
    map_zoom_start: int = 11

    @classmethod
    def from_env(cls) -> "ScanConfig":
        """Builds a config, letting the environment override the backend endpoint and timeout."""
        config = cls()
        config.api_endpoint = os.environ.get(BackendConstants.ENDPOINT_ENV_VAR, config.api_endpoint)
        timeout = os.environ.get(BackendConstants.TIMEOUT_ENV_VAR)
        if timeout:
            config.request_timeout_s = float(timeout)
        return config
