# hazardscan/constants/backend.py

class BackendConstants:
    """Shared constants for the hazard report backend."""

    API_ENDPOINT = "https://hazard-map-backend.onrender.com/generate-report"
    LOCAL_ENDPOINT = "http://127.0.0.1:5000/generate-report"
    # Scans routinely take ~45s; the backend gives up at its own gateway limit.
    REQUEST_TIMEOUT_S = 120
    ENDPOINT_ENV_VAR = "HAZARDSCAN_API_ENDPOINT"
    TIMEOUT_ENV_VAR = "HAZARDSCAN_TIMEOUT_S"
