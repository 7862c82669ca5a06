# hazardscan/scan_report/utils/constants.py
"""
Static constants used throughout the hazard scan module.
Includes category keys, map styling, risk thresholds and input defaults.
"""

class HazardConstants:
    """Constants used throughout the scan engine"""

    EARTH_RADIUS_KM = 6371.0

    # --- Feature categories ---
    WATER = 'water'
    VEGETATION = 'veg'
    WASTE = 'waste'
    OTHER = 'other'
    CATEGORIES = (WATER, VEGETATION, WASTE, OTHER)

    CATEGORY_LABELS = {
        WATER: 'Water Body',
        VEGETATION: 'Vegetation',
        WASTE: 'Ind./Waste',
        OTHER: 'Other',
    }

    CATEGORY_COLORS = {
        WATER: '#3B82F6',       # Blue
        VEGETATION: '#10B981',  # Green
        WASTE: '#8B4513',       # Brown
        OTHER: '#6B7280',       # Gray
    }

    # --- Defaults for missing backend fields ---
    DEFAULT_RISK_SCORE = 1
    DEFAULT_AREA_SQ_M = 0.0

    # --- Risk buckets (lower edge inclusive) ---
    RISK_HIGH = 'High'
    RISK_MEDIUM = 'Medium'
    RISK_LOW = 'Low'
    RISK_BUCKETS = (RISK_HIGH, RISK_MEDIUM, RISK_LOW)
    RISK_HIGH_MIN = 7
    RISK_MEDIUM_MIN = 4
    RISK_BUCKET_COLORS = {
        RISK_HIGH: '#EF4444',
        RISK_MEDIUM: '#F59E0B',
        RISK_LOW: '#10B981',
    }

    # --- Map styling ---
    BASE_WEIGHT = 1
    HEAVY_WEIGHT = 3
    HEAVY_WEIGHT_ABOVE_RISK = 7
    FILL_OPACITY = 0.6
    RADIUS_COLOR = '#EF4444'
    RADIUS_WEIGHT = 2
    ARP_ICON_HTML = '✈️'
    ARP_POPUP = 'ARP'

    # --- Request form defaults ---
    DEFAULT_RADIUS_KM = 13.0
    DEFAULT_MIN_AREA_SQ_M = 5000.0
    ICAO_LENGTH = 4
    MODE_ICAO = 'icao'
    MODE_COORDS = 'coords'
    MODES = (MODE_ICAO, MODE_COORDS)

    # --- Exports ---
    DEFAULT_EXPORT_LOCATION = 'report'
    EXPORT_FILENAME_TEMPLATE = "{date}_Scanned_Hazards_{location}.{ext}"
    KML_MIME_TYPE = 'application/vnd.google-earth.kml+xml'
    CSV_MIME_TYPE = 'text/csv'
