# hazardscan/scan_report/core.py
"""
The core orchestrator for a hazard scan session. ReportSession owns the one
accepted ScanResult and the category filter; everything the operator sees is
recomputed from those two through the ViewSynchronizer.

Lifecycle: IDLE -> FETCHING -> READY, FETCHING -> FAILED, and reset() back to
IDLE from anywhere. Only the backend call suspends; normalization runs to
completion before READY is entered.
"""
import asyncio
import logging
from datetime import date, datetime, timezone
from enum import Enum, auto
from typing import Any, Dict, Iterable, Optional

from .backend_client import HazardBackendClient, classify_failure
from .config import ScanConfig
from .data_models import AirportInfo, ExportArtifact, ScanRequest, ScanResult, ViewBundle
from .exceptions import ErrorCategory, InvalidStateError, NetworkError, StaleResponse, ValidationError
from .filter_engine import all_categories, toggle, validate_categories
from .normalizer import normalize_batch
from .utils.constants import HazardConstants
from .view_sync import ViewSynchronizer, recompute

REQUIRED_RESPONSE_KEYS = ('airport_info', 'map_geojson', 'kml_string', 'csv_string')

class SessionState(Enum):
    IDLE = auto()
    FETCHING = auto()
    READY = auto()
    FAILED = auto()

class ReportSession:
    """Top-level state holder that external UI glue drives."""

    def __init__(self, client: Optional[HazardBackendClient] = None,
                 config: Optional[ScanConfig] = None,
                 synchronizer: Optional[ViewSynchronizer] = None):
        self.config = config or ScanConfig()
        self.client = client or HazardBackendClient(self.config.api_endpoint, self.config.request_timeout_s)
        self.synchronizer = synchronizer or ViewSynchronizer()
        self.state = SessionState.IDLE
        self.result: Optional[ScanResult] = None
        self.active_categories = all_categories()
        self.mode = HazardConstants.MODE_ICAO
        self.last_error: Optional[NetworkError] = None
        self.status_message = ""
        self._generation = 0
        logging.info("ReportSession initialized.")

    # --- Scanning ---

    async def start_scan(self, request: ScanRequest) -> Optional[ScanResult]:
        """
        Runs one scan. Returns the new ScanResult, or None when the call was
        ignored (scan already in flight) or its response went stale.
        """
        if self.state is SessionState.FETCHING:
            logging.warning("Scan already in progress; ignoring new request.")
            return None

        request.validate()
        self._generation += 1
        generation = self._generation
        self.mode = request.mode
        self.last_error = None
        self._set_state(SessionState.FETCHING)
        self.status_message = "Scanning... (This takes ~45s)"

        loop = asyncio.get_running_loop()
        try:
            try:
                data = await loop.run_in_executor(None, self.client.generate_report, request.to_payload())
            except NetworkError:
                self._check_current(generation)
                raise
            except asyncio.CancelledError:
                if generation == self._generation:
                    self._set_state(SessionState.IDLE)
                    self.status_message = ""
                raise
            except Exception as e:
                self._check_current(generation)
                raise NetworkError(str(e), classify_failure(str(e))) from e

            self._check_current(generation)
            try:
                result = self._ingest(data, request)
            except NetworkError:
                raise
            except Exception as e:
                raise NetworkError(f"Malformed response: {e}", ErrorCategory.MALFORMED) from e
        except StaleResponse as e:
            logging.debug(str(e))
            return None
        except NetworkError as e:
            self._fail(e)
            raise

        self.result = result
        self.active_categories = all_categories()
        self._set_state(SessionState.READY)
        self.status_message = f"Success! Found {result.feature_count} features."
        self.synchronizer.publish(self.result, self.active_categories)
        return result

    def _ingest(self, data: Dict[str, Any], request: ScanRequest) -> ScanResult:
        missing = [key for key in REQUIRED_RESPONSE_KEYS if key not in data]
        if missing:
            raise NetworkError(f"Response missing fields: {', '.join(missing)}", ErrorCategory.MALFORMED)
        try:
            center = AirportInfo.from_dict(data['airport_info'])
            raw_features = (data['map_geojson'] or {}).get('features') or []
            feature_count = int(data.get('feature_count', len(raw_features)))
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise NetworkError(f"Malformed response: {e}", ErrorCategory.MALFORMED) from e

        features, skipped = normalize_batch(raw_features, center.coordinate)
        logging.info(
            f"Ingested {len(features)} features around {center.name or 'custom point'} "
            f"({skipped} degraded)."
        )
        return ScanResult(
            features=features,
            center=center,
            radius_km=request.radius_km,
            kml_export=data['kml_string'] or "",
            csv_export=data['csv_string'] or "",
            feature_count=feature_count,
            skipped_count=skipped,
            request=request,
        )

    def _check_current(self, generation: int) -> None:
        if generation != self._generation or self.state is not SessionState.FETCHING:
            raise StaleResponse(generation, self._generation)

    def _fail(self, error: NetworkError) -> None:
        self.last_error = error
        self._set_state(SessionState.FAILED)
        self.status_message = f"Error: {error.message}"
        logging.error(f"Scan failed ({error.category.value}): {error.message}")

    # --- Filtering ---

    def toggle_category(self, key: str) -> ViewBundle:
        self._require(SessionState.READY, "toggle a category")
        self.active_categories = toggle(self.active_categories, key)
        return self.synchronizer.publish(self.result, self.active_categories)

    def set_categories(self, keys: Iterable[str]) -> ViewBundle:
        self._require(SessionState.READY, "set categories")
        self.active_categories = validate_categories(keys)
        return self.synchronizer.publish(self.result, self.active_categories)

    def current_views(self) -> ViewBundle:
        self._require(SessionState.READY, "read views")
        return recompute(self.result, self.active_categories)

    # --- Mode & reset ---

    def select_mode(self, mode: str) -> None:
        if mode not in HazardConstants.MODES:
            raise ValidationError('mode', f"Unknown request mode '{mode}'")
        self.mode = mode

    def reset(self) -> None:
        """Discards the scan and filter from any state; an in-flight response will be dropped."""
        self._generation += 1
        self.result = None
        self.active_categories = all_categories()
        self.last_error = None
        self.status_message = ""
        self._set_state(SessionState.IDLE)
        self.synchronizer.clear()

    # --- Exports ---

    def export_kml(self, on_date: Optional[date] = None) -> ExportArtifact:
        self._require(SessionState.READY, "export KML")
        return self._export(self.result.kml_export, 'kml', HazardConstants.KML_MIME_TYPE, on_date)

    def export_csv(self, on_date: Optional[date] = None) -> ExportArtifact:
        self._require(SessionState.READY, "export CSV")
        return self._export(self.result.csv_export, 'csv', HazardConstants.CSV_MIME_TYPE, on_date)

    def _export(self, content: str, ext: str, mime_type: str, on_date: Optional[date]) -> ExportArtifact:
        on_date = on_date or datetime.now(timezone.utc).date()
        request = self.result.request
        location = request.location_token() if request else HazardConstants.DEFAULT_EXPORT_LOCATION
        filename = HazardConstants.EXPORT_FILENAME_TEMPLATE.format(
            date=on_date.isoformat(), location=location, ext=ext
        )
        return ExportArtifact(filename=filename, content=content, mime_type=mime_type)

    # --- Helpers ---

    @property
    def skipped_count(self) -> int:
        return self.result.skipped_count if self.result else 0

    def _require(self, state: SessionState, operation: str) -> None:
        if self.state is not state:
            raise InvalidStateError(operation, self.state)

    def _set_state(self, state: SessionState) -> None:
        if state is not self.state:
            logging.info(f"Session {self.state.name} -> {state.name}")
        self.state = state
