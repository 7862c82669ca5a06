# hazardscan/scan_report/backend_client.py
"""
Handles all interactions with the hazard report backend.

The backend does the actual hazard detection and risk scoring; this client only
posts the request and turns failures into classified NetworkErrors. It never
retries: resubmitting is the operator's call.
"""
import logging
from typing import Any, Dict, Optional

import requests

from ..constants.backend import BackendConstants
from .exceptions import ErrorCategory, NetworkError

def classify_failure(message: str, status_code: Optional[int] = None) -> ErrorCategory:
    """Heuristic classification of a backend failure by status code and message text."""
    text = (message or "").lower()
    if status_code == 504 or '504' in text or 'timeout' in text or 'timed out' in text:
        return ErrorCategory.TIMEOUT
    if any(token in text for token in ('element', 'too many', 'query abort', 'runtime error')):
        return ErrorCategory.TOO_MANY_ELEMENTS
    if status_code == 404 or 'not found' in text:
        return ErrorCategory.NOT_FOUND
    return ErrorCategory.UNKNOWN

class HazardBackendClient:
    """
    A dedicated client for the backend's report generation endpoint.
    """

    def __init__(self, endpoint: str = BackendConstants.API_ENDPOINT,
                 timeout: float = BackendConstants.REQUEST_TIMEOUT_S,
                 session: Optional[requests.Session] = None):
        """
        Initializes the HazardBackendClient.

        Args:
            endpoint: Full URL of the report generation endpoint.
            timeout: The timeout in seconds for the API request.
            session: Optional pre-configured requests session.
        """
        self.endpoint = endpoint
        self.timeout = timeout
        self.session = session or requests.Session()
        logging.info(f"HazardBackendClient initialized for {endpoint}")

    def generate_report(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Posts a scan request and returns the decoded report.

        Raises:
            NetworkError: on transport failure, non-2xx status or an
                unreadable response body.
        """
        try:
            logging.info(f"Requesting hazard report: {payload}")
            response = self.session.post(self.endpoint, json=payload, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            logging.error(f"Hazard report request timed out: {e}")
            raise NetworkError(str(e), ErrorCategory.TIMEOUT) from e
        except requests.exceptions.RequestException as e:
            logging.error(f"Failed to reach hazard report backend: {e}")
            raise NetworkError(str(e), classify_failure(str(e))) from e

        if not response.ok:
            message = self._error_message(response)
            category = classify_failure(message, response.status_code)
            logging.error(f"Backend returned {response.status_code}: {message}")
            raise NetworkError(message, category, response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            raise NetworkError("Server returned invalid JSON", ErrorCategory.MALFORMED,
                               response.status_code) from e
        if not isinstance(data, dict):
            raise NetworkError("Server returned an unexpected payload", ErrorCategory.MALFORMED,
                               response.status_code)

        logging.info(f"Received report with {data.get('feature_count', 0)} features.")
        return data

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get('error'):
            return str(body['error'])
        text = (response.text or "").strip()
        return text or f"Server Error ({response.status_code})"
