#!/usr/bin/env python3
# hazardscan/scan_report/tests/test_backend_client.py
import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).resolve().parent.parent.parent.parent
sys.path.append(str(project_root))

import unittest
from unittest.mock import MagicMock
import requests
from hazardscan.scan_report.backend_client import HazardBackendClient, classify_failure
from hazardscan.scan_report.exceptions import ErrorCategory, NetworkError

PAYLOAD = {'mode': 'icao', 'icao': 'EGLL', 'radius_km': 13.0, 'min_area_sq_m': 5000.0}

def mock_response(status=200, json_body=None, text=""):
    response = MagicMock()
    response.status_code = status
    response.ok = 200 <= status < 300
    response.text = text
    if isinstance(json_body, Exception):
        response.json.side_effect = json_body
    else:
        response.json.return_value = json_body
    return response

class TestClassifyFailure(unittest.TestCase):
    def test_timeout(self):
        self.assertEqual(classify_failure("Gateway Timeout"), ErrorCategory.TIMEOUT)
        self.assertEqual(classify_failure("upstream 504"), ErrorCategory.TIMEOUT)
        self.assertEqual(classify_failure("whatever", status_code=504), ErrorCategory.TIMEOUT)

    def test_too_many_elements(self):
        self.assertEqual(classify_failure("Query aborted: too many elements"), ErrorCategory.TOO_MANY_ELEMENTS)
        self.assertEqual(classify_failure("runtime error: query ran out of memory"),
                         ErrorCategory.TOO_MANY_ELEMENTS)

    def test_not_found(self):
        self.assertEqual(classify_failure("Airport ZZZZ not found"), ErrorCategory.NOT_FOUND)

    def test_unknown(self):
        self.assertEqual(classify_failure("Server Error"), ErrorCategory.UNKNOWN)
        self.assertEqual(classify_failure(""), ErrorCategory.UNKNOWN)

class TestHazardBackendClient(unittest.TestCase):
    def setUp(self):
        self.session = MagicMock()
        self.client = HazardBackendClient("http://backend.test/generate-report", timeout=30,
                                          session=self.session)

    def test_successful_report(self):
        body = {'feature_count': 0, 'airport_info': {}, 'map_geojson': {}, 'kml_string': '', 'csv_string': ''}
        self.session.post.return_value = mock_response(200, body)

        self.assertEqual(self.client.generate_report(PAYLOAD), body)
        self.session.post.assert_called_once_with("http://backend.test/generate-report",
                                                  json=PAYLOAD, timeout=30)

    def test_error_body_is_surfaced_verbatim(self):
        self.session.post.return_value = mock_response(404, {'error': 'Airport XXXX not found'})

        with self.assertRaises(NetworkError) as ctx:
            self.client.generate_report(PAYLOAD)
        self.assertEqual(ctx.exception.message, 'Airport XXXX not found')
        self.assertEqual(ctx.exception.category, ErrorCategory.NOT_FOUND)
        self.assertEqual(ctx.exception.status_code, 404)

    def test_gateway_timeout_without_json(self):
        self.session.post.return_value = mock_response(504, ValueError("no json"), text="")

        with self.assertRaises(NetworkError) as ctx:
            self.client.generate_report(PAYLOAD)
        self.assertEqual(ctx.exception.message, "Server Error (504)")
        self.assertEqual(ctx.exception.category, ErrorCategory.TIMEOUT)

    def test_transport_timeout(self):
        self.session.post.side_effect = requests.exceptions.ReadTimeout("Read timed out.")

        with self.assertRaises(NetworkError) as ctx:
            self.client.generate_report(PAYLOAD)
        self.assertEqual(ctx.exception.category, ErrorCategory.TIMEOUT)
        self.assertIsNone(ctx.exception.status_code)

    def test_connection_error(self):
        self.session.post.side_effect = requests.exceptions.ConnectionError("Connection refused")

        with self.assertRaises(NetworkError) as ctx:
            self.client.generate_report(PAYLOAD)
        self.assertEqual(ctx.exception.category, ErrorCategory.UNKNOWN)
        self.assertIn("Connection refused", str(ctx.exception))

    def test_invalid_json_on_success(self):
        self.session.post.return_value = mock_response(200, ValueError("bad json"))

        with self.assertRaises(NetworkError) as ctx:
            self.client.generate_report(PAYLOAD)
        self.assertEqual(ctx.exception.category, ErrorCategory.MALFORMED)

    def test_hint_per_category(self):
        error = NetworkError("x", ErrorCategory.TOO_MANY_ELEMENTS)
        self.assertIn("Reduce the radius", error.hint)

if __name__ == '__main__':
    unittest.main()
