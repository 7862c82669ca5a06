#!/usr/bin/env python3
"""
Hazard Scan Exceptions
Standardized error types for scan requests, backend calls and feature ingestion
"""
from enum import Enum


class ErrorCategory(Enum):
    """Heuristic classification of backend failures shown to the operator."""
    TIMEOUT = "timeout"
    TOO_MANY_ELEMENTS = "too_many_elements"
    NOT_FOUND = "not_found"
    MALFORMED = "malformed"
    UNKNOWN = "unknown"


ERROR_HINTS = {
    ErrorCategory.TIMEOUT: "The scan timed out. Try a smaller radius or a larger minimum area.",
    ErrorCategory.TOO_MANY_ELEMENTS: "Too many map elements in this area. Reduce the radius or raise the minimum area.",
    ErrorCategory.NOT_FOUND: "Airport not found. Check the ICAO code or use coordinates instead.",
    ErrorCategory.MALFORMED: "The server returned an unreadable response.",
    ErrorCategory.UNKNOWN: "The server could not complete the scan.",
}


class HazardScanError(Exception):
    """Base class for all hazard scan errors"""
    pass


class ValidationError(HazardScanError):
    """Request input rejected before any network call"""
    def __init__(self, field, message="Invalid value"):
        self.field = field
        super().__init__(f"{message} [Field: {field}]")


class NetworkError(HazardScanError):
    """Transport failure or non-2xx answer from the backend"""
    def __init__(self, message, category=ErrorCategory.UNKNOWN, status_code=None):
        self.message = message
        self.category = category
        self.status_code = status_code
        super().__init__(message)

    @property
    def hint(self) -> str:
        return ERROR_HINTS[self.category]


class UnsupportedGeometry(HazardScanError):
    """Geometry type the centroid calculation cannot handle"""
    def __init__(self, geometry_type, message="Unsupported geometry"):
        self.geometry_type = geometry_type
        super().__init__(f"{message}: {geometry_type}")


class StaleResponse(HazardScanError):
    """A backend answer arrived for a request the session no longer waits on"""
    def __init__(self, generation, current):
        self.generation = generation
        self.current = current
        super().__init__(f"Response for request #{generation} discarded (current: #{current})")


class InvalidStateError(HazardScanError):
    """Operation not permitted in the session's current state"""
    def __init__(self, operation, state):
        self.operation = operation
        self.state = state
        super().__init__(f"Cannot {operation} while session is {state.name}")
