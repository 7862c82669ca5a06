"""
HazardScan - Airport Hazard Scan Client
Requests wildlife-hazard scans around an airport and keeps the map,
dashboard and ranked list views of the result in step.
"""
