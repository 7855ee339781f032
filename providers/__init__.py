"""
providers/ - External Data Layer
================================
Async clients for the external catalogs. Each provider fetches raw data
and normalizes it into domain models; network and parse failures are
logged here and reported as "no data".
"""
