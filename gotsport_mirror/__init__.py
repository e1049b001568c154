"""
GotSport Mirror
Scraping, parsing and caching of a single club's GotSport standings, results and fixtures
"""

__version__ = "1.0.0"
__author__ = "St Albans City Girls Academy"

# NOTE:
# Avoid importing heavy modules (like configuration) at package import time to
# keep "import gotsport_mirror" lightweight and side-effect free, particularly
# for unit tests that only need the parsers.

__all__ = []
