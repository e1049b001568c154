"""
GotSport page parsers.

Each module exposes pure ``parse_*`` functions taking raw HTML; fetching lives
in ``base`` and composition in ``group_scraper``. Import from the concrete
modules, e.g.:

    from gotsport_mirror.data_collection.scrapers.schedule_scraper import parse_fixtures
"""

__all__ = []
