"""
GallSearch Core Package.

This package contains the faceted search logic, separated from the web
layer. Root lookups, facet filtering, and search state are coordinated
through core modules.

ARCHITECTURE RULES:
- core/ modules may only import from:
  - Python standard library
  - utils/ (database adapters)
  - config (for global configuration)

- core/ modules MUST NOT import from:
  - web/ (no Flask dependencies)
  - flask, werkzeug, or any web-specific packages
"""

__all__ = [
    "catalog_core",
    "errors",
    "facets",
    "records",
    "root_query",
    "search_core",
    "search_session",
    "settings_core",
]
