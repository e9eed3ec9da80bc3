"""Search error types."""


class SearchError(Exception):
    """Base class for errors raised by the search core."""


class InvalidRootSelector(SearchError):
    """Both or neither of host and genus were supplied for a root search."""


class RootLookupFailure(SearchError):
    """The root candidate lookup failed (database or transport error)."""
