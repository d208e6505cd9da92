"""Exception types for URL shortener."""


class ShortenerError(Exception):
    """Base class for URL shortener errors."""

    status_code = 500


class ValidationError(ShortenerError):
    """Missing or empty required input."""

    status_code = 400


class NotFoundError(ShortenerError):
    """No mapping exists for the requested key."""

    status_code = 404


class StoreError(ShortenerError):
    """The backing store failed, timed out, or was unreachable."""


class StoreConnectionError(StoreError):
    """The store session could not be opened or is not open."""


class StoreReadError(StoreError):
    """A lookup against the store failed."""


class StoreWriteError(StoreError):
    """A write to the store failed."""
