"""
Error kinds raised by the fire data pipeline.

ConfigurationError and InvalidArgument are raised before any network I/O.
ParseDegraded never leaves the parser; it is logged and turned into an
empty result.
"""


class FireDataError(Exception):
    """Base class for pipeline errors."""


class ConfigurationError(FireDataError):
    """A required setting (e.g. the FIRMS map key) is missing."""


class InvalidArgument(FireDataError):
    """Radius, day window, dataset or coordinates out of accepted range."""


class UpstreamUnavailable(FireDataError):
    """Network failure, timeout or non-2xx status from an upstream API."""


class LocationNotFound(FireDataError):
    """The geocoder has no coordinates for the requested postal code."""


class ParseDegraded(FireDataError):
    """Feed body could not be read as FIRMS CSV."""
