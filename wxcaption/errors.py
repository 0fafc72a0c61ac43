"""Error taxonomy for the caption pipeline.

Only InputError and UpstreamLookupError ever abort a run. Alert and outlook
failures are absorbed where they happen, and cache faults are treated as
misses inside the cache layer.
"""


class WxCaptionError(Exception):
    """Base class for errors surfaced to the caller."""


class InputError(WxCaptionError, ValueError):
    """Raised when the location input cannot be parsed."""


class UpstreamLookupError(WxCaptionError):
    """Raised when a required provider (geocode, point, forecast) fails."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
