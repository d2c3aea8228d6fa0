class RegionsError(Exception):  # noqa: D100
    """Base class for every failure raised by the regions client."""

    def __init__(self, status=None):
        """Initialize exception."""
        super().__init__(status)
        self.status = status


class MalformedRegion(RegionsError):
    """Raised when a single region record cannot be decoded."""


class EmptyDirectory(RegionsError):
    """Raised when the directory answered but yielded no usable region."""


class NetworkUnavailable(RegionsError):
    """Raised when the directory could not be reached at the transport level."""


class DirectoryUnreachable(RegionsError):
    """Raised when the directory answered with a non-2xx status.

    ``status`` holds the HTTP status code.
    """


class PersistenceCorrupted(RegionsError):
    """Raised inside the store when a persisted value cannot be decoded.

    Never escapes the store: the value is treated as absent.
    """


class RefreshAlreadyInProgress(RegionsError):
    """Raised when a non-forced refresh is requested while one is running."""
