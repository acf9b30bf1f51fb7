"""
Errors raised while preparing a document for the viewer.

Every error carries the message shown to the user in the viewer's error area.
"""


class ViewerError(Exception):
    """Base class of the recoverable viewer errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class EmptyReference(ViewerError):
    """The record has no PDF attached."""


class FileNotFound(ViewerError):
    """The stored path did not resolve to a file, not even by fallback search."""


class OpenFailure(ViewerError):
    """A located file could not be opened or decoded as a PDF."""


class RenderFailure(ViewerError):
    """A page could not be rasterised."""


class RecordNotFound(ViewerError):
    """No record with the requested id exists in the database."""


class UploadError(Exception):
    """An uploaded file could not be validated or copied to its folder."""
