"""Domain-specific exceptions for the upload pipeline."""


class UploadError(Exception):
    """Base class for upload-related errors."""


class InvalidFileError(UploadError):
    """Raised when a file object lacks the properties extraction needs."""


class ExifReadError(UploadError):
    """Raised when embedded image metadata cannot be read."""


class EventNotFoundError(UploadError):
    """Raised when an upload targets an unknown access token."""


class PayloadTooLargeError(UploadError):
    """Raised when a streamed upload exceeds the absolute byte cap."""


class UploadReadError(UploadError):
    """Raised when streaming the upload fails."""
