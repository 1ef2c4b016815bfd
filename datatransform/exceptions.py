"""Exceptions raised by ingestion and batch transform."""

from typing import Optional


class DataTransformError(Exception):
    """Base class of every error raised by this package."""
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


# ====================== Ingestion (per file, non-fatal to a batch) ======================

class IngestionError(DataTransformError):
    """A single file could not be ingested. Other files are unaffected."""
    def __init__(self, file_name: str, message: str):
        self.file_name = file_name
        super().__init__(f"{message}: {file_name}")


class MalformedInput(IngestionError):
    """The file parsed, but its top level is not an array of records."""
    def __init__(self, file_name: str, reason: str = "JSON file must contain an array of records"):
        self.reason = reason
        super().__init__(file_name, reason)


class UnsupportedFormat(IngestionError):
    """Extension (or requested output format) is neither json nor csv."""
    def __init__(self, file_name: str, message: str = "Unsupported file format, expected .json or .csv"):
        super().__init__(file_name, message)


class ReadFailure(IngestionError):
    """The underlying byte read failed."""
    def __init__(self, file_name: str, cause: Optional[BaseException] = None):
        self.cause = cause
        message = "Failed to read file"
        if cause is not None:
            message = f"{message} ({cause})"
        super().__init__(file_name, message)


# ====================== Transform (whole batch) ======================

class TransformError(DataTransformError):
    """Base class for failures of a batch transform."""


class NoInputSelected(TransformError):
    def __init__(self, message: str = "No files selected for transform"):
        super().__init__(message)


class UnsupportedOutputFormat(TransformError):
    """Requested output format is neither json nor csv."""
    def __init__(self, requested: str):
        self.requested = requested
        super().__init__(f"Unsupported output format, expected json or csv: {requested}")


class TransformFailed(TransformError):
    """A file inside the batch failed; the whole batch is discarded."""
    def __init__(self, file_name: str, cause: Optional[BaseException] = None):
        self.file_name = file_name
        self.cause = cause
        message = f"Transform failed on {file_name}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


INGESTION_EXCEPTIONS = (
    MalformedInput,
    UnsupportedFormat,
    ReadFailure,
)

TRANSFORM_EXCEPTIONS = (
    NoInputSelected,
    UnsupportedOutputFormat,
    TransformFailed,
)

__all__ = [
    "DataTransformError",
    "IngestionError",
    "TransformError",
    "INGESTION_EXCEPTIONS",
    "TRANSFORM_EXCEPTIONS",
] + [e.__name__ for e in INGESTION_EXCEPTIONS + TRANSFORM_EXCEPTIONS]
