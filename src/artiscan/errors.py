"""Error taxonomy for artifact selection and scan submission."""

from __future__ import annotations


class ArtiscanError(Exception):
    """Base class for all artiscan errors."""


class InvalidArtifactType(ArtiscanError):
    """The selected file's extension is not in the allow-list."""

    def __init__(self, extension: str) -> None:
        self.extension = extension
        shown = f".{extension}" if extension else "(no extension)"
        super().__init__(
            f"Unsupported file type {shown}: only .exe and .apk files are supported"
        )


class NoArtifactSelected(ArtiscanError):
    """submit() was called before a file was selected."""

    def __init__(self) -> None:
        super().__init__("Please select a file first")


class ScanInProgress(ArtiscanError):
    """A scan is already in flight for this session."""

    def __init__(self) -> None:
        super().__init__("A scan is already in progress")


class ScanFailed(ArtiscanError):
    """A submitted scan did not produce a report."""


class ServiceError(ScanFailed):
    """The scanning service answered with a non-success status."""

    def __init__(self, message: str, status: int | None = None) -> None:
        self.message = message
        self.status = status
        super().__init__(message)


class TransportError(ScanFailed):
    """The exchange with the scanning service did not complete."""
