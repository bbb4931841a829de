"""artiscan — submit executables to a remote scanning service and view the report."""

__version__ = "0.1.0"
