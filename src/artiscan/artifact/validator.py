"""Artifact validation — extension allow-list and size labels."""

from __future__ import annotations

import logging

from artiscan.artifact.models import Artifact, Candidate
from artiscan.errors import InvalidArtifactType

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = frozenset({"exe", "apk"})

_SIZE_UNITS = ("B", "KB", "MB", "GB")
_KIB = 1024


def extension_of(name: str) -> str:
    """Lower-cased text after the last dot, or "" if there is none."""
    _, dot, ext = name.rpartition(".")
    return ext.lower() if dot else ""


def format_size(num_bytes: int) -> str:
    """Render a byte count as a human-readable label, e.g. ``1.5 KB``.

    The unit is the largest tier that keeps the scaled value >= 1, capped at
    GB. Values are rounded to two decimals with trailing zeros dropped.
    """
    if num_bytes < 0:
        raise ValueError(f"Byte count must be non-negative, got {num_bytes}")
    if num_bytes == 0:
        return "0 B"

    tier = 0
    while tier < len(_SIZE_UNITS) - 1 and num_bytes >= _KIB ** (tier + 1):
        tier += 1

    value = f"{num_bytes / _KIB**tier:.2f}".rstrip("0").rstrip(".")
    return f"{value} {_SIZE_UNITS[tier]}"


class ArtifactValidator:
    """Gatekeeper between a user's file choice and a scan session."""

    def __init__(self, allowed: frozenset[str] = ALLOWED_EXTENSIONS) -> None:
        self._allowed = allowed

    def validate(self, candidate: Candidate) -> Artifact:
        """Accept ``candidate`` as an Artifact or raise InvalidArtifactType."""
        if candidate.size_bytes < 0:
            raise ValueError(f"Negative file size for {candidate.name}")

        ext = extension_of(candidate.name)
        if ext not in self._allowed:
            logger.debug("Rejected %s: extension %r not allowed", candidate.name, ext)
            # Report the suffix as the user typed it
            raise InvalidArtifactType(candidate.name[len(candidate.name) - len(ext) :])

        return Artifact(
            name=candidate.name,
            size_bytes=candidate.size_bytes,
            extension=ext,
            size_label=format_size(candidate.size_bytes),
            path=candidate.path,
            content=candidate.content,
        )
