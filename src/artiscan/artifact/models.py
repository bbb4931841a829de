"""Artifact data models — candidate file descriptors and validated artifacts."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class Candidate:
    """A file the user picked, before it has been validated."""

    name: str
    size_bytes: int
    path: Path | None = None
    content: bytes | None = field(default=None, repr=False)

    @classmethod
    def from_path(cls, path: str | Path) -> Candidate:
        """Describe a file on disk without reading it."""
        p = Path(path)
        return cls(name=p.name, size_bytes=p.stat().st_size, path=p)

    @classmethod
    def from_bytes(cls, name: str, content: bytes) -> Candidate:
        return cls(name=name, size_bytes=len(content), content=content)


@dataclass(frozen=True)
class Artifact:
    """A validated executable selected for scanning."""

    name: str
    size_bytes: int
    extension: str
    size_label: str
    path: Path | None = None
    content: bytes | None = field(default=None, repr=False)

    def read_bytes(self) -> bytes:
        """Return the artifact's raw bytes, reading from disk if needed."""
        if self.content is not None:
            return self.content
        if self.path is None:
            raise OSError(f"Artifact {self.name} has no byte source")
        return self.path.read_bytes()
