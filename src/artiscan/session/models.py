"""Session data models — lifecycle states and transition records."""

from __future__ import annotations

import enum
import time
from dataclasses import dataclass, field

from artiscan.errors import ScanFailed
from artiscan.report.models import ScanReport


class SessionState(enum.Enum):
    """Lifecycle state of a scan session."""

    IDLE = "idle"
    SELECTED = "selected"
    SUBMITTING = "submitting"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class LifecycleEvent:
    """A single state transition, as delivered to the presentation layer."""

    state: SessionState
    report: ScanReport | None = None
    error: ScanFailed | None = None
    timestamp: float = field(default_factory=time.time)

    @property
    def payload(self) -> ScanReport | ScanFailed | None:
        return self.report if self.report is not None else self.error
