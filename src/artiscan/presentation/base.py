"""Presentation adapter protocol — how a UI subscribes to a scan session."""

from __future__ import annotations

from typing import Protocol

from artiscan.artifact.models import Artifact
from artiscan.errors import InvalidArtifactType, ScanFailed
from artiscan.report.models import ScanReport
from artiscan.session.models import SessionState


class PresentationAdapter(Protocol):
    """Receives session events. Never called concurrently."""

    def on_lifecycle_change(
        self,
        state: SessionState,
        payload: ScanReport | ScanFailed | None = None,
    ) -> None:
        """Called once per state transition.

        ``payload`` is the report for COMPLETED, the error for FAILED, and
        None otherwise.
        """
        ...

    def on_artifact_rejected(self, reason: InvalidArtifactType) -> None: ...

    def on_artifact_selected(self, artifact: Artifact) -> None: ...


class NullPresenter:
    """Adapter that ignores every event."""

    def on_lifecycle_change(
        self,
        state: SessionState,
        payload: ScanReport | ScanFailed | None = None,
    ) -> None:
        pass

    def on_artifact_rejected(self, reason: InvalidArtifactType) -> None:
        pass

    def on_artifact_selected(self, artifact: Artifact) -> None:
        pass
