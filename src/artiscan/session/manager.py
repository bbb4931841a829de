"""Scan session — owns the selected artifact and the request lifecycle."""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from collections.abc import Callable, Mapping
from typing import Any

from artiscan.artifact.models import Artifact, Candidate
from artiscan.artifact.validator import ArtifactValidator
from artiscan.config import DEFAULT_SCAN_ENDPOINT
from artiscan.errors import (
    InvalidArtifactType,
    NoArtifactSelected,
    ScanFailed,
    ScanInProgress,
    ServiceError,
    TransportError,
)
from artiscan.presentation.base import NullPresenter, PresentationAdapter
from artiscan.report.models import ScanReport
from artiscan.report.normalizer import normalize
from artiscan.session.models import LifecycleEvent, SessionState
from artiscan.transport.base import MultipartBody, Transport

logger = logging.getLogger(__name__)

UPLOAD_FIELD = "file"
GENERIC_FAILURE = "Scan failed"
HISTORY_LIMIT = 100


class ScanSession:
    """Single-flight state machine: select → submit → completed/failed.

    All mutation goes through select(), remove() and submit(). At most one
    submission is outstanding; submit() checks the SUBMITTING guard before
    its first await, so a second call on the same event loop is rejected
    with ScanInProgress instead of being queued.
    """

    def __init__(
        self,
        transport: Transport,
        endpoint: str = DEFAULT_SCAN_ENDPOINT,
        adapter: PresentationAdapter | None = None,
        validator: ArtifactValidator | None = None,
    ) -> None:
        self._transport = transport
        self._endpoint = endpoint
        self._adapter = adapter or NullPresenter()
        self._validator = validator or ArtifactValidator()
        self._state = SessionState.IDLE
        self._artifact: Artifact | None = None
        self._report: ScanReport | None = None
        self._error: ScanFailed | None = None
        self._history: deque[LifecycleEvent] = deque(maxlen=HISTORY_LIMIT)

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def artifact(self) -> Artifact | None:
        return self._artifact

    @property
    def report(self) -> ScanReport | None:
        return self._report

    @property
    def error(self) -> ScanFailed | None:
        return self._error

    @property
    def history(self) -> list[LifecycleEvent]:
        """The most recent lifecycle events, oldest first."""
        return list(self._history)

    def select(self, candidate: Candidate) -> Artifact:
        """Validate ``candidate`` and make it the current artifact.

        A rejected candidate clears any previous selection and leaves the
        session IDLE; the InvalidArtifactType is re-raised to the caller.
        """
        self._ensure_not_submitting()

        try:
            artifact = self._validator.validate(candidate)
        except InvalidArtifactType as exc:
            self._clear()
            self._notify(self._adapter.on_artifact_rejected, exc)
            if self._state is not SessionState.IDLE:
                self._transition(SessionState.IDLE)
            raise

        self._clear()
        self._artifact = artifact
        logger.debug("Selected %s (%s)", artifact.name, artifact.size_label)
        self._notify(self._adapter.on_artifact_selected, artifact)
        self._transition(SessionState.SELECTED)
        return artifact

    def remove(self) -> None:
        """Drop the current artifact and any report or error."""
        self._ensure_not_submitting()
        if self._state is SessionState.IDLE:
            return
        self._clear()
        self._transition(SessionState.IDLE)

    async def submit(self) -> ScanReport:
        """Upload the selected artifact and wait for the normalized report.

        Raises ServiceError or TransportError after moving to FAILED.
        """
        self._ensure_not_submitting()
        if self._artifact is None:
            raise NoArtifactSelected()

        artifact = self._artifact
        self._report = None
        self._error = None
        self._transition(SessionState.SUBMITTING)

        try:
            content = artifact.read_bytes()
        except OSError as exc:
            error = TransportError(f"Could not read {artifact.name}: {exc}")
            self._fail(error)
            raise error from exc

        body = MultipartBody(
            field_name=UPLOAD_FIELD,
            filename=artifact.name,
            content=content,
        )

        try:
            response = await self._transport.send(self._endpoint, body)
        except asyncio.CancelledError:
            self._fail(TransportError("Scan cancelled"))
            raise
        except TransportError as exc:
            self._fail(exc)
            raise
        except Exception as exc:
            error = TransportError(f"Scan request failed: {exc}")
            self._fail(error)
            raise error from exc

        if not response.ok:
            error = ServiceError(_error_message(response.payload), response.status)
            self._fail(error)
            raise error

        report = normalize(response.payload)
        self._report = report
        logger.info(
            "Scan of %s completed: score %d, risk %s, %d finding(s)",
            artifact.name,
            report.security_score,
            report.risk_level.value,
            len(report.findings),
        )
        self._transition(SessionState.COMPLETED, report=report)
        return report

    def _ensure_not_submitting(self) -> None:
        if self._state is SessionState.SUBMITTING:
            raise ScanInProgress()

    def _clear(self) -> None:
        self._artifact = None
        self._report = None
        self._error = None

    def _fail(self, error: ScanFailed) -> None:
        self._error = error
        logger.warning("Scan failed: %s", error)
        self._transition(SessionState.FAILED, error=error)

    def _transition(
        self,
        state: SessionState,
        report: ScanReport | None = None,
        error: ScanFailed | None = None,
    ) -> None:
        logger.info("Session %s -> %s", self._state.value, state.value)
        self._state = state
        event = LifecycleEvent(state=state, report=report, error=error)
        self._history.append(event)
        self._notify(self._adapter.on_lifecycle_change, state, event.payload)

    def _notify(self, callback: Callable[..., None], *args: Any) -> None:
        # A broken adapter must not strand the session mid-transition
        try:
            callback(*args)
        except Exception:
            logger.exception(
                "Presentation adapter failed in %s",
                getattr(callback, "__name__", callback),
            )


def _error_message(payload: Any) -> str:
    """The service's ``error`` field, or a generic message."""
    if isinstance(payload, Mapping):
        message = payload.get("error")
        if message:
            return message if isinstance(message, str) else str(message)
    return GENERIC_FAILURE
