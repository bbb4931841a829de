"""Shared test fixtures."""

from __future__ import annotations

import asyncio
import copy
from pathlib import Path

import pytest

from artiscan.transport.base import MultipartBody, TransportResponse

ROUND_TRIP_PAYLOAD = {
    "security_score": 87,
    "risk_level": "HIGH",
    "summary": {"critical": 0, "high": 2, "medium": 1, "total_issues": 3},
    "findings": {
        "static": {
            "findings": [{"type": "A", "severity": "HIGH", "description": "d1"}],
        },
    },
    "recommendations": ["fix A"],
}


class FakeTransport:
    """Transport double that records calls and returns a canned result.

    If ``gate`` is set, send() waits on it before resolving, which lets a
    test observe the session while a request is in flight.
    """

    def __init__(
        self,
        response: TransportResponse | None = None,
        exc: BaseException | None = None,
        gate: asyncio.Event | None = None,
    ) -> None:
        self.response = response or TransportResponse(status=200, payload={})
        self.exc = exc
        self.gate = gate
        self.calls: list[tuple[str, MultipartBody]] = []

    async def send(self, endpoint: str, body: MultipartBody) -> TransportResponse:
        self.calls.append((endpoint, body))
        if self.gate is not None:
            await self.gate.wait()
        if self.exc is not None:
            raise self.exc
        return self.response


class RecordingAdapter:
    """Presentation adapter that keeps every callback it receives."""

    def __init__(self) -> None:
        self.lifecycle: list[tuple[object, object]] = []
        self.rejected: list[object] = []
        self.selected: list[object] = []

    def on_lifecycle_change(self, state, payload=None) -> None:
        self.lifecycle.append((state, payload))

    def on_artifact_rejected(self, reason) -> None:
        self.rejected.append(reason)

    def on_artifact_selected(self, artifact) -> None:
        self.selected.append(artifact)


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep the user's config file and ARTISCAN_* variables out of tests."""
    config_home = tmp_path / "xdg-config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    monkeypatch.delenv("ARTISCAN_API_URL", raising=False)
    monkeypatch.delenv("ARTISCAN_TIMEOUT", raising=False)
    return config_home


@pytest.fixture
def exe_path(tmp_path: Path) -> Path:
    path = tmp_path / "setup.exe"
    path.write_bytes(b"MZ" + b"\x00" * 1534)
    return path


@pytest.fixture
def apk_path(tmp_path: Path) -> Path:
    path = tmp_path / "app.apk"
    path.write_bytes(b"PK\x03\x04" + b"\x00" * 60)
    return path


@pytest.fixture
def txt_path(tmp_path: Path) -> Path:
    path = tmp_path / "notes.txt"
    path.write_text("hello", encoding="utf-8")
    return path


@pytest.fixture
def adapter() -> RecordingAdapter:
    return RecordingAdapter()


@pytest.fixture
def make_transport() -> type[FakeTransport]:
    return FakeTransport


@pytest.fixture
def round_trip_payload() -> dict:
    return copy.deepcopy(ROUND_TRIP_PAYLOAD)
