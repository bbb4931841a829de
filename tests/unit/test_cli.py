"""Tests for CLI commands using Click's CliRunner."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

from click.testing import CliRunner

from artiscan.cli import main
from artiscan.errors import TransportError
from artiscan.transport.base import TransportResponse


def test_main_help():
    runner = CliRunner()
    result = runner.invoke(main, ["--help"])
    assert result.exit_code == 0
    assert "artiscan" in result.output
    assert "scan" in result.output
    assert "check" in result.output


def test_main_version():
    runner = CliRunner()
    result = runner.invoke(main, ["--version"])
    assert result.exit_code == 0
    assert "0.1.0" in result.output


def test_scan_help():
    runner = CliRunner()
    result = runner.invoke(main, ["scan", "--help"])
    assert result.exit_code == 0
    assert "FILE" in result.output
    assert "--api-url" in result.output


def test_check_accepts_exe(exe_path: Path):
    runner = CliRunner()
    result = runner.invoke(main, ["check", str(exe_path)])
    assert result.exit_code == 0
    assert "setup.exe" in result.output
    assert "1.5 KB" in result.output
    assert "Ready to scan" in result.output


def test_check_rejects_txt(txt_path: Path):
    runner = CliRunner()
    result = runner.invoke(main, ["check", str(txt_path)])
    assert result.exit_code == 1
    assert "only .exe and .apk" in result.output


def test_scan_renders_report(exe_path: Path, make_transport, round_trip_payload):
    fake = make_transport(TransportResponse(status=200, payload=round_trip_payload))
    runner = CliRunner()
    with patch("artiscan.cli.scan.HttpxTransport", return_value=fake) as transport_cls:
        result = runner.invoke(
            main, ["scan", str(exe_path), "--api-url", "http://scanner.test/api"]
        )

    assert result.exit_code == 0, result.output
    assert "Scan Report" in result.output
    assert "87" in result.output
    assert "fix A" in result.output
    transport_cls.assert_called_once_with(base_url="http://scanner.test/api", timeout=300.0)
    assert fake.calls[0][0] == "/scan/file"


def test_scan_json_output(exe_path: Path, make_transport, round_trip_payload):
    fake = make_transport(TransportResponse(status=200, payload=round_trip_payload))
    runner = CliRunner()
    with patch("artiscan.cli.scan.HttpxTransport", return_value=fake):
        result = runner.invoke(main, ["scan", str(exe_path), "--json"])

    assert result.exit_code == 0, result.output
    data = json.loads(result.output[result.output.index("{") :])
    assert data["security_score"] == 87
    assert data["risk_level"] == "HIGH"
    assert data["findings"] == [{"category": "A", "severity": "HIGH", "description": "d1"}]


def test_scan_rejects_txt(txt_path: Path, make_transport):
    fake = make_transport()
    runner = CliRunner()
    with patch("artiscan.cli.scan.HttpxTransport", return_value=fake):
        result = runner.invoke(main, ["scan", str(txt_path)])

    assert result.exit_code == 1
    assert "only .exe and .apk" in result.output
    assert fake.calls == []


def test_scan_service_failure(apk_path: Path, make_transport):
    fake = make_transport(TransportResponse(status=413, payload={"error": "too large"}))
    runner = CliRunner()
    with patch("artiscan.cli.scan.HttpxTransport", return_value=fake):
        result = runner.invoke(main, ["scan", str(apk_path)])

    assert result.exit_code == 1
    assert "too large" in result.output


def test_scan_transport_failure_hint(apk_path: Path, make_transport):
    fake = make_transport(exc=TransportError("Scan request failed: refused"))
    runner = CliRunner()
    with patch("artiscan.cli.scan.HttpxTransport", return_value=fake):
        result = runner.invoke(main, ["scan", str(apk_path)])

    assert result.exit_code == 1
    assert "backend server is running" in result.output


def test_scan_critical_risk_exits_nonzero(exe_path: Path, make_transport):
    fake = make_transport(
        TransportResponse(status=200, payload={"risk_level": "CRITICAL", "security_score": 5})
    )
    runner = CliRunner()
    with patch("artiscan.cli.scan.HttpxTransport", return_value=fake):
        result = runner.invoke(main, ["scan", str(exe_path)])

    assert result.exit_code == 1
    assert "CRITICAL" in result.output


def test_scan_uses_config_file(exe_path: Path, tmp_path: Path, make_transport):
    config_file = tmp_path / "artiscan.yaml"
    config_file.write_text(
        "api_url: http://from-config/api\nscan_endpoint: /v2/scan\ntimeout: 15\n",
        encoding="utf-8",
    )
    fake = make_transport()
    runner = CliRunner()
    with patch("artiscan.cli.scan.HttpxTransport", return_value=fake) as transport_cls:
        result = runner.invoke(main, ["--config", str(config_file), "scan", str(exe_path)])

    assert result.exit_code == 0, result.output
    transport_cls.assert_called_once_with(base_url="http://from-config/api", timeout=15.0)
    assert fake.calls[0][0] == "/v2/scan"
