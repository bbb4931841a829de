"""Result normalization — turn whatever the service sent into a ScanReport.

Scanning backends disagree on shape: findings may be grouped by analyzer
(``{"static": {"findings": [...]}, "network": [...]}``), sent as a flat list,
or sent under ``issues`` instead. Counts and scores may be missing. Every
branch here degrades to a default rather than raising, so ``normalize`` is
safe to call on any decoded JSON value.
"""

from __future__ import annotations

import json
import logging
import numbers
from collections.abc import Mapping, Sequence
from typing import Any

from artiscan.report.models import Finding, RiskLevel, ScanReport, Summary

logger = logging.getLogger(__name__)

_RISK_LEVELS = {level.value: level for level in RiskLevel}
_SUMMARY_FIELDS = ("critical", "high", "medium", "total_issues")


def normalize(raw: Any) -> ScanReport:
    """Build a canonical ScanReport from a raw service payload."""
    if not isinstance(raw, Mapping):
        logger.debug("Payload is %s, not a mapping; using defaults", type(raw).__name__)
        raw = {}

    return ScanReport(
        security_score=_score(raw.get("security_score")),
        risk_level=_risk_level(raw.get("risk_level")),
        summary=_summary(raw.get("summary")),
        findings=tuple(_finding(entry) for entry in _collect_findings(raw)),
        recommendations=_recommendations(raw.get("recommendations")),
    )


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _score(value: Any) -> int:
    if _is_number(value) and 0 <= value <= 100:
        return int(round(value))
    return 0


def _risk_level(value: Any) -> RiskLevel:
    # Case-sensitive: "high" is not HIGH
    if isinstance(value, str):
        return _RISK_LEVELS.get(value, RiskLevel.SAFE)
    return RiskLevel.SAFE


def _count(value: Any) -> int:
    if isinstance(value, bool) or not _is_number(value) or value < 0:
        return 0
    if isinstance(value, int):
        return value
    # 2.0 counts as 2
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return 0


def _summary(value: Any) -> Summary:
    if not isinstance(value, Mapping):
        return Summary()
    return Summary(**{name: _count(value.get(name)) for name in _SUMMARY_FIELDS})


def _collect_findings(raw: Mapping[str, Any]) -> list[Any]:
    """Flatten the findings collection; first matching shape wins."""
    findings = raw.get("findings")

    if isinstance(findings, Mapping):
        collected: list[Any] = []
        for group in findings.values():
            if isinstance(group, Mapping) and _is_sequence(group.get("findings")):
                collected.extend(group["findings"])
            elif _is_sequence(group):
                collected.extend(group)
        return collected

    if _is_sequence(findings):
        return list(findings)

    issues = raw.get("issues")
    if _is_sequence(issues):
        return list(issues)

    return []


def _text(value: Any) -> str:
    """Truthy values as text; None and empty values as ""."""
    if value is None or value == "":
        return ""
    return value if isinstance(value, str) else str(value)


def _dump(entry: Any) -> str:
    return json.dumps(entry, default=str)


def _finding(entry: Any) -> Finding:
    if not isinstance(entry, Mapping):
        return Finding(description=_dump(entry))

    description = (
        _text(entry.get("description")) or _text(entry.get("value")) or _dump(entry)
    )
    return Finding(
        category=_text(entry.get("type")) or "ISSUE",
        severity=_text(entry.get("severity")) or "UNKNOWN",
        description=description,
    )


def _recommendations(value: Any) -> tuple[str, ...]:
    if not _is_sequence(value):
        return ()
    return tuple(item if isinstance(item, str) else str(item) for item in value)
