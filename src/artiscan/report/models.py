"""Report data models — the canonical, shape-stable scan report."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any


class RiskLevel(enum.Enum):
    """Overall risk tier assigned by the scanning service."""

    SAFE = "SAFE"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


@dataclass(frozen=True)
class Finding:
    """One issue reported by the scanning service."""

    category: str = "ISSUE"
    severity: str = "UNKNOWN"
    description: str = ""


@dataclass(frozen=True)
class Summary:
    """Issue counts by severity."""

    critical: int = 0
    high: int = 0
    medium: int = 0
    total_issues: int = 0


@dataclass(frozen=True)
class ScanReport:
    """Normalized result of one completed scan."""

    security_score: int = 0
    risk_level: RiskLevel = RiskLevel.SAFE
    summary: Summary = field(default_factory=Summary)
    findings: tuple[Finding, ...] = ()
    recommendations: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "security_score": self.security_score,
            "risk_level": self.risk_level.value,
            "summary": {
                "critical": self.summary.critical,
                "high": self.summary.high,
                "medium": self.summary.medium,
                "total_issues": self.summary.total_issues,
            },
            "findings": [
                {
                    "category": f.category,
                    "severity": f.severity,
                    "description": f.description,
                }
                for f in self.findings
            ],
            "recommendations": list(self.recommendations),
        }
