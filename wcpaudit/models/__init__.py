"""
WCP Audit — Value Objects

Immutable records passed between pipeline stages. Each exposes to_dict()
returning the camelCase wire shape served by the API layer.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


class Status(str, Enum):
    APPROVED = "Approved"
    REVISE = "Revise"
    REJECT = "Reject"


class FindingKind(str, Enum):
    UNKNOWN_ROLE = "UnknownRole"
    OVERTIME = "Overtime"
    UNDERPAY = "Underpay"
    INVALID_FORMAT = "InvalidFormat"


@dataclass(frozen=True)
class ExtractedRecord:
    role: str
    hours: float
    wage: float

    def to_dict(self) -> dict:
        return {"role": self.role, "hours": self.hours, "wage": self.wage}


@dataclass(frozen=True)
class RateEntry:
    base_rate: float
    fringe_rate: float

    def to_dict(self) -> dict:
        return {"baseRate": self.base_rate, "fringeRate": self.fringe_rate}


@dataclass(frozen=True)
class Finding:
    kind: FindingKind
    detail: str

    def to_dict(self) -> dict:
        return {"type": self.kind.value, "detail": self.detail}


@dataclass(frozen=True)
class HealthMetrics:
    cycle_time_ms: int
    token_usage: int
    validation_score: float
    confidence: float

    def to_dict(self) -> dict:
        return {
            "cycleTimeMs": self.cycle_time_ms,
            "tokenUsage": self.token_usage,
            "validationScore": self.validation_score,
            "confidence": self.confidence,
        }


@dataclass(frozen=True)
class ExplanationResult:
    text: str
    token_usage: int = 0


@dataclass(frozen=True)
class Decision:
    status: Status
    explanation: str
    findings: Tuple[Finding, ...]
    trace: Tuple[str, ...]
    health: HealthMetrics
    record: Optional[ExtractedRecord] = None
    explanation_source: str = field(default="template")

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "explanation": self.explanation,
            "findings": [f.to_dict() for f in self.findings],
            "trace": list(self.trace),
            "health": self.health.to_dict(),
            "extracted": self.record.to_dict() if self.record else None,
            "explanationSource": self.explanation_source,
        }
