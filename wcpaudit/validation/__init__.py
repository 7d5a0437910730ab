"""
WCP Audit — Compliance Validation

Deterministic wage-and-hour rules over an ExtractedRecord and a RateTable.
Zero LLM. Rules are evaluated independently, in this order, and never
short-circuit:

  1. UNKNOWN_ROLE — role not present in the rate table
  2. OVERTIME     — hours > 40 (1.5x pay owed on the excess)
  3. UNDERPAY     — role known and wage < base rate (fringe tracked, not enforced)

Thresholds are strict: 40 hours is not overtime, wage == base is not underpay.
For an unknown role the overtime rule still runs; underpay needs a base rate
and is skipped.
"""
from dataclasses import dataclass
from typing import Tuple

from wcpaudit.config import OVERTIME_THRESHOLD_HOURS, OVERTIME_MULTIPLIER
from wcpaudit.models import ExtractedRecord, Finding, FindingKind
from wcpaudit.rates import RateTable


@dataclass(frozen=True)
class ValidationResult:
    findings: Tuple[Finding, ...]

    @property
    def is_valid(self) -> bool:
        return not self.findings

    def to_dict(self) -> dict:
        return {"findings": [f.to_dict() for f in self.findings], "isValid": self.is_valid}


def _hours(v: float) -> str:
    return f"{v:g}"


def _money(v: float) -> str:
    return f"{v:.2f}"


# ============================================================
# RULES
# ============================================================
def _check_unknown_role(record, rate):
    if rate is None:
        return Finding(FindingKind.UNKNOWN_ROLE, f"role '{record.role}' not found in rate table")


def _check_overtime(record, rate):
    if record.hours > OVERTIME_THRESHOLD_HOURS:
        return Finding(FindingKind.OVERTIME,
                       f"{_hours(record.hours)} exceeds {OVERTIME_THRESHOLD_HOURS}; "
                       f"{OVERTIME_MULTIPLIER:g}× pay required for the excess")


def _check_underpay(record, rate):
    if rate is not None and record.wage < rate.base_rate:
        return Finding(FindingKind.UNDERPAY,
                       f"wage {_money(record.wage)} below base rate {_money(rate.base_rate)} "
                       f"(fringe {_money(rate.fringe_rate)} tracked separately)")


RULES = (_check_unknown_role, _check_overtime, _check_underpay)


# ============================================================
# VALIDATOR
# ============================================================
class ComplianceValidator:
    """Applies RULES against an injected, read-only rate table."""

    def __init__(self, rates: RateTable):
        self.rates = rates

    def validate(self, record: ExtractedRecord) -> ValidationResult:
        rate = self.rates.lookup(record.role)
        findings = []
        for rule in RULES:
            finding = rule(record, rate)
            if finding is not None:
                findings.append(finding)
        return ValidationResult(findings=tuple(findings))


def validate(record: ExtractedRecord, rates: RateTable) -> ValidationResult:
    return ComplianceValidator(rates).validate(record)
