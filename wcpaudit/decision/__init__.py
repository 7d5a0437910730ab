"""
WCP Audit — Decision Synthesis

Maps findings to Approved / Revise / Reject by fixed severity precedence and
composes the deterministic template explanation.

Precedence (most severe wins):
  - UnknownRole, Underpay or InvalidFormat → Reject
  - Overtime                               → Revise
  - no findings                            → Approved

Status depends only on the set of finding kinds. It never looks at timing,
token usage or explanation text.
"""
from wcpaudit.models import ExtractedRecord, FindingKind, Status
from wcpaudit.rates import RateTable

REJECT_KINDS = frozenset({FindingKind.UNKNOWN_ROLE, FindingKind.UNDERPAY, FindingKind.INVALID_FORMAT})
REVISE_KINDS = frozenset({FindingKind.OVERTIME})

_HEADLINES = {
    Status.APPROVED: "Payroll entry is compliant with the wage determination.",
    Status.REVISE: "Payroll entry needs revision before it can be approved.",
    Status.REJECT: "Payroll entry is rejected for wage-determination violations that must be corrected.",
}


def decide_status(findings) -> Status:
    kinds = {f.kind for f in findings}
    if kinds & REJECT_KINDS:
        return Status.REJECT
    if kinds & REVISE_KINDS:
        return Status.REVISE
    return Status.APPROVED


def build_explanation(record: ExtractedRecord, findings, status: Status, rate=None) -> str:
    """Deterministic explanation citing role, hours, wage and every finding detail."""
    parts = [
        f"Decision: {status.value}. {_HEADLINES[status]}",
        f"Entry: role {record.role}, {record.hours:g} hours at ${record.wage:.2f}/hr.",
    ]
    if rate is not None:
        parts.append(f"DBWD rate for {record.role}: base ${rate.base_rate:.2f}/hr, "
                     f"fringe ${rate.fringe_rate:.2f}/hr.")
    if findings:
        label = "finding" if len(findings) == 1 else "findings"
        parts.append(f"{len(findings)} {label}:")
        parts.extend(f"- {f.kind.value}: {f.detail}" for f in findings)
    else:
        parts.append("No findings: hours are within the 40-hour threshold and the wage meets the base rate.")
    return "\n".join(parts)


def synthesize(record: ExtractedRecord, findings, rates: RateTable):
    """Return (status, template explanation) for an already-validated record."""
    status = decide_status(findings)
    return status, build_explanation(record, findings, status, rates.lookup(record.role))
