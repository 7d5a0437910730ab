"""
WCP Audit — Field Extraction

Parses a free-text certified-payroll entry into an ExtractedRecord.

  "Role: Electrician, Hours: 45, Wage: $50"  →  ExtractedRecord("Electrician", 45.0, 50.0)

Labels are matched case-insensitively; fields may be separated by any mix of
whitespace, commas, semicolons, pipes or newlines. Extraction is pure: the same
text always yields the same record or the same ExtractionError.

Missing fields are never defaulted. A missing, non-numeric or out-of-range
field raises ExtractionError naming the field and the offending value.
"""
import re

from wcpaudit.config import MIN_HOURS, MAX_HOURS, MIN_WAGE, MAX_WAGE
from wcpaudit.errors import ExtractionError
from wcpaudit.models import ExtractedRecord, Finding, FindingKind

__all__ = ['extract', 'check_format', 'FIELD_PATTERNS', 'FIELD_BOUNDS']

# ============================================================
# PATTERNS
# ============================================================
_TOKEN = r"([^\s,;|]*)"

FIELD_PATTERNS = {
    "role": re.compile(r"\brole\s*:\s*" + _TOKEN, re.IGNORECASE),
    "hours": re.compile(r"\bhours\s*:\s*" + _TOKEN, re.IGNORECASE),
    "wage": re.compile(r"\bwage\s*:\s*\$?\s*" + _TOKEN, re.IGNORECASE),
}

FIELD_BOUNDS = {
    "hours": (MIN_HOURS, MAX_HOURS),
    "wage": (MIN_WAGE, MAX_WAGE),
}

_ROLE_RE = re.compile(r"^[A-Za-z][A-Za-z0-9\-]*$")
# leading plain decimal; trailing punctuation or units ("55.00!", "35.50/hour") are ignored,
# but nan / inf / exponents / "45hrs" are not numbers
_NUMBER_RE = re.compile(r"^([-+]?(?:\d+(?:\.\d+)?|\.\d+))(?![\w.])")


# ============================================================
# FIELD PARSERS
# ============================================================
def _find_token(text: str, field: str) -> str:
    m = FIELD_PATTERNS[field].search(text or "")
    if not m:
        raise ExtractionError(f"Missing field '{field}': no '{field.capitalize()}:' label found", field=field)
    return m.group(1).rstrip(".:")


def _parse_role(text: str) -> str:
    token = _find_token(text, "role")
    if not token:
        raise ExtractionError("Missing value for field 'role'", field="role", value="")
    if not _ROLE_RE.match(token):
        raise ExtractionError(f"Invalid value for field 'role': '{token}'", field="role", value=token)
    return token


def _parse_number(text: str, field: str) -> float:
    token = _find_token(text, field)
    m = _NUMBER_RE.match(token)
    if not m:
        raise ExtractionError(f"Non-numeric value for field '{field}': '{token}'", field=field, value=token)
    number = m.group(1)
    # + 0.0 folds "-0" into 0.0
    value = float(number) + 0.0
    lo, hi = FIELD_BOUNDS[field]
    if value < lo or value > hi:
        raise ExtractionError(
            f"Out-of-range value for field '{field}': {number} (allowed {lo:g}–{hi:g})",
            field=field, value=number)
    return value


# ============================================================
# PUBLIC API
# ============================================================
def extract(text: str) -> ExtractedRecord:
    """Extract role, hours and wage. Raises ExtractionError on the first bad field."""
    if not isinstance(text, str):
        raise ExtractionError("Payroll entry must be text", field="content", value=type(text).__name__)
    role = _parse_role(text)
    hours = _parse_number(text, "hours")
    wage = _parse_number(text, "wage")
    return ExtractedRecord(role=role, hours=hours, wage=wage)


def check_format(text: str) -> list:
    """Non-raising pre-check: one InvalidFormat finding per bad field, role/hours/wage order."""
    findings = []
    for field, parse in (("role", _parse_role),
                         ("hours", lambda t: _parse_number(t, "hours")),
                         ("wage", lambda t: _parse_number(t, "wage"))):
        try:
            parse(text if isinstance(text, str) else "")
        except ExtractionError as e:
            findings.append(Finding(FindingKind.INVALID_FORMAT, e.message))
    return findings
