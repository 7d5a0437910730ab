"""
WCP Audit — Health Metrics

  cycleTimeMs      monotonic wall time across the whole evaluation
  tokenUsage       LLM tokens spent authoring the explanation (0 for template)
  validationScore  1.0 with no findings, 0.8 otherwise (coarse two-level proxy)
  confidence       fixed per status: Approved 0.95, Revise 0.85, Reject 0.90
"""
from wcpaudit.config import CONFIDENCE_BY_STATUS, VALIDATION_SCORE_CLEAN, VALIDATION_SCORE_WITH_FINDINGS
from wcpaudit.models import HealthMetrics, Status


def compute_health(start: float, end: float, token_usage: int, findings, status: Status) -> HealthMetrics:
    """start/end are time.monotonic() readings in seconds."""
    return HealthMetrics(
        cycle_time_ms=max(0, round((end - start) * 1000)),
        token_usage=int(token_usage or 0),
        validation_score=VALIDATION_SCORE_WITH_FINDINGS if findings else VALIDATION_SCORE_CLEAN,
        confidence=CONFIDENCE_BY_STATUS[Status(status).value],
    )
