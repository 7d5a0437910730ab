"""
WCP Audit — Compliance Decision Engine

evaluate(text) runs the full pipeline:

  extract → validate (rate table) → decide status → explain → trace → health

Status and findings come only from the validator and the status precedence.
The explanation provider runs after both are fixed; if it fails, the template
explanation is used and the evaluation still succeeds.

Failure semantics:
  ExtractionError  propagates unchanged (client fault, never "Approved")
  ProviderError    absorbed, template fallback
  anything else    wrapped in InternalError, original chained for server logs
"""
import asyncio
import logging
import time

from wcpaudit.decision import decide_status
from wcpaudit.errors import ExtractionError, InternalError, ProviderError, WCPError
from wcpaudit.explanation import ExplanationProvider, TemplateExplanationProvider, build_provider
from wcpaudit.extraction import extract
from wcpaudit.health import compute_health
from wcpaudit.models import Decision, Status
from wcpaudit.rates import RateTable, default_rate_table
from wcpaudit.trace import build_trace
from wcpaudit.validation import ComplianceValidator

logger = logging.getLogger(__name__)


class ComplianceEngine:
    def __init__(self, rates: RateTable = None, provider: ExplanationProvider = None):
        self.rates = rates if rates is not None else default_rate_table()
        self.validator = ComplianceValidator(self.rates)
        self.provider = provider if provider is not None else TemplateExplanationProvider()
        self._template = TemplateExplanationProvider()

    async def _explain(self, record, findings, status, rate):
        """Returns (text, token_usage, source)."""
        if not isinstance(self.provider, TemplateExplanationProvider):
            try:
                result = await self.provider.author(record, findings, status, rate)
                return result.text, result.token_usage, self.provider.name
            except ProviderError as e:
                logger.warning("[Engine] Explanation provider '%s' failed, using template: %s",
                               self.provider.name, e.message)
            except Exception:
                logger.exception("[Engine] Explanation provider '%s' raised unexpectedly, using template",
                                 self.provider.name)
        result = await self._template.author(record, findings, status, rate)
        return result.text, result.token_usage, self._template.name

    async def evaluate(self, text: str) -> Decision:
        start = time.monotonic()
        try:
            record = extract(text)
            findings = self.validator.validate(record).findings
            status = decide_status(findings)
            explanation, tokens, source = await self._explain(
                record, findings, status, self.rates.lookup(record.role))
            trace = build_trace()
        except ExtractionError as e:
            logger.info("[Engine] Extraction failed: %s", e.message)
            raise
        except Exception as e:
            logger.exception("[Engine] Unexpected failure during evaluation")
            raise InternalError() from e

        health = compute_health(start, time.monotonic(), tokens, findings, status)
        logger.info("[Engine] %s role=%s hours=%g wage=%.2f findings=%d source=%s in %dms",
                    status.value, record.role, record.hours, record.wage,
                    len(findings), source, health.cycle_time_ms)
        return Decision(status=status, explanation=explanation, findings=findings, trace=trace,
                        health=health, record=record, explanation_source=source)

    async def _evaluate_item(self, text) -> dict:
        try:
            decision = await self.evaluate(text)
            return {"success": True, "content": text, "data": decision.to_dict()}
        except WCPError as e:
            return {"success": False, "content": text, "error": e.to_dict()["error"]}

    async def evaluate_bulk(self, texts) -> list:
        """Evaluate entries concurrently. One bad entry never aborts the batch."""
        logger.info("[Engine] Bulk evaluation of %d entries", len(texts))
        results = await asyncio.gather(*(self._evaluate_item(t) for t in texts))
        logger.info("[Engine] Bulk evaluation done: %d/%d succeeded",
                    sum(1 for r in results if r["success"]), len(results))
        return list(results)


def summarize(decisions) -> dict:
    """Aggregate counts and averages over Decision objects or their dicts."""
    rows = [d.to_dict() if isinstance(d, Decision) else d for d in decisions]
    total = len(rows)
    counts = {s: sum(1 for r in rows if r.get("status") == s.value) for s in Status}
    health = [r.get("health") or {} for r in rows]
    return {
        "total": total,
        "approved": counts[Status.APPROVED],
        "revise": counts[Status.REVISE],
        "reject": counts[Status.REJECT],
        "avgConfidence": round(sum(h.get("confidence", 0) for h in health) / total, 4) if total else 0,
        "avgCycleTimeMs": round(sum(h.get("cycleTimeMs", 0) for h in health) / total, 2) if total else 0,
    }


_engine = None


def get_engine() -> ComplianceEngine:
    """Process-wide engine: default DBWD rates, provider chosen from config."""
    global _engine
    if _engine is None:
        _engine = ComplianceEngine(provider=build_provider())
        logger.info("[Engine] Initialized with %d roles, explanation provider '%s'",
                    len(_engine.rates), _engine.provider.name)
    return _engine
