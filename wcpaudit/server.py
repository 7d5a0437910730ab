"""
WCP Audit — AI-assisted certified-payroll compliance auditor
FastAPI routing layer over the deterministic compliance engine.
"""

import logging
import os
import time
import uuid
from datetime import datetime, timezone

from fastapi import Depends, FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from wcpaudit.config import ALLOWED_ORIGINS, EXPLANATION_MODEL, LOG_LEVEL, USE_REAL_API, VERSION
from wcpaudit.db import get_decision, list_decisions, record_decision
from wcpaudit.engine import ComplianceEngine, get_engine, summarize
from wcpaudit.errors import InternalError, NotFoundError, ValidationError, WCPError
from wcpaudit.extraction import check_format

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

STARTED_AT = time.monotonic()

app = FastAPI(title="WCP Audit", version=VERSION)
app.add_middleware(CORSMiddleware, allow_origins=ALLOWED_ORIGINS, allow_credentials=True,
                   allow_methods=["*"], allow_headers=["*"])


# ============================================================
# ERROR MAPPING
# ============================================================
@app.exception_handler(WCPError)
async def wcp_error_handler(request: Request, exc: WCPError):
    # client faults (4xx) are echoed; anything 5xx gets the generic InternalError body
    safe = exc if exc.status_code < 500 else InternalError()
    return JSONResponse(safe.to_dict(), status_code=safe.status_code)


async def _read_content(request: Request) -> str:
    try:
        body = await request.json()
    except ValueError:
        raise ValidationError("Invalid JSON format")
    content = body.get("content") if isinstance(body, dict) else None
    if not content:
        raise ValidationError("Content is required")
    if not isinstance(content, str):
        raise ValidationError("Content must be a string")
    return content


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


# ============================================================
# HEALTH
# ============================================================
@app.get("/health")
async def health(engine: ComplianceEngine = Depends(get_engine)):
    return {
        "status": "healthy",
        "timestamp": _now(),
        "version": VERSION,
        "uptime": round(time.monotonic() - STARTED_AT, 1),
        "explanation": {
            "provider": engine.provider.name,
            "apiKeyConfigured": USE_REAL_API,
            "model": EXPLANATION_MODEL,
        },
        "roles": engine.rates.roles(),
    }


@app.get("/api/health")
async def api_health(engine: ComplianceEngine = Depends(get_engine)):
    return await health(engine)


# ============================================================
# ANALYZE
# ============================================================
async def _analyze(request: Request, engine: ComplianceEngine):
    content = await _read_content(request)
    decision = await engine.evaluate(content)
    request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
    # file write stays off the event loop
    return await run_in_threadpool(record_decision, decision.to_dict(), request_id, _now())


@app.post("/analyze")
async def analyze(request: Request, engine: ComplianceEngine = Depends(get_engine)):
    return await _analyze(request, engine)


@app.post("/api/analyze")
async def api_analyze(request: Request, engine: ComplianceEngine = Depends(get_engine)):
    return await _analyze(request, engine)


@app.post("/api/analyze/bulk")
async def analyze_bulk(request: Request, engine: ComplianceEngine = Depends(get_engine)):
    try:
        body = await request.json()
    except ValueError:
        raise ValidationError("Invalid JSON format")
    items = body.get("items") if isinstance(body, dict) else None
    if not isinstance(items, list) or not items:
        raise ValidationError("items must be a non-empty list")
    contents = [i.get("content") if isinstance(i, dict) else i for i in items]
    results = await engine.evaluate_bulk(contents)
    for r in results:
        if r["success"]:
            r["data"] = await run_in_threadpool(record_decision, r["data"], str(uuid.uuid4()), _now())
    return {"total": len(results), "succeeded": sum(1 for r in results if r["success"]), "results": results}


@app.post("/api/validate-format")
async def validate_format(request: Request):
    content = await _read_content(request)
    findings = check_format(content)
    return {"valid": not findings, "findings": [f.to_dict() for f in findings]}


# ============================================================
# RATES / AUDIT LOG
# ============================================================
@app.get("/api/rates")
async def get_rates(engine: ComplianceEngine = Depends(get_engine)):
    return engine.rates.to_dict()


@app.get("/api/decisions")
async def get_decisions(limit: int = 50):
    return list_decisions(limit)


@app.get("/api/decisions/{request_id}")
async def get_decision_by_id(request_id: str):
    d = get_decision(request_id)
    if not d:
        raise NotFoundError("Decision not found")
    return d


@app.get("/api/stats")
async def stats():
    return summarize(list_decisions())


if __name__ == "__main__":
    import uvicorn
    port = int(os.environ.get("PORT", 8000))
    logger.info("Starting WCP Audit v%s on port %d", VERSION, port)
    logger.info("Claude API: %s", "Connected" if USE_REAL_API else "Template Mode")
    uvicorn.run(app, host="0.0.0.0", port=port)
