"""
WCP Audit — Certified-Payroll Compliance Backend (v1.0.0)

Architecture:
  wcpaudit/
  ├── config/       — Constants, feature flags, DBWD rates, scoring tables
  ├── errors/       — ExtractionError / ProviderError / InternalError
  ├── models/       — Immutable value objects (record, finding, decision, health)
  ├── extraction/   — Labeled-field parser: raw WCP text → ExtractedRecord
  ├── rates/        — Read-only DBWD rate table
  ├── validation/   — Rule-based compliance checks (unknown role, overtime, underpay)
  ├── decision/     — Severity precedence + deterministic template explanation
  ├── explanation/  — Explanation providers: template + Claude with fallback
  ├── trace/        — Fixed five-stage audit trace
  ├── health/       — Cycle time, token usage, validation score, confidence
  ├── engine/       — evaluate(): the full pipeline, bulk runs, stats
  ├── db/           — JSON audit log keyed by request id
  └── server.py     — FastAPI routing layer

Each module is self-contained with clear imports and no circular dependencies.
"""
