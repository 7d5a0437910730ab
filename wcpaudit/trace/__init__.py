"""
WCP Audit — Audit Trace

One entry per pipeline stage, always five, always in this order. The trace
records which stages ran, not which rules fired; findings carry that.
"""

AUDIT_STAGES = (
    "Step 1: Extracted role, hours and wage from WCP input",
    "Step 2: Checked role against DBWD rate table",
    "Step 3: Checked wage against DBWD base rate",
    "Step 4: Checked hours against 40-hour overtime threshold",
    "Step 5: Generated compliance decision",
)


def build_trace() -> tuple:
    return AUDIT_STAGES
