"""
WCP Audit — Configuration & Constants
Environment variables, feature flags, wage-determination defaults and scoring tables.
"""
import os
from pathlib import Path

# ============================================================
# PATHS
# ============================================================
BASE_DIR = Path(__file__).parent.parent.parent
DATA_DIR = Path(os.environ.get("WCP_DATA_DIR", str(BASE_DIR / "data")))
DB_PATH = DATA_DIR / "audit_log.json"

# ============================================================
# FEATURE FLAGS
# ============================================================
PERSIST_DATA = os.environ.get("PERSIST_DATA", "true").lower() == "true"
USE_REAL_API = bool(os.environ.get("ANTHROPIC_API_KEY"))

# auto: Claude when an API key is configured, template otherwise
EXPLANATION_MODE = os.environ.get("EXPLANATION_MODE", "auto").lower()
EXPLANATION_MODES = ("auto", "template", "claude")

# ============================================================
# EXPLANATION AGENT
# ============================================================
EXPLANATION_MODEL = os.environ.get("EXPLANATION_MODEL", "claude-haiku-4-5-20251001")
EXPLANATION_MAX_TOKENS = int(os.environ.get("EXPLANATION_MAX_TOKENS", "600"))
AGENT_MAX_STEPS = int(os.environ.get("AGENT_MAX_STEPS", "3"))
AGENT_TIMEOUT_SECONDS = float(os.environ.get("AGENT_TIMEOUT_SECONDS", "20"))

# ============================================================
# HTTP
# ============================================================
ALLOWED_ORIGINS = [o.strip() for o in os.environ.get("ALLOWED_ORIGINS", "http://localhost:3000").split(",") if o.strip()]
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

# ============================================================
# EXTRACTION BOUNDS
# ============================================================
MIN_HOURS, MAX_HOURS = 0.0, 168.0
MIN_WAGE, MAX_WAGE = 0.0, 1000.0

# ============================================================
# VALIDATION RULES
# ============================================================
OVERTIME_THRESHOLD_HOURS = 40
OVERTIME_MULTIPLIER = 1.5

# ============================================================
# DBWD RATES (Davis-Bacon wage determination, DOL DC sample)
# ============================================================
DBWD_RATES = {
    "Electrician": {"base": 51.69, "fringe": 34.63},
    "Laborer":     {"base": 26.45, "fringe": 12.50},
}

# ============================================================
# HEALTH SCORING
# ============================================================
VALIDATION_SCORE_CLEAN = 1.0
VALIDATION_SCORE_WITH_FINDINGS = 0.8
CONFIDENCE_BY_STATUS = {
    "Approved": 0.95,
    "Revise":   0.85,
    "Reject":   0.90,
}

# ============================================================
# VERSION
# ============================================================
VERSION = "1.0.0"
