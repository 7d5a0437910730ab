"""
WCP Audit — Audit Log Store
Append-only JSON log of issued decisions, keyed by request id and timestamp.

The log is read from disk once per init_db() and kept in memory; every append
rewrites the file when PERSIST_DATA is on. Listing is newest first.
"""
import json
import logging
import threading
from pathlib import Path

from wcpaudit.config import DB_PATH, PERSIST_DATA

logger = logging.getLogger(__name__)

__all__ = ['init_db', 'record_decision', 'get_decision', 'list_decisions', 'reset_db', 'AuditLog']


class AuditLog:
    """In-memory list of decision entries mirrored to a JSON file."""

    def __init__(self, path, persist: bool = PERSIST_DATA):
        self.path = Path(path)
        self.persist = persist
        self.entries = self._read()

    def _read(self) -> list:
        if not self.path.exists():
            return []
        try:
            data = json.loads(self.path.read_text())
        except (ValueError, OSError) as e:
            logger.warning("[DB] Could not read %s (%s), starting empty", self.path, e)
            return []
        entries = data.get("decisions") if isinstance(data, dict) else None
        return entries if isinstance(entries, list) else []

    def flush(self):
        if not self.persist:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({"decisions": self.entries}, indent=2, default=str))

    def append(self, entry: dict):
        self.entries.append(entry)
        self.flush()

    def clear(self):
        self.entries = []
        self.flush()


_log = None
_lock = threading.Lock()


def _current() -> AuditLog:
    global _log
    if _log is None:
        _log = AuditLog(DB_PATH)
    return _log


# ============================================================
# PUBLIC API
# ============================================================
def init_db(path=None) -> AuditLog:
    """Point the store at a file (defaults to config DB_PATH) and reload it."""
    global _log
    with _lock:
        _log = AuditLog(path or DB_PATH)
        return _log


def record_decision(decision: dict, request_id: str, timestamp: str) -> dict:
    entry = {"requestId": request_id, "timestamp": timestamp, **decision}
    with _lock:
        _current().append(entry)
    return entry


def get_decision(request_id: str):
    with _lock:
        return next((d for d in _current().entries if d.get("requestId") == request_id), None)


def list_decisions(limit: int = None) -> list:
    """Most recent first. limit=None returns every entry; limit=0 returns none."""
    with _lock:
        rows = _current().entries[::-1]
    if limit is None:
        return rows
    return rows[:max(0, limit)]


def reset_db():
    with _lock:
        _current().clear()
    logger.info("[DB] Audit log reset")
