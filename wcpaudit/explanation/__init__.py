"""
WCP Audit — Explanation Providers

One capability, two implementations:
  TemplateExplanationProvider  deterministic, always available, 0 tokens
  ClaudeExplanationProvider    Claude-authored prose, bounded by steps + timeout

Both receive an already-fixed status and findings. Neither can change them:
the provider only returns text and a token count. Any Claude failure surfaces
as ProviderError, which the engine turns into a template fallback.
"""
import asyncio
import logging
import re

import anthropic

from wcpaudit.config import (
    USE_REAL_API, EXPLANATION_MODE, EXPLANATION_MODES, EXPLANATION_MODEL,
    EXPLANATION_MAX_TOKENS, AGENT_MAX_STEPS, AGENT_TIMEOUT_SECONDS,
)
from wcpaudit.decision import build_explanation
from wcpaudit.errors import ProviderError
from wcpaudit.models import ExplanationResult, FindingKind, Status

logger = logging.getLogger(__name__)

__all__ = [
    'ExplanationProvider', 'TemplateExplanationProvider', 'ClaudeExplanationProvider',
    'build_provider', 'check_reply', 'EXPLANATION_PROMPT',
]

# ============================================================
# PROMPTS
# ============================================================
EXPLANATION_PROMPT = """You are a compliance auditor for Weekly Certified Payrolls (WCPs) under Davis-Bacon wage determinations (DBWD).

The compliance decision below is FINAL. It was produced by deterministic rules.
Do not change the status. Do not add, drop or reinterpret findings. Do not recompute rates.

ENTRY:
Role: {role}
Hours: {hours}
Wage: ${wage}/hr

DBWD RATE:
{rate_line}

STATUS: {status}

FINDINGS:
{findings}

Write a short plain-text explanation (3-6 sentences) for a payroll reviewer.
Name the status exactly as "{status}", cite the role, hours and wage, and cite the detail of every finding.
Do not use the other status words ({other_statuses}).
No markdown, no JSON."""

CORRECTION_PROMPT = """Your explanation does not fit the fixed decision:
{problems}
Rewrite it so it names the status exactly as "{status}" and cites every finding. The status and findings cannot change."""

# any inflection of a status word counts as naming that status
STATUS_WORDS = {
    Status.APPROVED: re.compile(r"\bapprov(?:e|ed|al)\b", re.IGNORECASE),
    Status.REVISE: re.compile(r"\brevis(?:e|ed|ion)\b", re.IGNORECASE),
    Status.REJECT: re.compile(r"\breject(?:ed|ion)?\b", re.IGNORECASE),
}

FINDING_MENTIONS = {
    FindingKind.UNKNOWN_ROLE: re.compile(r"\bunknown\s*role\b|not found in (?:the )?rate table", re.IGNORECASE),
    FindingKind.OVERTIME: re.compile(r"\bover\s*-?\s*time\b", re.IGNORECASE),
    FindingKind.UNDERPAY: re.compile(r"\bunder\s*-?\s*pa(?:y|id|yment)\b", re.IGNORECASE),
    FindingKind.INVALID_FORMAT: re.compile(r"\binvalid\s*format\b", re.IGNORECASE),
}


def check_reply(text: str, status: Status, findings) -> list:
    """Problems that keep a model reply from standing as the explanation; empty means accepted."""
    if not text:
        return ["the reply was empty"]
    problems = []
    if not re.search(rf"\b{re.escape(status.value)}\b", text):
        problems.append(f'the status "{status.value}" is not stated')
    for other, pattern in STATUS_WORDS.items():
        if other is not status and pattern.search(text):
            problems.append(f'it names another status ("{other.value}")')
    for f in findings:
        if f.detail not in text and not FINDING_MENTIONS[f.kind].search(text):
            problems.append(f"the {f.kind.value} finding is not cited")
    return problems


class ExplanationProvider:
    """Interface: author(record, findings, status, rate=None) -> ExplanationResult."""
    name = "base"

    async def author(self, record, findings, status: Status, rate=None) -> ExplanationResult:
        raise NotImplementedError


# ============================================================
# TEMPLATE
# ============================================================
class TemplateExplanationProvider(ExplanationProvider):
    name = "template"

    async def author(self, record, findings, status: Status, rate=None) -> ExplanationResult:
        return ExplanationResult(text=build_explanation(record, findings, status, rate), token_usage=0)


# ============================================================
# CLAUDE
# ============================================================
def _message_text(msg) -> str:
    blocks = getattr(msg, "content", None) or []
    return "".join(getattr(b, "text", "") or "" for b in blocks).strip()


def _message_tokens(msg) -> int:
    usage = getattr(msg, "usage", None)
    if usage is None:
        return 0
    return int(getattr(usage, "input_tokens", 0) or 0) + int(getattr(usage, "output_tokens", 0) or 0)


class ClaudeExplanationProvider(ExplanationProvider):
    """Claude-authored explanation. Each step is one Messages API turn."""
    name = "claude"

    def __init__(self, client=None, model: str = EXPLANATION_MODEL,
                 max_steps: int = AGENT_MAX_STEPS, timeout: float = AGENT_TIMEOUT_SECONDS,
                 max_tokens: int = EXPLANATION_MAX_TOKENS):
        self._client = client
        self.model = model
        self.max_steps = max(1, int(max_steps))
        self.timeout = timeout
        self.max_tokens = max_tokens

    @property
    def client(self):
        if self._client is None:
            self._client = anthropic.AsyncAnthropic()
        return self._client

    def build_prompt(self, record, findings, status: Status, rate=None) -> str:
        if rate is not None:
            rate_line = f"base ${rate.base_rate:.2f}/hr, fringe ${rate.fringe_rate:.2f}/hr (fringe tracked separately)"
        else:
            rate_line = f"No DBWD rate on file for role '{record.role}'"
        finding_lines = "\n".join(f"- {f.kind.value}: {f.detail}" for f in findings) or "None"
        return EXPLANATION_PROMPT.format(role=record.role, hours=f"{record.hours:g}", wage=f"{record.wage:.2f}",
                                         rate_line=rate_line, status=status.value, findings=finding_lines,
                                         other_statuses=", ".join(s.value for s in Status if s is not status))

    async def _converse(self, prompt: str, status: Status, findings) -> ExplanationResult:
        messages = [{"role": "user", "content": prompt}]
        tokens = 0
        for step in range(1, self.max_steps + 1):
            msg = await self.client.messages.create(model=self.model, max_tokens=self.max_tokens, messages=messages)
            tokens += _message_tokens(msg)
            text = _message_text(msg)
            problems = check_reply(text, status, findings)
            if not problems:
                logger.info("[Explain:Claude] step %d/%d accepted (%d tokens)", step, self.max_steps, tokens)
                return ExplanationResult(text=text, token_usage=tokens)
            logger.info("[Explain:Claude] step %d/%d rejected: %s", step, self.max_steps, "; ".join(problems))
            messages.append({"role": "assistant", "content": text or "(no explanation)"})
            messages.append({"role": "user", "content": CORRECTION_PROMPT.format(
                status=status.value, problems="\n".join(f"- {p}" for p in problems))})
        raise ProviderError(f"No acceptable explanation within {self.max_steps} steps", provider=self.name)

    async def author(self, record, findings, status: Status, rate=None) -> ExplanationResult:
        prompt = self.build_prompt(record, findings, status, rate)
        try:
            return await asyncio.wait_for(self._converse(prompt, status, findings), timeout=self.timeout)
        except ProviderError:
            raise
        except asyncio.TimeoutError as e:
            raise ProviderError(f"Explanation timed out after {self.timeout:g}s", provider=self.name) from e
        except Exception as e:
            raise ProviderError(f"{type(e).__name__}: {e}", provider=self.name) from e


# ============================================================
# FACTORY
# ============================================================
def build_provider(mode: str = EXPLANATION_MODE) -> ExplanationProvider:
    mode = (mode or "auto").lower()
    if mode not in EXPLANATION_MODES:
        logger.warning("[Explain] Unknown EXPLANATION_MODE '%s', using 'auto'", mode)
        mode = "auto"
    if mode == "claude" or (mode == "auto" and USE_REAL_API):
        return ClaudeExplanationProvider()
    return TemplateExplanationProvider()
