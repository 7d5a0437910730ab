"""
Pytest fixtures shared across the WCP audit tests.
"""

import asyncio
from types import SimpleNamespace

import pytest

from wcpaudit.db import init_db
from wcpaudit.engine import ComplianceEngine
from wcpaudit.explanation import TemplateExplanationProvider
from wcpaudit.rates import RateTable, default_rate_table


def wcp(role, hours, wage) -> str:
    """Render a payroll entry the way contractors typically submit it."""
    return f"Role: {role}, Hours: {hours}, Wage: ${wage:.2f}"


class FakeMessages:
    """Stands in for AsyncAnthropic().messages."""

    def __init__(self, replies=("Decision: Approved.",), delay=0.0, error=None,
                 input_tokens=100, output_tokens=20):
        self.replies = list(replies)
        self.delay = delay
        self.error = error
        self.usage = SimpleNamespace(input_tokens=input_tokens, output_tokens=output_tokens)
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(dict(kwargs, messages=list(kwargs["messages"])))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        text = self.replies[min(len(self.calls), len(self.replies)) - 1]
        return SimpleNamespace(content=[SimpleNamespace(type="text", text=text)], usage=self.usage)


class FakeAnthropic:
    def __init__(self, **kwargs):
        self.messages = FakeMessages(**kwargs)


@pytest.fixture
def rates():
    return default_rate_table()


@pytest.fixture
def custom_rates():
    return RateTable.from_mapping({
        "Electrician": {"base": 51.69, "fringe": 34.63},
        "Plumber": {"base": 48.20, "fringe": 28.10},
    })


@pytest.fixture
def engine(rates):
    return ComplianceEngine(rates=rates, provider=TemplateExplanationProvider())


@pytest.fixture
def audit_db(tmp_path):
    path = tmp_path / "audit_log.json"
    init_db(path)
    yield path
    init_db(tmp_path / "unused.json")
