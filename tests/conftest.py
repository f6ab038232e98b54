"""Test configuration and fixtures."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from datetime import UTC, datetime, timedelta

import pytest

from workflow_automation.domain.step import Step, StepOrder, StepType
from workflow_automation.domain.workflow import Workflow
from workflow_automation.logging import JsonFormatter
from workflow_automation.persistence.memory import (
    InMemoryUserRepository,
    InMemoryWorkflowRepository,
)

FIXED_TIME = datetime(2025, 1, 1, tzinfo=UTC)

VALID_CONFIGS: dict[StepType, dict[str, object]] = {
    StepType.EMAIL: {"template_id": "welcome"},
    StepType.WAIT: {"duration_hours": 24},
    StepType.WEBHOOK: {"url": "https://example.com/hook"},
    StepType.CONDITION: {},
    StepType.ACTION: {},
}


class FakeClock:
    """Deterministic clock that only moves when told to."""

    def __init__(self, start: datetime = FIXED_TIME) -> None:
        self.now = start
        self.calls = 0

    def __call__(self) -> datetime:
        self.calls += 1
        return self.now

    def advance(self, **delta: float) -> datetime:
        self.now = self.now + timedelta(**delta)
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    """Provide a clock frozen at 2025-01-01T00:00:00Z."""
    return FakeClock()


@pytest.fixture
def workflow(clock: FakeClock) -> Workflow:
    """Provide an empty draft workflow."""
    return Workflow.create("Welcome Flow", "desc", clock=clock)


@pytest.fixture
def make_step(clock: FakeClock) -> Callable[..., Step]:
    """Build a valid step of the given type at the given order."""

    def _make(order: int, step_type: StepType = StepType.EMAIL, name: str | None = None) -> Step:
        return Step.create(
            name or f"{step_type.value}-{order}",
            step_type,
            StepOrder(order),
            dict(VALID_CONFIGS[step_type]),
            clock=clock,
        )

    return _make


@pytest.fixture
def workflow_repository() -> InMemoryWorkflowRepository:
    """Provide an empty in-memory workflow repository."""
    return InMemoryWorkflowRepository()


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    """Provide an empty in-memory user repository."""
    return InMemoryUserRepository()


@pytest.fixture(autouse=True)
def _restore_root_logging() -> Iterator[None]:
    """Drop handlers installed by configure_logging() during a test."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if isinstance(handler.formatter, JsonFormatter):
            root.removeHandler(handler)
    root.setLevel(level)
