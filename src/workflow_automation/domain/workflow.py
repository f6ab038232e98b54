"""The Workflow aggregate root.

A workflow owns an ordered collection of steps and governs its own
lifecycle::

    draft -> active <-> inactive

While a workflow is active only its status may change. Steps are added,
removed and reordered while it is draft or inactive.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import datetime
from enum import Enum
from typing import TypeVar
from uuid import UUID, uuid4

from .clock import Clock
from .errors import (
    CannotModifyActiveWorkflow,
    DuplicateStepId,
    DuplicateStepOrder,
    InvalidWorkflowTransition,
    StepNotFound,
    StepsRequired,
    WorkflowNameEmpty,
)
from .step import Step, StepOrder

T = TypeVar("T")


class WorkflowStatus(str, Enum):
    DRAFT = "draft"
    ACTIVE = "active"
    INACTIVE = "inactive"

    def can_transition_to(self, target: WorkflowStatus) -> bool:
        return target in ALLOWED_TRANSITIONS.get(self, set())


ALLOWED_TRANSITIONS: dict[WorkflowStatus, set[WorkflowStatus]] = {
    WorkflowStatus.DRAFT: {WorkflowStatus.ACTIVE},
    WorkflowStatus.ACTIVE: {WorkflowStatus.INACTIVE},
    WorkflowStatus.INACTIVE: {WorkflowStatus.ACTIVE},
}


def _sorted_by_order(steps: Iterable[Step]) -> list[Step]:
    return sorted(steps, key=lambda s: s.order.value)


def _first_duplicate(values: Iterable[T]) -> T | None:
    seen: set[T] = set()
    for value in values:
        if value in seen:
            return value
        seen.add(value)
    return None


class Workflow:
    """An ordered, lifecycle-governed collection of steps.

    Use :meth:`create` for new workflows. The keyword constructor rebuilds a
    workflow from storage and re-checks its invariants.
    """

    def __init__(
        self,
        *,
        id: UUID,
        name: str,
        description: str,
        status: WorkflowStatus | str,
        created_at: datetime,
        updated_at: datetime,
        steps: Iterable[Step] = (),
    ) -> None:
        if not name:
            raise WorkflowNameEmpty()
        status = WorkflowStatus(status)
        ordered = _sorted_by_order(step.copy() for step in steps)
        duplicate_id = _first_duplicate(s.id for s in ordered)
        if duplicate_id is not None:
            raise DuplicateStepId(f"duplicate step id: {duplicate_id}")
        duplicate = _first_duplicate(s.order.value for s in ordered)
        if duplicate is not None:
            raise DuplicateStepOrder(f"duplicate step order: {duplicate}")
        if status is WorkflowStatus.ACTIVE and not ordered:
            raise StepsRequired()

        self.id = id
        self.name = name
        self.description = description
        self.status = status
        self.created_at = created_at
        self.updated_at = updated_at
        self._steps: list[Step] = ordered

    @classmethod
    def create(cls, name: str, description: str = "", *, clock: Clock) -> Workflow:
        if not name:
            raise WorkflowNameEmpty()
        now = clock()
        return cls(
            id=uuid4(),
            name=name,
            description=description,
            status=WorkflowStatus.DRAFT,
            created_at=now,
            updated_at=now,
        )

    def __repr__(self) -> str:
        return (
            f"Workflow(id={self.id}, name={self.name!r}, status={self.status.value}, "
            f"steps={len(self._steps)})"
        )

    @property
    def steps(self) -> tuple[Step, ...]:
        """Steps in ascending order. Mutate through the workflow, not this tuple."""

        return tuple(self._steps)

    # Attributes

    def update_name(self, name: str, *, clock: Clock) -> None:
        if not name:
            raise WorkflowNameEmpty()
        self._ensure_modifiable()
        self.name = name
        self.updated_at = clock()

    def update_description(self, description: str, *, clock: Clock) -> None:
        self._ensure_modifiable()
        self.description = description
        self.updated_at = clock()

    # Step collection

    def add_step(self, step: Step, *, clock: Clock) -> Step:
        """Add a copy of ``step`` and return that copy.

        The workflow only ever works on its own copy, so the same step object
        can be added to several workflows without them sharing state.
        """

        self._ensure_modifiable()
        if any(existing.id == step.id for existing in self._steps):
            raise DuplicateStepId(f"step {step.id} already belongs to this workflow")
        if self._has_step_with_order(step.order):
            raise DuplicateStepOrder(f"duplicate step order: {step.order.value}")

        owned = step.copy()
        self._steps.append(owned)
        self._sort_steps()
        self.updated_at = clock()
        return owned

    def remove_step(self, step_id: UUID, *, clock: Clock) -> None:
        self._ensure_modifiable()
        for idx, step in enumerate(self._steps):
            if step.id == step_id:
                del self._steps[idx]
                self.updated_at = clock()
                return
        raise StepNotFound(f"step not found: {step_id}")

    def reorder_steps(self, new_orders: Mapping[UUID, StepOrder], *, clock: Clock) -> None:
        """Move several steps at once.

        The resulting set of orders (moved and untouched steps together) must
        stay unique. Nothing is changed unless every check passes.
        """

        self._ensure_modifiable()

        duplicate = _first_duplicate(order.value for order in new_orders.values())
        if duplicate is not None:
            raise DuplicateStepOrder(f"duplicate step order in request: {duplicate}")

        moved = {step_id: self.get_step(step_id) for step_id in new_orders}

        resulting = [
            new_orders[step.id].value if step.id in moved else step.order.value
            for step in self._steps
        ]
        duplicate = _first_duplicate(resulting)
        if duplicate is not None:
            raise DuplicateStepOrder(f"step order {duplicate} is already taken")

        for step_id, step in moved.items():
            step.order = new_orders[step_id]
        self._sort_steps()
        self.updated_at = clock()

    # Queries

    def get_step(self, step_id: UUID) -> Step:
        for step in self._steps:
            if step.id == step_id:
                return step
        raise StepNotFound(f"step not found: {step_id}")

    def get_step_by_order(self, order: StepOrder) -> Step:
        for step in self._steps:
            if step.order.value == order.value:
                return step
        raise StepNotFound(f"no step with order {order.value}")

    def get_first_step(self) -> Step:
        if not self._steps:
            raise StepNotFound("workflow has no steps")
        return self._steps[0]

    def get_next_step(self, current_order: StepOrder) -> Step:
        for step in self._steps:
            if step.order.is_after(current_order):
                return step
        raise StepNotFound(f"no step after order {current_order.value}")

    def has_steps(self) -> bool:
        return bool(self._steps)

    def step_count(self) -> int:
        return len(self._steps)

    def is_draft(self) -> bool:
        return self.status is WorkflowStatus.DRAFT

    def is_active(self) -> bool:
        return self.status is WorkflowStatus.ACTIVE

    def is_inactive(self) -> bool:
        return self.status is WorkflowStatus.INACTIVE

    def can_execute(self) -> bool:
        return self.is_active() and self.has_steps()

    def validate_step_sequence(self) -> None:
        duplicate = _first_duplicate(step.order.value for step in self._steps)
        if duplicate is not None:
            raise DuplicateStepOrder(f"duplicate step order: {duplicate}")

    # Lifecycle

    def activate(self, *, clock: Clock) -> None:
        self._transition(WorkflowStatus.ACTIVE, clock=clock)

    def deactivate(self, *, clock: Clock) -> None:
        self._transition(WorkflowStatus.INACTIVE, clock=clock)

    def reactivate(self, *, clock: Clock) -> None:
        # Only from inactive; activate() also accepts draft.
        if self.status is not WorkflowStatus.INACTIVE:
            raise InvalidWorkflowTransition(
                f"Illegal transition: reactivate from {self.status.value}"
            )
        self._transition(WorkflowStatus.ACTIVE, clock=clock)

    def _transition(self, to: WorkflowStatus, *, clock: Clock) -> None:
        if not self.status.can_transition_to(to):
            raise InvalidWorkflowTransition(
                f"Illegal transition: {self.status.value} -> {to.value}"
            )
        if to is WorkflowStatus.ACTIVE and not self.has_steps():
            raise StepsRequired()
        self.status = to
        self.updated_at = clock()

    # Internals

    def _ensure_modifiable(self) -> None:
        if self.status is WorkflowStatus.ACTIVE:
            raise CannotModifyActiveWorkflow()

    def _has_step_with_order(self, order: StepOrder) -> bool:
        return any(step.order.value == order.value for step in self._steps)

    def _sort_steps(self) -> None:
        self._steps.sort(key=lambda s: s.order.value)
