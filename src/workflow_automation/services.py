"""Application services: load an aggregate, mutate it, save it.

The aggregates never log and never touch storage; both happen here.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from uuid import UUID

from workflow_automation.domain.clock import Clock
from workflow_automation.domain.errors import (
    CannotModifyActiveWorkflow,
    EmailAlreadyUsed,
    WorkflowNameAlreadyUsed,
    WorkflowNotFound,
)
from workflow_automation.domain.repository import UserRepository, WorkflowRepository
from workflow_automation.domain.step import ConfigValue, Step, StepConfig, StepOrder, StepType
from workflow_automation.domain.user import User
from workflow_automation.domain.workflow import Workflow

logger = logging.getLogger(__name__)


@dataclass
class RegisterUser:
    repository: UserRepository
    clock: Clock

    def execute(self, *, name: str, email: str) -> User:
        user = User.create(name, email, clock=self.clock)
        if self.repository.exists_by_email(email):
            raise EmailAlreadyUsed(f"email already used: {email}")
        self.repository.save(user)
        logger.info("User registered", extra={"user_id": str(user.id)})
        return user


class WorkflowService:
    """High-level workflow authoring operations over a repository."""

    def __init__(self, repository: WorkflowRepository, clock: Clock) -> None:
        self.repository = repository
        self.clock = clock

    def create_workflow(self, *, name: str, description: str = "") -> Workflow:
        workflow = Workflow.create(name, description, clock=self.clock)
        if self.repository.exists_by_name(name):
            raise WorkflowNameAlreadyUsed(f"workflow name already used: {name!r}")
        self.repository.save(workflow)
        logger.info(
            "Workflow created", extra={"workflow_id": str(workflow.id), "workflow_name": name}
        )
        return workflow

    def get_workflow(self, workflow_id: UUID) -> Workflow:
        workflow = self.repository.find_by_id(workflow_id)
        if workflow is None:
            raise WorkflowNotFound(f"workflow not found: {workflow_id}")
        return workflow

    def list_workflows(self, *, active_only: bool = False) -> list[Workflow]:
        if active_only:
            return self.repository.find_active_workflows()
        return self.repository.find_all()

    def rename_workflow(self, workflow_id: UUID, *, name: str) -> Workflow:
        workflow = self.get_workflow(workflow_id)
        if name != workflow.name and self.repository.exists_by_name(name):
            raise WorkflowNameAlreadyUsed(f"workflow name already used: {name!r}")
        workflow.update_name(name, clock=self.clock)
        return self._save(workflow, "Workflow renamed")

    def describe_workflow(self, workflow_id: UUID, *, description: str) -> Workflow:
        workflow = self.get_workflow(workflow_id)
        workflow.update_description(description, clock=self.clock)
        return self._save(workflow, "Workflow description updated")

    def add_step(
        self,
        workflow_id: UUID,
        *,
        name: str,
        step_type: StepType | str,
        order: int,
        config: Mapping[str, ConfigValue] | None = None,
        description: str = "",
    ) -> Step:
        workflow = self.get_workflow(workflow_id)
        step = Step.create(
            name, step_type, StepOrder(order), config, description, clock=self.clock
        )
        owned = workflow.add_step(step, clock=self.clock)
        self._save(workflow, "Step added", step_id=str(owned.id))
        return owned

    def remove_step(self, workflow_id: UUID, step_id: UUID) -> Workflow:
        workflow = self.get_workflow(workflow_id)
        workflow.remove_step(step_id, clock=self.clock)
        return self._save(workflow, "Step removed", step_id=str(step_id))

    def update_step_config(
        self, workflow_id: UUID, step_id: UUID, *, config: Mapping[str, ConfigValue]
    ) -> Step:
        workflow = self.get_workflow(workflow_id)
        if workflow.is_active():
            raise CannotModifyActiveWorkflow()
        step = workflow.get_step(step_id)
        step.update_config(StepConfig(config), clock=self.clock)
        workflow.updated_at = step.updated_at
        self._save(workflow, "Step config updated", step_id=str(step_id))
        return step

    def reorder_steps(self, workflow_id: UUID, new_orders: Mapping[UUID, int]) -> Workflow:
        workflow = self.get_workflow(workflow_id)
        orders = {step_id: StepOrder(value) for step_id, value in new_orders.items()}
        workflow.reorder_steps(orders, clock=self.clock)
        return self._save(workflow, "Steps reordered", moved=len(orders))

    def activate(self, workflow_id: UUID) -> Workflow:
        workflow = self.get_workflow(workflow_id)
        workflow.activate(clock=self.clock)
        return self._save(workflow, "Workflow activated")

    def deactivate(self, workflow_id: UUID) -> Workflow:
        workflow = self.get_workflow(workflow_id)
        workflow.deactivate(clock=self.clock)
        return self._save(workflow, "Workflow deactivated")

    def reactivate(self, workflow_id: UUID) -> Workflow:
        workflow = self.get_workflow(workflow_id)
        workflow.reactivate(clock=self.clock)
        return self._save(workflow, "Workflow reactivated")

    def delete_workflow(self, workflow_id: UUID) -> None:
        try:
            self.repository.delete(workflow_id)
        except KeyError:
            raise WorkflowNotFound(f"workflow not found: {workflow_id}") from None
        logger.info("Workflow deleted", extra={"workflow_id": str(workflow_id)})

    def _save(self, workflow: Workflow, message: str, **extra: object) -> Workflow:
        self.repository.save(workflow)
        logger.info(
            message,
            extra={"workflow_id": str(workflow.id), "status": workflow.status.value, **extra},
        )
        return workflow
