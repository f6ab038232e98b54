"""Pydantic records: the persisted shape of the aggregates.

Records are plain data. Converting back with ``to_domain()`` goes through the
aggregate constructors, so a tampered file cannot produce an invalid workflow.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from workflow_automation.domain.step import ConfigValue, Step, StepConfig, StepOrder, StepType
from workflow_automation.domain.user import User
from workflow_automation.domain.workflow import Workflow, WorkflowStatus


class StepRecord(BaseModel):
    id: UUID
    name: str
    type: StepType
    order: int = Field(ge=1)
    config: dict[str, ConfigValue] = Field(default_factory=dict)
    description: str = ""
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, step: Step) -> StepRecord:
        return cls(
            id=step.id,
            name=step.name,
            type=step.type,
            order=step.order.value,
            config=step.config.to_dict(),
            description=step.description,
            created_at=step.created_at,
            updated_at=step.updated_at,
        )

    def to_domain(self) -> Step:
        return Step(
            id=self.id,
            name=self.name,
            type=self.type,
            order=StepOrder(self.order),
            config=StepConfig(self.config),
            description=self.description,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


class WorkflowRecord(BaseModel):
    id: UUID
    name: str
    description: str = ""
    status: WorkflowStatus = WorkflowStatus.DRAFT
    steps: list[StepRecord] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, workflow: Workflow) -> WorkflowRecord:
        return cls(
            id=workflow.id,
            name=workflow.name,
            description=workflow.description,
            status=workflow.status,
            steps=[StepRecord.from_domain(step) for step in workflow.steps],
            created_at=workflow.created_at,
            updated_at=workflow.updated_at,
        )

    def to_domain(self) -> Workflow:
        return Workflow(
            id=self.id,
            name=self.name,
            description=self.description,
            status=self.status,
            steps=[step.to_domain() for step in self.steps],
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


class UserRecord(BaseModel):
    id: UUID
    name: str
    email: str
    created_at: datetime

    @classmethod
    def from_domain(cls, user: User) -> UserRecord:
        return cls(id=user.id, name=user.name, email=user.email, created_at=user.created_at)

    def to_domain(self) -> User:
        return User(id=self.id, name=self.name, email=self.email, created_at=self.created_at)
