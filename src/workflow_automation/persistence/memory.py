"""In-memory repositories, used by tests and as a reference implementation.

Aggregates are stored as deep copies so that, like a real store, nothing a
caller does to a loaded object is visible until it is saved again.
"""

from __future__ import annotations

import copy
from uuid import UUID

from workflow_automation.domain.repository import UserRepository, WorkflowRepository
from workflow_automation.domain.user import User
from workflow_automation.domain.workflow import Workflow


class InMemoryWorkflowRepository(WorkflowRepository):
    def __init__(self) -> None:
        self._workflows: dict[UUID, Workflow] = {}

    def save(self, workflow: Workflow) -> None:
        self._workflows[workflow.id] = copy.deepcopy(workflow)

    def find_by_id(self, workflow_id: UUID) -> Workflow | None:
        workflow = self._workflows.get(workflow_id)
        return copy.deepcopy(workflow) if workflow is not None else None

    def find_by_name(self, name: str) -> Workflow | None:
        for workflow in self._workflows.values():
            if workflow.name == name:
                return copy.deepcopy(workflow)
        return None

    def find_active_workflows(self) -> list[Workflow]:
        return [copy.deepcopy(w) for w in self._workflows.values() if w.is_active()]

    def find_all(self) -> list[Workflow]:
        return [copy.deepcopy(w) for w in self._workflows.values()]

    def exists_by_name(self, name: str) -> bool:
        return any(w.name == name for w in self._workflows.values())

    def delete(self, workflow_id: UUID) -> None:
        del self._workflows[workflow_id]


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self._users: dict[UUID, User] = {}

    def exists_by_email(self, email: str) -> bool:
        normalized = email.strip().lower()
        return any(u.email.strip().lower() == normalized for u in self._users.values())

    def save(self, user: User) -> None:
        # Users are frozen, no copy needed.
        self._users[user.id] = user

    def find_all(self) -> list[User]:
        return list(self._users.values())
