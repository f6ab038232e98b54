"""Persistence contracts consumed by the application services.

The aggregates never call these themselves; callers load, mutate and save.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from uuid import UUID

from .user import User
from .workflow import Workflow


class WorkflowRepository(ABC):
    """Storage for workflow aggregates (including their steps)."""

    @abstractmethod
    def save(self, workflow: Workflow) -> None:
        """Insert or replace the workflow with the same id."""

    @abstractmethod
    def find_by_id(self, workflow_id: UUID) -> Workflow | None:
        """Return the workflow, or None if it does not exist."""

    @abstractmethod
    def find_by_name(self, name: str) -> Workflow | None:
        """Return the workflow with exactly this name, or None."""

    @abstractmethod
    def find_active_workflows(self) -> list[Workflow]:
        """Return every workflow whose status is active."""

    @abstractmethod
    def find_all(self) -> list[Workflow]:
        """Return every stored workflow."""

    @abstractmethod
    def exists_by_name(self, name: str) -> bool:
        """Return True if a workflow with this name is stored."""

    @abstractmethod
    def delete(self, workflow_id: UUID) -> None:
        """Remove the workflow.

        Raises:
            KeyError: If no workflow has this id.
        """


class UserRepository(ABC):
    """Storage for user aggregates."""

    @abstractmethod
    def exists_by_email(self, email: str) -> bool:
        """Return True if a user with this email (case-insensitive) is stored."""

    @abstractmethod
    def save(self, user: User) -> None:
        """Insert or replace the user with the same id."""
