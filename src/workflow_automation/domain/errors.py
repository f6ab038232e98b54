"""Named failures raised by the workflow and user aggregates.

Every mutator validates before it applies, so when one of these is raised the
aggregate is left exactly as it was.
"""

from __future__ import annotations


class DomainError(ValueError):
    """Base class for all domain failures."""

    default_message = "domain error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


# Step related errors


class EmptyStepName(DomainError):
    default_message = "step name is empty"


class InvalidStepType(DomainError):
    default_message = "invalid step type"


class InvalidOrder(DomainError):
    default_message = "invalid step order"


class InvalidConfig(DomainError):
    default_message = "invalid step configuration"


# Workflow related errors


class WorkflowNameEmpty(DomainError):
    default_message = "workflow name is empty"


class StepNotFound(DomainError):
    default_message = "step not found"


class DuplicateStepOrder(DomainError):
    default_message = "duplicate step order"


class DuplicateStepId(DomainError):
    default_message = "step already belongs to the workflow"


class InvalidWorkflowTransition(DomainError):
    default_message = "invalid workflow status transition"


class CannotModifyActiveWorkflow(DomainError):
    default_message = "cannot modify active workflow"


class StepsRequired(DomainError):
    default_message = "workflow must have at least one step"


# User related errors


class EmptyName(DomainError):
    default_message = "name is empty"


class InvalidEmail(DomainError):
    default_message = "invalid email"


class EmailAlreadyUsed(DomainError):
    default_message = "email already used"


# Raised by the application services, never by the aggregates themselves.


class WorkflowNotFound(DomainError):
    default_message = "workflow not found"


class WorkflowNameAlreadyUsed(DomainError):
    default_message = "workflow name already used"
