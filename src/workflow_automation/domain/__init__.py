"""Workflow domain: the Workflow aggregate, its Steps, and the User aggregate.

Pure in-memory model. No I/O and no logging; time is always injected through a
``clock`` argument.
"""

from workflow_automation.domain.clock import Clock, utc_now
from workflow_automation.domain.errors import (
    CannotModifyActiveWorkflow,
    DomainError,
    DuplicateStepId,
    DuplicateStepOrder,
    EmailAlreadyUsed,
    EmptyName,
    EmptyStepName,
    InvalidConfig,
    InvalidEmail,
    InvalidOrder,
    InvalidStepType,
    InvalidWorkflowTransition,
    StepNotFound,
    StepsRequired,
    WorkflowNameAlreadyUsed,
    WorkflowNameEmpty,
    WorkflowNotFound,
)
from workflow_automation.domain.repository import UserRepository, WorkflowRepository
from workflow_automation.domain.step import (
    Step,
    StepConfig,
    StepOrder,
    StepType,
    validate_step_config,
)
from workflow_automation.domain.user import User, is_valid_email
from workflow_automation.domain.workflow import Workflow, WorkflowStatus

__all__ = [
    "CannotModifyActiveWorkflow",
    "Clock",
    "DomainError",
    "DuplicateStepId",
    "DuplicateStepOrder",
    "EmailAlreadyUsed",
    "EmptyName",
    "EmptyStepName",
    "InvalidConfig",
    "InvalidEmail",
    "InvalidOrder",
    "InvalidStepType",
    "InvalidWorkflowTransition",
    "Step",
    "StepConfig",
    "StepNotFound",
    "StepOrder",
    "StepType",
    "StepsRequired",
    "User",
    "UserRepository",
    "Workflow",
    "WorkflowNameAlreadyUsed",
    "WorkflowNameEmpty",
    "WorkflowNotFound",
    "WorkflowRepository",
    "WorkflowStatus",
    "is_valid_email",
    "utc_now",
]
