"""Repository implementations for the workflow and user aggregates."""

from workflow_automation.persistence.json_store import JsonUserRepository, JsonWorkflowRepository
from workflow_automation.persistence.memory import (
    InMemoryUserRepository,
    InMemoryWorkflowRepository,
)
from workflow_automation.persistence.records import StepRecord, UserRecord, WorkflowRecord

__all__ = [
    "InMemoryUserRepository",
    "InMemoryWorkflowRepository",
    "JsonUserRepository",
    "JsonWorkflowRepository",
    "StepRecord",
    "UserRecord",
    "WorkflowRecord",
]
