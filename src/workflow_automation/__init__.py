"""Workflow automation.

Models multi-step marketing workflows (email, wait, condition, action and
webhook steps) with:
- a Workflow aggregate enforcing step ordering and its draft/active/inactive lifecycle
- repository contracts plus JSON-file and in-memory implementations
- a small CLI for authoring workflows against local state
"""

__version__ = "0.1.0"

from workflow_automation.config import AppSettings

__all__ = ["__version__", "AppSettings"]
