#!/usr/bin/env python3
"""Programmatic workflow authoring example.

This demonstrates using the components directly:

* load settings from `.env`
* build a three-step welcome workflow
* persist it to `<WORKFLOW_STATE_PATH>/workflows.json`
* activate it
"""

from __future__ import annotations

import argparse
from typing import Sequence

from workflow_automation.config import AppSettings
from workflow_automation.domain.clock import utc_now
from workflow_automation.domain.errors import DomainError
from workflow_automation.logging import configure_logging
from workflow_automation.persistence.json_store import JsonWorkflowRepository
from workflow_automation.services import WorkflowService


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create and activate a welcome workflow.")
    parser.add_argument("--name", default="Welcome Flow", help="Workflow name")
    parser.add_argument("--template", default="welcome", help="Email template id")
    parser.add_argument(
        "--webhook-url",
        default="https://example.com/hooks/welcome-finished",
        help="URL notified once the sequence completes",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    settings = AppSettings()
    configure_logging(settings.log_level)

    service = WorkflowService(JsonWorkflowRepository(settings.workflows_state_file), utc_now)

    try:
        workflow = service.create_workflow(name=args.name, description="New signups")
        service.add_step(
            workflow.id,
            name="Send welcome email",
            step_type="email",
            order=1,
            config={"template_id": args.template},
        )
        service.add_step(
            workflow.id,
            name="Wait a day",
            step_type="wait",
            order=2,
            config={"duration_hours": 24},
        )
        service.add_step(
            workflow.id,
            name="Notify CRM",
            step_type="webhook",
            order=3,
            config={"url": args.webhook_url},
        )
        workflow = service.activate(workflow.id)
    except DomainError as e:
        print(f"Could not build workflow: {e}")
        return 1

    print(f"Workflow {workflow.id} is {workflow.status.value} with {workflow.step_count()} steps")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
