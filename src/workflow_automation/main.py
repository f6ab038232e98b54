"""CLI entrypoint for authoring workflows against the local JSON store."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any
from uuid import UUID

from pydantic import ValidationError

from workflow_automation import __version__
from workflow_automation.config import AppSettings
from workflow_automation.domain.clock import utc_now
from workflow_automation.domain.errors import DomainError
from workflow_automation.domain.step import ConfigValue, StepType
from workflow_automation.logging import configure_logging
from workflow_automation.persistence.json_store import JsonUserRepository, JsonWorkflowRepository
from workflow_automation.persistence.records import UserRecord, WorkflowRecord
from workflow_automation.services import RegisterUser, WorkflowService

logger = logging.getLogger(__name__)


def _parse_uuid(value: str) -> UUID:
    try:
        return UUID(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a valid id: {value!r}") from None


def _parse_config_value(raw: str) -> ConfigValue:
    # Integers are the only typed values the step rules care about (duration_hours).
    try:
        return int(raw)
    except ValueError:
        return raw


def _parse_config(pairs: list[str] | None) -> dict[str, ConfigValue]:
    config: dict[str, ConfigValue] = {}
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise argparse.ArgumentTypeError(f"expected key=value, got {pair!r}")
        config[key.strip()] = _parse_config_value(value)
    return config


def _parse_orders(pairs: list[str]) -> dict[UUID, int]:
    orders: dict[UUID, int] = {}
    for pair in pairs:
        step_id, sep, order = pair.partition("=")
        if not sep:
            raise argparse.ArgumentTypeError(f"expected STEP_ID=ORDER, got {pair!r}")
        try:
            orders[_parse_uuid(step_id.strip())] = int(order)
        except ValueError:
            raise argparse.ArgumentTypeError(f"order must be an integer: {pair!r}") from None
    return orders


def _print_json(payload: Any) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False))


def _add_workflow_id(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--workflow-id", type=_parse_uuid, required=True, help="Id of the target workflow"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="workflow-automation",
        description="Author multi-step marketing workflows stored as local JSON",
    )
    parser.add_argument(
        "--version", action="version", version=f"workflow-automation {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    create_workflow = subparsers.add_parser("create-workflow", help="Create a draft workflow")
    create_workflow.add_argument("--name", required=True, help="Unique workflow name")
    create_workflow.add_argument("--description", default="", help="Free-text description")

    list_workflows = subparsers.add_parser("list-workflows", help="List stored workflows")
    list_workflows.add_argument(
        "--active", action="store_true", help="Only list workflows that are active"
    )

    show_workflow = subparsers.add_parser("show-workflow", help="Show a workflow and its steps")
    _add_workflow_id(show_workflow)

    add_step = subparsers.add_parser("add-step", help="Append a step to a workflow")
    _add_workflow_id(add_step)
    add_step.add_argument("--name", required=True, help="Step name")
    add_step.add_argument(
        "--type",
        dest="step_type",
        required=True,
        choices=[t.value for t in StepType],
        help="Step type",
    )
    add_step.add_argument("--order", type=int, required=True, help="Position (>= 1)")
    add_step.add_argument(
        "--config",
        action="append",
        default=None,
        metavar="KEY=VALUE",
        help="Step setting, repeatable, e.g. 'template_id=welcome' or 'duration_hours=24'",
    )
    add_step.add_argument("--description", default="", help="Free-text description")

    remove_step = subparsers.add_parser("remove-step", help="Remove a step from a workflow")
    _add_workflow_id(remove_step)
    remove_step.add_argument("--step-id", type=_parse_uuid, required=True, help="Step id")

    reorder_steps = subparsers.add_parser("reorder-steps", help="Move steps to new positions")
    _add_workflow_id(reorder_steps)
    reorder_steps.add_argument(
        "--set",
        dest="orders",
        action="append",
        required=True,
        metavar="STEP_ID=ORDER",
        help="New position for a step, repeatable",
    )

    for command, help_text in (
        ("activate", "Activate a draft or inactive workflow"),
        ("deactivate", "Deactivate an active workflow"),
        ("reactivate", "Reactivate an inactive workflow"),
        ("delete-workflow", "Delete a workflow from the store"),
    ):
        _add_workflow_id(subparsers.add_parser(command, help=help_text))

    register_user = subparsers.add_parser("register-user", help="Register a user")
    register_user.add_argument("--name", required=True, help="Display name")
    register_user.add_argument("--email", required=True, help="Email address (unique)")

    return parser


def _workflow_json(service: WorkflowService, workflow_id: UUID) -> dict[str, Any]:
    return WorkflowRecord.from_domain(service.get_workflow(workflow_id)).model_dump(mode="json")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = AppSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    configure_logging(settings.log_level)

    workflows = WorkflowService(JsonWorkflowRepository(settings.workflows_state_file), utc_now)

    try:
        if args.command == "create-workflow":
            workflow = workflows.create_workflow(name=args.name, description=args.description)
            _print_json(WorkflowRecord.from_domain(workflow).model_dump(mode="json"))
            return 0

        if args.command == "list-workflows":
            listed = workflows.list_workflows(active_only=args.active)
            _print_json(
                [
                    {
                        "id": str(w.id),
                        "name": w.name,
                        "status": w.status.value,
                        "steps": w.step_count(),
                    }
                    for w in listed
                ]
            )
            return 0

        if args.command == "show-workflow":
            _print_json(_workflow_json(workflows, args.workflow_id))
            return 0

        if args.command == "add-step":
            step = workflows.add_step(
                args.workflow_id,
                name=args.name,
                step_type=args.step_type,
                order=args.order,
                config=_parse_config(args.config),
                description=args.description,
            )
            print(f"Added step {step.id} at order {step.order.value}", file=sys.stderr)
            _print_json(_workflow_json(workflows, args.workflow_id))
            return 0

        if args.command == "remove-step":
            workflows.remove_step(args.workflow_id, args.step_id)
            _print_json(_workflow_json(workflows, args.workflow_id))
            return 0

        if args.command == "reorder-steps":
            workflows.reorder_steps(args.workflow_id, _parse_orders(args.orders))
            _print_json(_workflow_json(workflows, args.workflow_id))
            return 0

        if args.command in {"activate", "deactivate", "reactivate"}:
            transition = getattr(workflows, args.command)
            workflow = transition(args.workflow_id)
            _print_json({"id": str(workflow.id), "status": workflow.status.value})
            return 0

        if args.command == "delete-workflow":
            workflows.delete_workflow(args.workflow_id)
            print(f"Deleted workflow {args.workflow_id}", file=sys.stderr)
            return 0

        if args.command == "register-user":
            register = RegisterUser(JsonUserRepository(settings.users_state_file), utc_now)
            user = register.execute(name=args.name, email=args.email)
            _print_json(UserRecord.from_domain(user).model_dump(mode="json"))
            return 0

        logger.error("Unknown command", extra={"command": args.command})
        return 2

    except (DomainError, argparse.ArgumentTypeError) as e:
        logger.warning(str(e), extra={"command": args.command, "error": type(e).__name__})
        print(str(e), file=sys.stderr)
        return 3

    except Exception:
        logger.exception("Command failed")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
