"""Unit tests for structured logging."""

from __future__ import annotations

import io
import json
import logging
from uuid import UUID

from workflow_automation.logging import JsonFormatter, configure_logging


def test_json_formatter_includes_extra_fields() -> None:
    record = logging.LogRecord(
        name="workflow_automation.services",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Workflow activated",
        args=None,
        exc_info=None,
    )
    record.workflow_id = UUID("12345678-1234-5678-1234-567812345678")
    record.status = "active"

    payload = json.loads(JsonFormatter().format(record))

    assert payload["level"] == "INFO"
    assert payload["logger"] == "workflow_automation.services"
    assert payload["message"] == "Workflow activated"
    assert payload["extra"] == {
        "workflow_id": "12345678-1234-5678-1234-567812345678",
        "status": "active",
    }
    assert "exception" not in payload


def test_configure_logging_replaces_handlers() -> None:
    stream = io.StringIO()
    configure_logging("warning", stream=stream)
    configure_logging("warning", stream=stream)

    logger = logging.getLogger("workflow_automation.test")
    logger.warning("careful", extra={"step": 2})
    logger.info("hidden")

    lines = stream.getvalue().splitlines()
    assert len(lines) == 1
    assert json.loads(lines[0])["extra"] == {"step": 2}
    assert logging.getLogger().level == logging.WARNING
