"""JSON-file backed repositories.

One file per aggregate type, rewritten on every save. Good enough for a
single-process CLI; swap in a database-backed repository for anything shared.
"""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Generic, TypeVar
from uuid import UUID

from pydantic import BaseModel

from workflow_automation.domain.repository import UserRepository, WorkflowRepository
from workflow_automation.domain.user import User
from workflow_automation.domain.workflow import Workflow, WorkflowStatus
from workflow_automation.persistence.records import UserRecord, WorkflowRecord

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


class _JsonFile(Generic[RecordT]):
    """A list of records persisted as a JSON array."""

    def __init__(self, path: Path, record_type: type[RecordT]) -> None:
        self.path = path
        self._record_type = record_type
        self.lock = threading.Lock()

    def load_unlocked(self) -> list[RecordT]:
        if not self.path.exists():
            return []

        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            logger.warning(
                "State file is not valid JSON; treating as empty",
                extra={"path": str(self.path)},
            )
            return []

        if raw is None:
            return []

        if not isinstance(raw, list):
            logger.warning(
                "State file has unexpected shape; treating as empty",
                extra={"path": str(self.path)},
            )
            return []

        return [self._record_type.model_validate(item) for item in raw]

    def save_unlocked(self, records: list[RecordT]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = [r.model_dump(mode="json") for r in records]
        self.path.write_text(
            json.dumps(payload, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
        )


class JsonWorkflowRepository(WorkflowRepository):
    def __init__(self, path: Path) -> None:
        self._file = _JsonFile(path, WorkflowRecord)

    def _load(self) -> list[WorkflowRecord]:
        with self._file.lock:
            return self._file.load_unlocked()

    def save(self, workflow: Workflow) -> None:
        record = WorkflowRecord.from_domain(workflow)
        with self._file.lock:
            records = self._file.load_unlocked()
            for idx, existing in enumerate(records):
                if existing.id == record.id:
                    records[idx] = record
                    break
            else:
                records.append(record)
            self._file.save_unlocked(records)
        logger.debug("Workflow saved", extra={"workflow_id": str(workflow.id)})

    def find_by_id(self, workflow_id: UUID) -> Workflow | None:
        for record in self._load():
            if record.id == workflow_id:
                return record.to_domain()
        return None

    def find_by_name(self, name: str) -> Workflow | None:
        for record in self._load():
            if record.name == name:
                return record.to_domain()
        return None

    def find_active_workflows(self) -> list[Workflow]:
        return [r.to_domain() for r in self._load() if r.status is WorkflowStatus.ACTIVE]

    def find_all(self) -> list[Workflow]:
        return [r.to_domain() for r in self._load()]

    def exists_by_name(self, name: str) -> bool:
        return any(r.name == name for r in self._load())

    def delete(self, workflow_id: UUID) -> None:
        with self._file.lock:
            records = self._file.load_unlocked()
            remaining = [r for r in records if r.id != workflow_id]
            if len(remaining) == len(records):
                raise KeyError(workflow_id)
            self._file.save_unlocked(remaining)
        logger.debug("Workflow deleted", extra={"workflow_id": str(workflow_id)})


class JsonUserRepository(UserRepository):
    def __init__(self, path: Path) -> None:
        self._file = _JsonFile(path, UserRecord)

    def exists_by_email(self, email: str) -> bool:
        normalized = email.strip().lower()
        with self._file.lock:
            records = self._file.load_unlocked()
        return any(r.email.strip().lower() == normalized for r in records)

    def save(self, user: User) -> None:
        record = UserRecord.from_domain(user)
        with self._file.lock:
            records = [r for r in self._file.load_unlocked() if r.id != record.id]
            records.append(record)
            self._file.save_unlocked(records)

    def find_all(self) -> list[User]:
        with self._file.lock:
            return [r.to_domain() for r in self._file.load_unlocked()]
