"""Steps: the typed, ordered units of work a workflow is made of."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from uuid import UUID, uuid4

from .clock import Clock
from .errors import EmptyStepName, InvalidConfig, InvalidOrder, InvalidStepType


class StepType(str, Enum):
    EMAIL = "email"
    WAIT = "wait"
    CONDITION = "condition"
    ACTION = "action"
    WEBHOOK = "webhook"


def parse_step_type(value: StepType | str) -> StepType:
    if isinstance(value, StepType):
        return value
    try:
        return StepType(value)
    except ValueError:
        raise InvalidStepType(f"invalid step type: {value!r}") from None


@dataclass(frozen=True, slots=True, order=True)
class StepOrder:
    """Position of a step inside its workflow. Always >= 1."""

    value: int

    def __post_init__(self) -> None:
        # bool is an int subclass but never a meaningful position.
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise InvalidOrder(f"step order must be an integer, got {self.value!r}")
        if self.value < 1:
            raise InvalidOrder(f"step order must be >= 1, got {self.value}")

    def next(self) -> StepOrder:
        return StepOrder(self.value + 1)

    def is_before(self, other: StepOrder) -> bool:
        return self.value < other.value

    def is_after(self, other: StepOrder) -> bool:
        return self.value > other.value


ConfigValue = str | int | float | bool | None

_SCALAR_TYPES = (str, int, float, bool, type(None))


class StepConfig:
    """Type-specific settings of a step.

    Values are scalars. The typed accessors never coerce: a value stored as
    ``"24"`` is not returned by :meth:`get_int`.
    """

    __slots__ = ("_data",)

    def __init__(self, data: Mapping[str, ConfigValue] | None = None) -> None:
        self._data: dict[str, ConfigValue] = {}
        for key, value in (data or {}).items():
            self.set(key, value)

    def get(self, key: str, default: ConfigValue = None) -> ConfigValue:
        """Return the stored value or ``default``.

        A stored ``None`` looks like a missing key here; use :meth:`lookup` or
        ``key in config`` to tell them apart.
        """

        return self._data.get(key, default)

    def lookup(self, key: str) -> tuple[ConfigValue, bool]:
        if key in self._data:
            return self._data[key], True
        return None, False

    def set(self, key: str, value: ConfigValue) -> None:
        if not isinstance(key, str):
            raise InvalidConfig(f"config keys must be strings, got {key!r}")
        if not isinstance(value, _SCALAR_TYPES):
            raise InvalidConfig(
                f"config value for {key!r} must be a scalar, got {type(value).__name__}"
            )
        self._data[key] = value

    def get_string(self, key: str) -> str | None:
        value = self._data.get(key)
        return value if isinstance(value, str) else None

    def get_int(self, key: str) -> int | None:
        value = self._data.get(key)
        if isinstance(value, bool) or not isinstance(value, int):
            return None
        return value

    def to_dict(self) -> dict[str, ConfigValue]:
        return dict(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StepConfig):
            return NotImplemented
        return self._data == other._data

    def __repr__(self) -> str:
        return f"StepConfig({self._data!r})"


def as_step_config(config: StepConfig | Mapping[str, ConfigValue] | None) -> StepConfig:
    if config is None:
        return StepConfig()
    if isinstance(config, StepConfig):
        return StepConfig(config.to_dict())
    return StepConfig(config)


def validate_step_config(step_type: StepType, config: StepConfig) -> None:
    """Raise :class:`InvalidConfig` unless ``config`` satisfies ``step_type``.

    - email: string ``template_id``
    - wait: integer ``duration_hours`` >= 0
    - webhook: string ``url``
    - condition, action: no requirements
    """

    if step_type is StepType.EMAIL:
        if config.get_string("template_id") is None:
            raise InvalidConfig("email step requires a string 'template_id'")
    elif step_type is StepType.WAIT:
        duration = config.get_int("duration_hours")
        if duration is None or duration < 0:
            raise InvalidConfig("wait step requires an integer 'duration_hours' >= 0")
    elif step_type is StepType.WEBHOOK:
        if config.get_string("url") is None:
            raise InvalidConfig("webhook step requires a string 'url'")


@dataclass(eq=False, slots=True)
class Step:
    """A single unit of work inside a workflow.

    Use :meth:`create` for new steps. The plain constructor exists for
    rehydration from storage and runs the same validation.
    """

    id: UUID
    name: str
    type: StepType
    order: StepOrder
    created_at: datetime
    updated_at: datetime
    config: StepConfig = field(default_factory=StepConfig)
    description: str = ""

    def __post_init__(self) -> None:
        if not self.name:
            raise EmptyStepName()
        self.type = parse_step_type(self.type)
        if isinstance(self.order, int):
            self.order = StepOrder(self.order)
        self.config = as_step_config(self.config)
        validate_step_config(self.type, self.config)

    @classmethod
    def create(
        cls,
        name: str,
        step_type: StepType | str,
        order: StepOrder,
        config: StepConfig | Mapping[str, ConfigValue] | None = None,
        description: str = "",
        *,
        clock: Clock,
    ) -> Step:
        if not name:
            raise EmptyStepName()
        resolved_type = parse_step_type(step_type)
        resolved_config = as_step_config(config)
        validate_step_config(resolved_type, resolved_config)

        now = clock()
        return cls(
            id=uuid4(),
            name=name,
            type=resolved_type,
            order=order,
            config=resolved_config,
            description=description,
            created_at=now,
            updated_at=now,
        )

    def update_name(self, name: str, *, clock: Clock) -> None:
        if not name:
            raise EmptyStepName()
        self.name = name
        self.updated_at = clock()

    def update_description(self, description: str, *, clock: Clock) -> None:
        self.description = description
        self.updated_at = clock()

    def update_config(
        self, config: StepConfig | Mapping[str, ConfigValue] | None, *, clock: Clock
    ) -> None:
        resolved = as_step_config(config)
        validate_step_config(self.type, resolved)
        self.config = resolved
        self.updated_at = clock()

    def copy(self) -> Step:
        """Return an independent step with the same id and state.

        The config is copied too (see :func:`as_step_config`).
        """

        return replace(self)

    def is_email_step(self) -> bool:
        return self.type is StepType.EMAIL

    def is_wait_step(self) -> bool:
        return self.type is StepType.WAIT

    def is_condition_step(self) -> bool:
        return self.type is StepType.CONDITION

    def is_action_step(self) -> bool:
        return self.type is StepType.ACTION

    def is_webhook_step(self) -> bool:
        return self.type is StepType.WEBHOOK
