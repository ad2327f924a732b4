"""
steps.py
--------
Step definitions and the fixed, ordered catalog the tutorial walks.

Responsibilities
----------------
- Define the step types the tutorial knows about.
- Validate step data once, at startup.
- Build the default catalog or one described by tutorial.json.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Mapping, Sequence, Tuple


class StepType(Enum):
    """Kind of instruction a step teaches; drives input and control policy."""
    MOVEMENT = "movement"
    AIMING = "aiming"
    SHOOTING = "shooting"
    PICKUP = "pickup"
    COMPLETE = "complete"

    @classmethod
    def parse(cls, value) -> "StepType":
        """Accept an enum member, its value or its name (any case)."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        for member in cls:
            if member.value == key:
                return member
        raise ValueError(f"Unknown tutorial step type: {value!r}")


@dataclass(frozen=True)
class StepDefinition:
    """One instruction: message shown, step type, and auto-advance timeout."""
    message: str
    type: StepType
    timeout_duration: float

    def __post_init__(self):
        if not self.timeout_duration > 0:
            raise ValueError(
                f"Step '{self.type.value}' needs a positive timeout, got {self.timeout_duration!r}"
            )


DEFAULT_STEPS = (
    StepDefinition(
        "Welcome to Last Man Standing!\n\nUse WASD keys to move around\nTry moving now...",
        StepType.MOVEMENT, 8.0,
    ),
    StepDefinition(
        "Move your mouse to aim\nNotice how your weapon follows the cursor",
        StepType.AIMING, 5.0,
    ),
    StepDefinition(
        "Click LEFT MOUSE BUTTON to shoot\nTry firing your weapon now!",
        StepType.SHOOTING, 8.0,
    ),
    StepDefinition(
        "Press C to pick up items like vaccines and weapons\n"
        "Look for items on the ground and press C when nearby",
        StepType.PICKUP, 10.0,
    ),
    StepDefinition(
        "Tutorial Complete!\nSurvive for 10 minutes and reach the green exit zone!\n"
        "Press ESC anytime to pause\n\nGood luck!",
        StepType.COMPLETE, 3.0,
    ),
)


class StepCatalog:
    """Immutable ordered sequence of StepDefinition."""

    __slots__ = ("_steps",)

    def __init__(self, steps: Sequence[StepDefinition] = DEFAULT_STEPS):
        self._steps: Tuple[StepDefinition, ...] = tuple(steps)

    @classmethod
    def default(cls) -> "StepCatalog":
        return cls(DEFAULT_STEPS)

    @classmethod
    def from_config(cls, cfg: Mapping) -> "StepCatalog":
        """
        Build a catalog from a config mapping.

        Args:
            cfg: {"steps": [{"message": str, "type": str, "timeout": float}, ...]}.
                 A mapping without a "steps" key yields the default catalog.

        Raises:
            ValueError: on an unknown step type, a missing field or a
                non-positive timeout.
        """
        if "steps" not in cfg:
            return cls.default()

        steps = []
        for i, raw in enumerate(cfg["steps"]):
            try:
                steps.append(StepDefinition(
                    message=str(raw["message"]),
                    type=StepType.parse(raw["type"]),
                    timeout_duration=float(raw["timeout"]),
                ))
            except KeyError as e:
                raise ValueError(f"Tutorial step {i} missing field {e}") from e
        return cls(steps)

    @property
    def total_timeout(self) -> float:
        return sum(step.timeout_duration for step in self._steps)

    def __len__(self) -> int:
        return len(self._steps)

    def __getitem__(self, index: int) -> StepDefinition:
        return self._steps[index]

    def __iter__(self) -> Iterator[StepDefinition]:
        return iter(self._steps)

    def __repr__(self):
        kinds = ", ".join(f"{s.type.value}:{s.timeout_duration:g}s" for s in self._steps)
        return f"StepCatalog([{kinds}])"
