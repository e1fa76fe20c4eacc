"""Scenario data structures consumed by the executor."""

from __future__ import annotations

import json
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from portal_qa.executor.errors import UnsupportedActionError


class ActionKind(str, Enum):
    NAVIGATE = "navigate"
    CLICK = "click"
    HOVER = "hover"
    FILL_INPUT = "fill_input"
    CHECK_STYLE = "check_style"
    CHECK_TEXT = "check_text"
    CHECK_VISIBILITY = "check_visibility"

    @classmethod
    def parse(cls, raw: str) -> "ActionKind":
        """Map a free-form action string onto the closed set (case-insensitive)."""
        try:
            return cls(raw.strip().lower())
        except (ValueError, AttributeError):
            raise UnsupportedActionError(str(raw)) from None

    @property
    def needs_target(self) -> bool:
        return self is not ActionKind.NAVIGATE


class TestScenario(BaseModel):
    """One atomic test instruction.

    ``action`` is kept exactly as supplied so an unsupported value can be
    echoed back in its result; it is validated when the scenario runs.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    action: str
    target: str = ""
    expected_result: str = Field(default="", alias="expectedResult")
    description: str = ""


def load_scenarios(path: str | Path) -> list[TestScenario]:
    """Load scenarios from a JSON file.

    Accepts either a bare list or an object with a ``scenarios`` key, which
    is what the scenario generator emits.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Scenario file not found: {path}")
    with open(path) as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get("scenarios", [])
    return [TestScenario.model_validate(item) for item in data]
