"""Configuration models for the scenario runner."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

DEFAULT_LAUNCH_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-web-security",
    "--disable-features=IsolateOrigins,site-per-process",
]


class ViewportConfig(BaseModel):
    width: int = 1920
    height: int = 1080


class SessionConfig(BaseModel):
    headless: bool = True
    viewport: ViewportConfig = Field(default_factory=ViewportConfig)
    user_agent: Optional[str] = None
    launch_args: list[str] = Field(default_factory=lambda: list(DEFAULT_LAUNCH_ARGS))


class SettleConfig(BaseModel):
    """Fixed settle delays in milliseconds."""
    click_ms: int = 500
    hover_ms: int = 300
    navigate_ms: int = 1000
    fill_input_ms: int = 0
    portal_load_ms: int = 2000  # after the initial portal navigation
    between_scenarios_ms: int = 500


class RunnerConfig(BaseModel):
    session: SessionConfig = Field(default_factory=SessionConfig)
    settle: SettleConfig = Field(default_factory=SettleConfig)

    # Only navigation carries an explicit timeout
    navigation_timeout_ms: int = 60000

    # Evidence
    screenshot_on_failure: bool = False
    output_dir: str = "./qa-reports"

    @classmethod
    def load(cls, path: str | Path) -> "RunnerConfig":
        """Load config from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        with open(path) as f:
            data = json.load(f)
        return cls(**data)

    def save(self, path: str | Path) -> None:
        """Save config to a JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(self.model_dump(), f, indent=2)
