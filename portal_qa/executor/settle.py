"""Settle policies: how long to let the page settle after an action."""

from __future__ import annotations

import logging
from typing import Protocol

from playwright.async_api import Page

from portal_qa.models.config import SettleConfig
from portal_qa.models.scenario import ActionKind

logger = logging.getLogger(__name__)

# Pseudo-actions for the non-scenario settle points
PORTAL_LOAD = "portal_load"
BETWEEN_SCENARIOS = "between_scenarios"


class SettlePolicy(Protocol):
    async def settle(self, page: Page, action: ActionKind | str) -> None:
        ...


class FixedDelaySettle:
    """Waits a fixed number of milliseconds per action."""

    def __init__(self, config: SettleConfig | None = None):
        self.config = config or SettleConfig()

    def delay_ms(self, action: ActionKind | str) -> int:
        match action:
            case ActionKind.CLICK:
                return self.config.click_ms
            case ActionKind.HOVER:
                return self.config.hover_ms
            case ActionKind.NAVIGATE:
                return self.config.navigate_ms
            case ActionKind.FILL_INPUT:
                return self.config.fill_input_ms
            case "portal_load":
                return self.config.portal_load_ms
            case "between_scenarios":
                return self.config.between_scenarios_ms
            case _:
                return 0

    async def settle(self, page: Page, action: ActionKind | str) -> None:
        ms = self.delay_ms(action)
        if ms > 0:
            logger.debug("Settling %dms after %s", ms, getattr(action, "value", action))
            await page.wait_for_timeout(ms)


class NoSettle:
    """Never waits. Useful for offline runs and tests."""

    async def settle(self, page: Page, action: ActionKind | str) -> None:
        return None
