"""Scenario dispatcher: runs one scenario against the live page."""

from __future__ import annotations

import logging
import time
from urllib.parse import urljoin

from playwright.async_api import ElementHandle, Page

from portal_qa.models.config import RunnerConfig
from portal_qa.models.scenario import ActionKind, TestScenario
from portal_qa.models.test_result import TestResult

from .errors import (
    ElementNotFoundError,
    ScenarioExecutionError,
    SessionFatalError,
    UnsupportedActionError,
)
from .evidence_collector import EvidenceCollector
from .expectation_parser import (
    expects_visible,
    parse_fill_value,
    parse_navigation_target,
    parse_style_expectation,
    parse_text_expectation,
)
from .session import BrowserSession
from .settle import FixedDelaySettle, SettlePolicy
from .value_normalizer import normalize

logger = logging.getLogger(__name__)

_COMPUTED_STYLE_JS = "(el, prop) => window.getComputedStyle(el).getPropertyValue(prop)"


class HandlerOutcome:
    def __init__(self, passed: bool, actual_value: str | None = None, error: str | None = None):
        self.passed = passed
        self.actual_value = actual_value
        self.error = error


class ScenarioDispatcher:
    """Routes each scenario to its action handler.

    Scenarios are resolved one at a time against the session's single page,
    so later scenarios see the DOM side effects of earlier ones. Every
    scenario-local problem becomes a failed ``TestResult``; only a dead
    session escapes as ``SessionFatalError``.
    """

    def __init__(
        self,
        session: BrowserSession,
        config: RunnerConfig | None = None,
        settle_policy: SettlePolicy | None = None,
        collector: EvidenceCollector | None = None,
    ):
        self.session = session
        self.config = config or RunnerConfig()
        self.settle_policy = settle_policy or FixedDelaySettle(self.config.settle)
        self.collector = collector
        self._dispatched = 0

    @property
    def page(self) -> Page:
        self.session.ensure_alive()
        return self.session.page  # type: ignore[return-value]

    async def dispatch(self, scenario: TestScenario) -> TestResult:
        """Execute a single scenario and return exactly one result for it."""
        self._dispatched += 1
        start = time.time()
        try:
            kind = ActionKind.parse(scenario.action)
            element = None
            if kind.needs_target:
                element = await self.page.query_selector(scenario.target)
                if element is None and kind is not ActionKind.CHECK_VISIBILITY:
                    raise ElementNotFoundError(scenario.target)
            outcome = await self._handle(kind, scenario, element)
        except SessionFatalError:
            raise
        except ScenarioExecutionError as e:
            outcome = HandlerOutcome(False, error=str(e))
        except Exception as e:
            if self.session.is_fatal(e):
                raise SessionFatalError(f"Browser session failed: {e}") from e
            logger.debug("Scenario raised: %s", e)
            outcome = HandlerOutcome(False, error=str(e))

        screenshot = None
        if not outcome.passed and self.collector and self.session.is_alive:
            screenshot = await self.collector.take_screenshot(
                self.session.page, f"scenario_{self._dispatched}_{scenario.action}",
            ) or None

        return TestResult(
            scenario=scenario,
            passed=outcome.passed,
            error=outcome.error,
            actual_value=outcome.actual_value,
            screenshot=screenshot,
            duration_seconds=round(time.time() - start, 2),
        )

    async def settle(self, action: ActionKind | str) -> None:
        """Apply the settle policy, treating a failure as a dead session."""
        try:
            await self.settle_policy.settle(self.page, action)
        except SessionFatalError:
            raise
        except Exception as e:
            if self.session.is_fatal(e):
                raise SessionFatalError(f"Browser session failed: {e}") from e
            raise

    async def _handle(
        self, kind: ActionKind, scenario: TestScenario, element: ElementHandle | None,
    ) -> HandlerOutcome:
        match kind:
            case ActionKind.CHECK_STYLE:
                return await self._check_style(scenario, element)
            case ActionKind.CHECK_TEXT:
                return await self._check_text(scenario, element)
            case ActionKind.CHECK_VISIBILITY:
                return self._check_visibility(scenario, element)
            case ActionKind.CLICK:
                await element.click()
                await self.settle(kind)
                return HandlerOutcome(True)
            case ActionKind.HOVER:
                await element.hover()
                await self.settle(kind)
                return HandlerOutcome(True)
            case ActionKind.FILL_INPUT:
                return await self._fill_input(scenario, element)
            case ActionKind.NAVIGATE:
                return await self._navigate(scenario)
            case _:
                raise UnsupportedActionError(scenario.action)

    async def _check_style(self, scenario: TestScenario, element: ElementHandle) -> HandlerOutcome:
        prop, expected = parse_style_expectation(scenario.expected_result)
        raw = (await element.evaluate(_COMPUTED_STYLE_JS, prop) or "").strip()
        actual = normalize(raw)
        if actual == normalize(expected):
            return HandlerOutcome(True, actual_value=actual)
        return HandlerOutcome(
            False, actual_value=actual,
            error=f'Expected {prop} to be "{expected}", but got "{raw}"',
        )

    async def _check_text(self, scenario: TestScenario, element: ElementHandle) -> HandlerOutcome:
        expected = parse_text_expectation(scenario.expected_result)
        text = await element.text_content() or ""
        if text == expected or expected in text:
            return HandlerOutcome(True, actual_value=text)
        return HandlerOutcome(
            False, actual_value=text,
            error=f'Expected text to contain "{expected}", but got "{text}"',
        )

    def _check_visibility(self, scenario: TestScenario, element: ElementHandle | None) -> HandlerOutcome:
        # DOM presence only; CSS visibility and opacity are not consulted
        present = element is not None
        should_be_visible = expects_visible(scenario.expected_result)
        actual = "visible" if present else "not visible"
        if present == should_be_visible:
            return HandlerOutcome(True, actual_value=actual)
        return HandlerOutcome(
            False, actual_value=actual,
            error=f"Expected element to be {'visible' if should_be_visible else 'hidden'}",
        )

    async def _fill_input(self, scenario: TestScenario, element: ElementHandle) -> HandlerOutcome:
        value = parse_fill_value(scenario.expected_result)
        logger.debug("Typing into %s: %s", scenario.target,
                     "***" if "password" in scenario.target.lower() else value)
        await element.type(value)
        await self.settle(ActionKind.FILL_INPUT)
        return HandlerOutcome(True)

    async def _navigate(self, scenario: TestScenario) -> HandlerOutcome:
        target = parse_navigation_target(scenario.expected_result)
        # Relative paths resolve against the page we are on
        url = urljoin(self.page.url, target)
        await self.session.navigate(url, self.config.navigation_timeout_ms)
        await self.settle(ActionKind.NAVIGATE)
        return HandlerOutcome(True, actual_value=self.page.url)
