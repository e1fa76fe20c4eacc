"""Scenario executor: runs an ordered scenario list against a portal."""

from __future__ import annotations

import asyncio
import logging
import time
import uuid
from pathlib import Path

from portal_qa.models.config import RunnerConfig
from portal_qa.models.scenario import TestScenario
from portal_qa.models.test_result import RunResult
from portal_qa.reporter.aggregator import ResultAggregator

from .dispatcher import ScenarioDispatcher
from .errors import NavigationError, SessionFatalError
from .evidence_collector import EvidenceCollector
from .session import BrowserSession
from .settle import BETWEEN_SCENARIOS, PORTAL_LOAD, FixedDelaySettle, SettlePolicy

logger = logging.getLogger(__name__)


class Executor:
    """Executes scenarios sequentially in one browser session.

    Each call to ``execute`` acquires its own ``BrowserSession``; the
    session is released whether the run completes or aborts.
    """

    def __init__(
        self,
        config: RunnerConfig | None = None,
        settle_policy: SettlePolicy | None = None,
    ):
        self.config = config or RunnerConfig()
        self.settle_policy = settle_policy or FixedDelaySettle(self.config.settle)
        self.run_id = f"run_{uuid.uuid4().hex[:8]}"

    async def execute(self, portal_url: str, scenarios: list[TestScenario]) -> RunResult:
        """Run all scenarios and return ordered results with a summary.

        Raises:
            SessionFatalError: the portal could not be loaded or the browser
                died mid-run. No partial results are returned.
        """
        started_at = time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())
        start_time = time.time()
        total = len(scenarios)
        logger.info("Starting run %s against %s (%d scenarios)",
                    self.run_id, portal_url, total)

        aggregator = ResultAggregator()
        collector = None
        if self.config.screenshot_on_failure:
            evidence_dir = Path(self.config.output_dir) / self.run_id / "evidence"
            collector = EvidenceCollector(evidence_dir)

        async with BrowserSession(self.config.session) as session:
            dispatcher = ScenarioDispatcher(session, self.config, self.settle_policy, collector)

            logger.info("Navigating to %s...", portal_url)
            try:
                await session.navigate(portal_url, self.config.navigation_timeout_ms)
            except NavigationError as e:
                raise SessionFatalError(f"Initial portal load failed: {e}") from e
            await self._settle(dispatcher, PORTAL_LOAD)

            for index, scenario in enumerate(scenarios):
                logger.info("Executing [%d/%d]: %s", index + 1, total,
                            scenario.description or f"{scenario.action} {scenario.target}")
                result = await dispatcher.dispatch(scenario)
                aggregator.add(result)
                if result.passed:
                    logger.info("  PASS (%.1fs)", result.duration_seconds)
                else:
                    logger.info("  FAIL: %s", result.error)

                if index < total - 1:
                    await self._settle(dispatcher, BETWEEN_SCENARIOS)

        duration = time.time() - start_time
        completed_at = time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())
        run_result = aggregator.build(
            run_id=self.run_id,
            portal_url=portal_url,
            started_at=started_at,
            completed_at=completed_at,
            duration_seconds=duration,
        )
        logger.info("Execution complete: %d/%d passed (%.1fs)",
                    run_result.summary.passed, run_result.summary.total, duration)
        return run_result

    async def _settle(self, dispatcher: ScenarioDispatcher, point: str) -> None:
        # No scenario owns these waits, so any failure ends the run
        try:
            await dispatcher.settle(point)
        except SessionFatalError:
            raise
        except Exception as e:
            raise SessionFatalError(f"Settle ({point}) failed: {e}") from e

    def run(self, portal_url: str, scenarios: list[TestScenario]) -> RunResult:
        """Blocking wrapper around ``execute``."""
        return asyncio.run(self.execute(portal_url, scenarios))
