"""Result aggregation: ordered results plus summary counts."""

from __future__ import annotations

from portal_qa.models.test_result import RunResult, RunSummary, TestResult


class ResultAggregator:
    """Accumulates per-scenario results in input order."""

    def __init__(self) -> None:
        self._results: list[TestResult] = []

    def add(self, result: TestResult) -> None:
        self._results.append(result)

    @property
    def results(self) -> tuple[TestResult, ...]:
        return tuple(self._results)

    @property
    def summary(self) -> RunSummary:
        passed = sum(1 for r in self._results if r.passed)
        return RunSummary(
            total=len(self._results),
            passed=passed,
            failed=len(self._results) - passed,
        )

    def build(
        self,
        run_id: str,
        portal_url: str,
        started_at: str,
        completed_at: str,
        duration_seconds: float = 0.0,
    ) -> RunResult:
        return RunResult(
            run_id=run_id,
            portal_url=portal_url,
            started_at=started_at,
            completed_at=completed_at,
            duration_seconds=round(duration_seconds, 2),
            summary=self.summary,
            results=list(self._results),
        )
