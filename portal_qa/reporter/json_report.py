"""JSON report output."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from portal_qa.models.test_result import RunResult


def build_report(run_result: RunResult) -> dict[str, Any]:
    """Render a run in the shape the API layer returns to its callers."""
    summary = run_result.summary
    return {
        "success": True,
        "runId": run_result.run_id,
        "portalUrl": run_result.portal_url,
        "startedAt": run_result.started_at,
        "completedAt": run_result.completed_at,
        "durationSeconds": run_result.duration_seconds,
        "allTestsPassed": run_result.all_passed,
        "results": {
            "total": summary.total,
            "passed": summary.passed,
            "failed": summary.failed,
            "tests": [
                {
                    "description": r.scenario.description,
                    "action": r.scenario.action,
                    "target": r.scenario.target,
                    "expected": r.scenario.expected_result,
                    "passed": r.passed,
                    "actual": r.actual_value,
                    "error": r.error,
                    "screenshot": r.screenshot,
                }
                for r in run_result.results
            ],
        },
    }


def build_error_report(error: Exception) -> dict[str, Any]:
    """Report body for a run that aborted before producing results."""
    return {"success": False, "error": str(error)}


def generate_json_report(report: dict[str, Any], output_path: Path) -> None:
    """Write a machine-readable JSON report."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        json.dump(report, f, indent=2, default=str)
