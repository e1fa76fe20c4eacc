"""Error taxonomy for scenario execution.

Everything except ``SessionFatalError`` is scoped to a single scenario and
ends up as a failed ``TestResult``. ``SessionFatalError`` aborts the run.
"""

from __future__ import annotations


class ScenarioExecutionError(Exception):
    """Base class for all execution engine errors."""


class ElementNotFoundError(ScenarioExecutionError):
    """The target selector resolved to nothing."""

    def __init__(self, selector: str):
        self.selector = selector
        super().__init__(f'Element "{selector}" not found')


class UnsupportedActionError(ScenarioExecutionError):
    """The scenario action is outside the supported set."""

    def __init__(self, action: str):
        self.action = action
        super().__init__(f'Unsupported action: "{action}"')


class ExpectationParseError(ScenarioExecutionError):
    """The expectation string does not match the grammar for its action."""

    def __init__(self, expectation: str, pattern: str):
        self.expectation = expectation
        self.pattern = pattern
        super().__init__(
            f'Could not parse expected result "{expectation}". Use: {pattern}'
        )


class NavigationError(ScenarioExecutionError):
    """Navigation timed out or hit a network failure."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Navigation to {url} failed: {reason}")


class SessionFatalError(ScenarioExecutionError):
    """The browser session itself failed. The whole run is aborted."""
