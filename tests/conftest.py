"""Pytest configuration and shared fixtures."""

from pathlib import Path
from unittest.mock import AsyncMock, Mock

import pytest
from playwright.async_api import Page

from portal_qa.executor.session import BrowserSession
from portal_qa.executor.settle import NoSettle
from portal_qa.models.config import RunnerConfig, SessionConfig, SettleConfig, ViewportConfig
from portal_qa.models.scenario import TestScenario
from portal_qa.models.test_result import RunResult, RunSummary, TestResult


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def viewport_config() -> ViewportConfig:
    """Create a test viewport configuration."""
    return ViewportConfig(width=1280, height=720)


@pytest.fixture
def runner_config(viewport_config: ViewportConfig, tmp_path: Path) -> RunnerConfig:
    """Create a runner config with no settle delays."""
    return RunnerConfig(
        session=SessionConfig(headless=True, viewport=viewport_config),
        settle=SettleConfig(
            click_ms=0, hover_ms=0, navigate_ms=0,
            fill_input_ms=0, portal_load_ms=0, between_scenarios_ms=0,
        ),
        navigation_timeout_ms=5000,
        output_dir=str(tmp_path / "reports"),
    )


@pytest.fixture
def temp_config_file(runner_config: RunnerConfig, tmp_path: Path) -> Path:
    """Create a temporary config file."""
    config_file = tmp_path / "portal-qa.json"
    runner_config.save(config_file)
    return config_file


# ============================================================================
# Scenario Fixtures
# ============================================================================


@pytest.fixture
def style_scenario() -> TestScenario:
    return TestScenario(
        action="check_style",
        target="#btn",
        expected_result="background-color should be yellow",
        description="Button background is yellow",
    )


@pytest.fixture
def click_scenario() -> TestScenario:
    return TestScenario(
        action="click",
        target="#btn",
        expected_result="button is clicked",
        description="Click the button",
    )


@pytest.fixture
def text_scenario() -> TestScenario:
    return TestScenario(
        action="check_text",
        target="h1",
        expected_result='text should contain "Welcome"',
        description="Heading greets the user",
    )


@pytest.fixture
def test_result(style_scenario: TestScenario) -> TestResult:
    return TestResult(
        scenario=style_scenario,
        passed=True,
        actual_value="rgb(255, 255, 0)",
        duration_seconds=0.12,
    )


@pytest.fixture
def run_result(style_scenario: TestScenario, click_scenario: TestScenario) -> RunResult:
    return RunResult(
        run_id="run_0001abcd",
        portal_url="https://portal.example.com",
        started_at="2025-01-01T00:00:00Z",
        completed_at="2025-01-01T00:00:05Z",
        duration_seconds=5.0,
        summary=RunSummary(total=2, passed=1, failed=1),
        results=[
            TestResult(scenario=style_scenario, passed=True, actual_value="rgb(255, 255, 0)"),
            TestResult(scenario=click_scenario, passed=False, error='Element "#btn" not found'),
        ],
    )


# ============================================================================
# Mock Fixtures
# ============================================================================


def make_element(text: str = "", computed: str = "") -> AsyncMock:
    """Create a mock ElementHandle with text content and a computed style value."""
    element = AsyncMock()
    element.text_content.return_value = text
    element.evaluate.return_value = computed
    return element


@pytest.fixture
def element_factory():
    """Fixture that provides the make_element function."""
    return make_element


@pytest.fixture
def mock_page() -> AsyncMock:
    """Create a mock Playwright page."""
    page = AsyncMock(spec=Page)
    page.url = "https://portal.example.com/"
    page.on = Mock()  # Sync callback registration
    page.query_selector = AsyncMock(return_value=None)
    page.goto = AsyncMock()
    page.screenshot = AsyncMock()
    page.wait_for_timeout = AsyncMock()
    return page


@pytest.fixture
def live_session(mock_page: AsyncMock) -> BrowserSession:
    """A BrowserSession that already holds the mock page."""
    session = BrowserSession()
    session.page = mock_page
    return session


@pytest.fixture
def no_settle() -> NoSettle:
    return NoSettle()


# ============================================================================
# Temporary Directory Fixtures
# ============================================================================


@pytest.fixture
def temp_evidence_dir(tmp_path: Path) -> Path:
    """Create a temporary evidence directory."""
    evidence_dir = tmp_path / "evidence"
    evidence_dir.mkdir()
    return evidence_dir
