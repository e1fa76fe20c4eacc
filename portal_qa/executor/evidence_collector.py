"""Evidence collector: captures screenshots of failed scenarios."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from playwright.async_api import Page

logger = logging.getLogger(__name__)

_UNSAFE_CHARS_RE = re.compile(r"[^a-z0-9_-]+")


class EvidenceCollector:
    """Writes failure screenshots into an evidence directory."""

    def __init__(self, evidence_dir: Path):
        self.evidence_dir = evidence_dir
        self.evidence_dir.mkdir(parents=True, exist_ok=True)
        self._screenshot_count = 0

    async def take_screenshot(self, page: Page, label: str = "") -> str:
        """Capture a viewport screenshot and return the file path ("" on failure)."""
        self._screenshot_count += 1
        label = _UNSAFE_CHARS_RE.sub("_", label.lower()).strip("_")
        name = f"screenshot_{label}_{self._screenshot_count}.png" if label else f"screenshot_{self._screenshot_count}.png"
        path = self.evidence_dir / name
        try:
            await page.screenshot(path=str(path), full_page=False)
            return str(path)
        except Exception as e:
            logger.warning("Screenshot failed: %s", e)
            return ""
