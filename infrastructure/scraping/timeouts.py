from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional


@dataclass(slots=True)
class ScrapeTimeouts:
    """Bounded waits for every browser stage, with env overrides."""
    navigation_ms: int
    body_wait_ms: int
    settle_ms: int
    eval_attempts: int
    eval_backoff_ms: int
    build_signal_ms: int
    scroll_steps: int
    scroll_step_px: int
    scroll_delay_ms: int
    executable_path: Optional[str] = None

    @classmethod
    def from_env(cls) -> "ScrapeTimeouts":
        """Build ScrapeTimeouts from environment variables."""
        def _int(name: str, default: int) -> int:
            try:
                return int(os.getenv(name, str(default)))
            except ValueError:
                return default

        return cls(
            navigation_ms=_int("SCRAPE_NAVIGATION_TIMEOUT_MS", 60_000),
            body_wait_ms=_int("SCRAPE_BODY_TIMEOUT_MS", 10_000),
            settle_ms=_int("SCRAPE_SETTLE_MS", 2_000),
            eval_attempts=_int("SCRAPE_EVAL_ATTEMPTS", 3),
            eval_backoff_ms=_int("SCRAPE_EVAL_BACKOFF_MS", 1_000),
            build_signal_ms=_int("SCRAPE_BUILD_SIGNAL_TIMEOUT_MS", 20_000),
            scroll_steps=_int("SCRAPE_SCROLL_STEPS", 20),
            scroll_step_px=_int("SCRAPE_SCROLL_STEP_PX", 400),
            scroll_delay_ms=_int("SCRAPE_SCROLL_DELAY_MS", 100),
            executable_path=os.getenv("BROWSER_EXECUTABLE_PATH") or None,
        )
