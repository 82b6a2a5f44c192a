"""
Run configuration.

One ScrapeConfig is built per run (by the CLI or by tests) and handed to the
orchestrator and to every scrape task. Nothing here is read from the
environment.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

TASK_NAMES: Tuple[str, ...] = ("bulletin", "athletics", "calendar")

# Only the athletics task was enabled in the original runs.
DEFAULT_TASKS: Tuple[str, ...] = ("athletics",)

DEFAULT_OUTPUT_DIR = Path("results")
DEFAULT_YEAR = 2025
DEFAULT_DELAY_SECONDS = 0.5


@dataclass(frozen=True)
class ScrapeConfig:
    """
    Settings for one scraping run.

    timeout=None leaves the request timeout to requests' own default.
    """

    output_dir: Path = DEFAULT_OUTPUT_DIR
    tasks: Tuple[str, ...] = DEFAULT_TASKS
    year: int = DEFAULT_YEAR
    delay_seconds: float = DEFAULT_DELAY_SECONDS
    timeout: Optional[float] = None
    show_progress: bool = field(default=False, compare=False)

    def __post_init__(self) -> None:
        unknown = [t for t in self.tasks if t not in TASK_NAMES]
        if unknown:
            raise ValueError(f"Unknown task(s): {', '.join(unknown)}")
        if self.delay_seconds < 0:
            raise ValueError("delay_seconds must be >= 0")

    def output_path(self, filename: str) -> Path:
        return Path(self.output_dir) / filename
