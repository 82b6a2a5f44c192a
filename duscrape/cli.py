"""
CLI (Command Line Interface) and task orchestration.

    duscrape run                      # default task set (athletics)
    duscrape run --all                # bulletin, athletics and calendar
    duscrape run --task calendar --year 2026 --out-dir out/
    duscrape months --year 2025       # show the calendar month windows
    duscrape show results/bulletin.json

Tasks always run in the order bulletin -> athletics -> calendar. Each task is
isolated: if one fails, the failure is reported and the next one still runs.
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Callable, Dict, Iterable, Optional

from duscrape import console
from duscrape.athletics import scrape_athletic_events
from duscrape.bulletin import scrape_bulletin
from duscrape.config import (
    DEFAULT_DELAY_SECONDS,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_TASKS,
    DEFAULT_YEAR,
    TASK_NAMES,
    ScrapeConfig,
)
from duscrape.events_calendar import build_month_windows, listing_url, scrape_calendar_events
from duscrape.fetch import FetchError
from duscrape.storage import read_json

TASKS: Dict[str, Callable[[ScrapeConfig], Path]] = {
    "bulletin": scrape_bulletin,
    "athletics": scrape_athletic_events,
    "calendar": scrape_calendar_events,
}

TASK_LABELS = {
    "bulletin": "bulletin",
    "athletics": "athletic events",
    "calendar": "calendar events",
}


# ---------------------------------------------------------------------------
# Orchestration
# ---------------------------------------------------------------------------


def run_tasks(
    config: ScrapeConfig,
    tasks: Optional[Dict[str, Callable[[ScrapeConfig], Path]]] = None,
) -> Dict[str, bool]:
    """
    Run every task enabled in config and return {task name: succeeded}.

    Never raises for a failing task; the error is printed instead.
    """
    registry = tasks if tasks is not None else TASKS
    results: Dict[str, bool] = {}

    try:
        Path(config.output_dir).mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        console.error(f"Error creating output directory {config.output_dir}: {exc}")
        return {name: False for name in TASK_NAMES if name in config.tasks}

    for name in TASK_NAMES:
        if name not in config.tasks:
            continue
        label = TASK_LABELS.get(name, name)
        try:
            registry[name](config)
        except FetchError as exc:
            console.error(f"Error scraping {label}: {exc}")
            results[name] = False
        except OSError as exc:
            console.error(f"Error writing {label} results: {exc}")
            results[name] = False
        except Exception as exc:  # keep going with the remaining tasks
            console.error(f"Error scraping {label}: {exc!r}")
            results[name] = False
        else:
            results[name] = True

    return results


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def _selected_tasks(args: argparse.Namespace) -> tuple[str, ...]:
    if args.all:
        return TASK_NAMES
    if args.task:
        # keep the fixed order, drop duplicates
        return tuple(t for t in TASK_NAMES if t in set(args.task))
    return DEFAULT_TASKS


def _cmd_run(args: argparse.Namespace) -> int:
    config = ScrapeConfig(
        output_dir=args.out_dir,
        tasks=_selected_tasks(args),
        year=args.year,
        delay_seconds=args.delay,
        timeout=args.timeout,
        show_progress=True,
    )
    results = run_tasks(config)

    failed = [name for name, ok in results.items() if not ok]
    if failed:
        console.warn(f"Finished with errors in: {', '.join(failed)}")
        return 1
    return 0


def _cmd_months(args: argparse.Namespace) -> int:
    for window in build_month_windows(args.year):
        console.info(f"{window.start} -> {window.end}  {listing_url(window)}")
    return 0


def _cmd_show(args: argparse.Namespace) -> int:
    path = Path(args.file)
    try:
        data = read_json(path)
    except FileNotFoundError:
        console.error(f"No such file: {path}")
        return 1
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as exc:
        console.error(f"Could not read {path}: {exc}")
        return 1
    console.console.print_json(data=data)
    return 0


def _non_negative_float(value: str) -> float:
    number = float(value)
    if number < 0:
        raise argparse.ArgumentTypeError("must be >= 0")
    return number


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="duscrape", description="University of Denver scrapers")
    sub = parser.add_subparsers(dest="command", required=True)

    p_run = sub.add_parser("run", help="Run scraping tasks")
    p_run.add_argument(
        "--task",
        "-t",
        action="append",
        choices=TASK_NAMES,
        help="Task to run (repeatable). Default: " + ", ".join(DEFAULT_TASKS),
    )
    p_run.add_argument("--all", action="store_true", help="Run all tasks")
    p_run.add_argument("--out-dir", type=Path, default=DEFAULT_OUTPUT_DIR, help="Output directory")
    p_run.add_argument("--year", type=int, default=DEFAULT_YEAR, help="Calendar year to scrape")
    p_run.add_argument(
        "--delay",
        type=_non_negative_float,
        default=DEFAULT_DELAY_SECONDS,
        help="Pause in seconds between calendar months",
    )
    p_run.add_argument("--timeout", type=_non_negative_float, default=None, help="Request timeout in seconds")

    p_months = sub.add_parser("months", help="Show calendar month windows")
    p_months.add_argument("--year", type=int, default=DEFAULT_YEAR)

    p_show = sub.add_parser("show", help="Pretty-print a result file")
    p_show.add_argument("file", type=str)

    return parser


def main(argv: Optional[Iterable[str]] = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    if args.command == "run":
        raise SystemExit(_cmd_run(args))
    if args.command == "months":
        raise SystemExit(_cmd_months(args))
    if args.command == "show":
        raise SystemExit(_cmd_show(args))

    raise SystemExit(2)
