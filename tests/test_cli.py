"""
Tests for the orchestrator and CLI entry points.

These tests focus on:
- task isolation (a failing task does not stop the next one)
- which tasks run by default and with --task/--all
- exit codes of the small helper commands
"""

import io
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path
from unittest import mock

from duscrape import cli
from duscrape.config import ScrapeConfig
from duscrape.fetch import FetchError
from duscrape.storage import write_json


class TestRunTasks(unittest.TestCase):
    def test_failure_in_one_task_does_not_stop_others(self) -> None:
        ran: list[str] = []

        def failing(config: ScrapeConfig) -> Path:
            ran.append("bulletin")
            raise FetchError("https://bulletin.du.edu/", "Name or service not known")

        def ok(name: str):
            def task(config: ScrapeConfig) -> Path:
                ran.append(name)
                return Path(config.output_dir) / f"{name}.json"

            return task

        registry = {"bulletin": failing, "athletics": ok("athletics"), "calendar": ok("calendar")}

        with tempfile.TemporaryDirectory() as d:
            config = ScrapeConfig(output_dir=Path(d) / "results", tasks=("calendar", "bulletin", "athletics"))
            results = cli.run_tasks(config, tasks=registry)
            self.assertTrue((Path(d) / "results").is_dir())

        self.assertEqual(ran, ["bulletin", "athletics", "calendar"])
        self.assertEqual(results, {"bulletin": False, "athletics": True, "calendar": True})

    def test_unexpected_exception_is_contained(self) -> None:
        def broken(config: ScrapeConfig) -> Path:
            raise ValueError("boom")

        with tempfile.TemporaryDirectory() as d:
            config = ScrapeConfig(output_dir=Path(d), tasks=("athletics",))
            results = cli.run_tasks(config, tasks={"athletics": broken})

        self.assertEqual(results, {"athletics": False})

    def test_output_dir_that_is_a_file_fails_tasks_without_raising(self) -> None:
        ran: list[str] = []

        with tempfile.TemporaryDirectory() as d:
            blocker = Path(d) / "results"
            blocker.write_text("not a directory", encoding="utf-8")
            config = ScrapeConfig(output_dir=blocker, tasks=("athletics",))
            results = cli.run_tasks(config, tasks={"athletics": lambda c: ran.append("athletics")})

        self.assertEqual(results, {"athletics": False})
        self.assertEqual(ran, [])

    def test_unknown_task_name_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            ScrapeConfig(tasks=("weather",))


class TestCLI(unittest.TestCase):
    def _run(self, argv: list[str], registry: dict) -> int:
        with mock.patch.dict(cli.TASKS, registry):
            with self.assertRaises(SystemExit) as ctx:
                cli.main(argv)
        return ctx.exception.code

    def test_default_runs_athletics_only(self) -> None:
        ran: list[str] = []
        registry = {name: (lambda c, n=name: ran.append(n)) for name in ("bulletin", "athletics", "calendar")}

        with tempfile.TemporaryDirectory() as d:
            code = self._run(["run", "--out-dir", d], registry)

        self.assertEqual(code, 0)
        self.assertEqual(ran, ["athletics"])

    def test_all_and_task_flags(self) -> None:
        ran: list[str] = []
        registry = {name: (lambda c, n=name: ran.append(n)) for name in ("bulletin", "athletics", "calendar")}

        with tempfile.TemporaryDirectory() as d:
            self._run(["run", "--all", "--out-dir", d], registry)
            self.assertEqual(ran, ["bulletin", "athletics", "calendar"])

            ran.clear()
            self._run(["run", "-t", "calendar", "-t", "bulletin", "-t", "calendar", "--out-dir", d], registry)
            self.assertEqual(ran, ["bulletin", "calendar"])

    def test_run_passes_year_to_config(self) -> None:
        seen: list[ScrapeConfig] = []
        registry = {"calendar": seen.append}

        with tempfile.TemporaryDirectory() as d:
            code = self._run(["run", "-t", "calendar", "--year", "2026", "--delay", "0", "--out-dir", d], registry)

        self.assertEqual(code, 0)
        self.assertEqual(seen[0].year, 2026)
        self.assertEqual(seen[0].delay_seconds, 0)
        self.assertEqual(seen[0].output_dir, Path(d))

    def test_failed_task_gives_exit_code_1(self) -> None:
        def failing(config: ScrapeConfig) -> Path:
            raise FetchError("https://denverpioneers.com/index.aspx", "Forbidden", status_code=403)

        with tempfile.TemporaryDirectory() as d:
            code = self._run(["run", "--out-dir", d], {"athletics": failing})

        self.assertEqual(code, 1)

    def test_unwritable_output_dir_gives_exit_code_1(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            blocker = Path(d) / "results"
            blocker.write_text("not a directory", encoding="utf-8")
            code = self._run(["run", "--out-dir", str(blocker)], {"athletics": lambda c: None})

        self.assertEqual(code, 1)

    def test_negative_delay_is_a_usage_error(self) -> None:
        with self.assertRaises(SystemExit) as ctx:
            cli.main(["run", "--delay", "-1"])
        self.assertEqual(ctx.exception.code, 2)

    def test_months_lists_twelve_windows(self) -> None:
        buf = io.StringIO()
        with mock.patch.object(cli.console, "console", cli.console.Console(file=buf, width=200)):
            with self.assertRaises(SystemExit) as ctx:
                cli.main(["months", "--year", "2025"])
        self.assertEqual(ctx.exception.code, 0)
        lines = [line for line in buf.getvalue().splitlines() if line.strip()]
        self.assertEqual(len(lines), 12)
        self.assertIn("2025-12-01 -> 2026-01-01", lines[-1])

    def test_show_missing_file_exits_nonzero(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            with self.assertRaises(SystemExit) as ctx:
                cli.main(["show", str(Path(d) / "missing.json")])
        self.assertNotEqual(ctx.exception.code, 0)

    def test_show_existing_file(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = write_json({"courses": []}, Path(d) / "bulletin.json")
            with redirect_stdout(io.StringIO()):
                with self.assertRaises(SystemExit) as ctx:
                    cli.main(["show", str(p)])
        self.assertEqual(ctx.exception.code, 0)


if __name__ == "__main__":
    unittest.main()
