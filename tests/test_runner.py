"""Process handoff: TUI suspend/resume bracketing and launch failures."""

from __future__ import annotations

import unittest
from pathlib import Path
from unittest import mock

from gitsi.runner import DEFAULT_PAGER, ProcessRunner


class ProcessRunnerTests(unittest.TestCase):
    def setUp(self) -> None:
        self.events: list[str] = []
        self.runner = ProcessRunner(
            Path("/repo"),
            disable_tui_mode=lambda: self.events.append("disable"),
            enable_tui_mode=lambda: self.events.append("enable"),
        )

    def test_run_interactive_brackets_process_with_tui_mode_changes(self) -> None:
        def fake_run(argv, **kwargs):
            self.events.append("run")
            return mock.Mock(returncode=3)

        with mock.patch("gitsi.runner.subprocess.run", side_effect=fake_run) as run_mock:
            error = self.runner.run_interactive(["git", "commit"])

        self.assertIsNone(error)
        self.assertEqual(self.events, ["disable", "run", "enable"])
        self.assertEqual(run_mock.call_args.args, (["git", "commit"],))
        self.assertEqual(run_mock.call_args.kwargs["cwd"], Path("/repo"))
        self.assertFalse(run_mock.call_args.kwargs["check"])

    def test_launch_failure_is_reported_and_tui_restored(self) -> None:
        with mock.patch("gitsi.runner.subprocess.run", side_effect=FileNotFoundError("nope")):
            error = self.runner.run_interactive(["missing-tool"])

        self.assertIn("Failed to launch missing-tool", error)
        self.assertEqual(self.events, ["disable", "enable"])

    def test_external_command_is_split_and_prefixed(self) -> None:
        with mock.patch("gitsi.runner.subprocess.run") as run_mock:
            self.runner.run_external_command("log --oneline 'a b'")

        self.assertEqual(run_mock.call_args.args[0], ["git", "log", "--oneline", "a b"])

    def test_unbalanced_quotes_are_reported(self) -> None:
        with mock.patch("gitsi.runner.subprocess.run") as run_mock:
            error = self.runner.run_external_command("log 'oops")

        self.assertIn("Cannot run command", error)
        run_mock.assert_not_called()
        self.assertEqual(self.events, [])

    def test_page_feeds_text_to_pager(self) -> None:
        with mock.patch("gitsi.runner.subprocess.run") as run_mock:
            self.runner.page("diff text", DEFAULT_PAGER)

        self.assertEqual(run_mock.call_args.args[0], ["less", "-RSX", "-+F"])
        self.assertEqual(run_mock.call_args.kwargs["input"], "diff text")
        self.assertTrue(run_mock.call_args.kwargs["text"])


if __name__ == "__main__":
    unittest.main()
