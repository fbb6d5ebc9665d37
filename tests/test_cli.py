from __future__ import annotations

from contextlib import redirect_stdout
from pathlib import Path
import io
import tempfile
import textwrap
import unittest
from unittest.mock import patch

from core.command_runner import CommandResult
from cargo_cmd import cli


class CmdCommandTests(unittest.TestCase):
    def setUp(self) -> None:
        self.temp_dir = tempfile.TemporaryDirectory()
        self.workspace = Path(self.temp_dir.name)
        member_dir = self.workspace / "crates" / "core"
        member_dir.mkdir(parents=True)
        (member_dir / "Cargo.toml").write_text(
            textwrap.dedent(
                """
                [package]
                name = "core"

                [package.metadata.commands]
                test = "cargo test -p core"
                """
            )
        )
        self.manifest = self.workspace / "Cargo.toml"
        self.manifest.write_text(
            textwrap.dedent(
                """
                [package]
                name = "app"

                [package.metadata.commands]
                pretest = "echo preparing"
                test = "cargo test -p app"
                fail = "exit 3"

                [workspace]
                members = ["crates/*"]
                """
            )
        )

    def tearDown(self) -> None:
        self.temp_dir.cleanup()

    def _main(self, *argv: str) -> tuple[int, str, str]:
        out = io.StringIO()
        with redirect_stdout(out), patch("sys.stderr", new=io.StringIO()) as err:
            code = cli.main(["cmd", "--manifest-path", str(self.manifest), *argv])
        return code, out.getvalue(), err.getvalue()

    def test_dry_run_prints_commands_without_running(self) -> None:
        with patch("cargo_cmd.cli.SubprocessCommandRunner") as runner_cls:
            code, output, _ = self._main("--dry-run", "test", "--", "--nocapture")
        runner_cls.assert_not_called()
        self.assertEqual(code, 0)
        self.assertEqual(
            [line for line in output.splitlines() if line.startswith("[dry-run]")],
            [
                "[dry-run] 3 command(s) would run for 'test'",
                "[dry-run] pretest echo preparing --nocapture",
                "[dry-run] test cargo test -p app --nocapture",
                "[dry-run] test cargo test -p core --nocapture",
            ],
        )

    def test_runs_commands_through_subprocess_runner(self) -> None:
        with patch("cargo_cmd.cli.SubprocessCommandRunner") as runner_cls:
            runner = runner_cls.return_value
            runner.run.side_effect = lambda command, **_: CommandResult(command, 0)
            code, output, _ = self._main("test", "--quiet")
        self.assertEqual(code, 0)
        self.assertEqual(
            [call.args[0] for call in runner.run.call_args_list],
            ["echo preparing --quiet", "cargo test -p app --quiet", "cargo test -p core --quiet"],
        )
        self.assertIn("[pretest]", output)
        self.assertIn("> cargo test -p core --quiet", output)

    def test_exit_code_of_failing_command_is_returned(self) -> None:
        code, output, _ = self._main("fail")
        self.assertEqual(code, 3)
        self.assertIn("> exit 3", output)

    def test_missing_command_reports_error(self) -> None:
        code, _, errors = self._main("deploy")
        self.assertEqual(code, 1)
        self.assertIn('[ERROR] Command "deploy" not found in Cargo.toml', errors)

    def test_info_level_logs_extra_arguments(self) -> None:
        code, output, _ = self._main("--log", "info", "--dry-run", "test", "--", "--nocapture", "-q")
        self.assertEqual(code, 0)
        self.assertIn("[INFO] Appending extra arguments: --nocapture -q", output)
        self.assertNotIn("[DEBUG]", output)

    def test_log_none_silences_errors(self) -> None:
        code, _, errors = self._main("--log", "none", "deploy")
        self.assertEqual(code, 1)
        self.assertEqual(errors, "")

    def test_verbose_logs_manifest_shape(self) -> None:
        code, output, _ = self._main("-v", "--dry-run", "test")
        self.assertEqual(code, 0)
        self.assertIn("[DEBUG] Loaded root package with 1 workspace member(s)", output)
        self.assertIn("[DEBUG] Resolved 3 command(s) for 'test'", output)

    def test_malformed_manifest_reports_error(self) -> None:
        self.manifest.write_text('[dependencies]\nserde = "1"\n')
        code, _, errors = self._main("test")
        self.assertEqual(code, 1)
        self.assertIn("neither package nor workspace", errors)

    def test_defaults_to_manifest_in_current_directory(self) -> None:
        out = io.StringIO()
        with patch("cargo_cmd.cli.Path.cwd", return_value=self.workspace), redirect_stdout(out):
            code = cli.main(["cmd", "--dry-run", "test"])
        self.assertEqual(code, 0)
        self.assertIn("[dry-run] test cargo test -p core", out.getvalue())


if __name__ == "__main__":
    unittest.main()
